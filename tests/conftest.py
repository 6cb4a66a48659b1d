import logging

import numpy as np
import pytest

from limacon_templates.config import lt_logger


@pytest.fixture
def grid():
    """64x64 pixel grid spanning [-2, 2] in both directions."""
    x = np.linspace(-2.0, 2.0, 64)
    return np.meshgrid(x, x)


@pytest.fixture
def angles():
    return np.linspace(-3 * np.pi, 3 * np.pi, 257)


@pytest.fixture
def debug_logging():
    level = lt_logger.level
    lt_logger.setLevel(logging.DEBUG)
    yield
    lt_logger.setLevel(level)


@pytest.fixture
def propagate_logs():
    """Let caplog (attached to the root logger) see package messages."""
    lt_logger.propagate = True
    yield
    lt_logger.propagate = False
