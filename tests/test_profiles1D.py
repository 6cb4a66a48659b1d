import logging

import numpy as np
import pytest

from limacon_templates.errors import InvalidParameters
from limacon_templates.nonjax.profiles1D import LimaconCurve, Limacon_Profile_1D, radial_point
from limacon_templates.nonjax.profiles2D import build_gaussian_limacon_full, intensity_point

######################################################################
# Limacon curve
######################################################################


def test_limacon_periodic(angles):
    curve = LimaconCurve(0.4)
    assert np.allclose(
        radial_point(curve, angles), radial_point(curve, angles + 2 * np.pi)
    ), "limacon radius should be 2pi periodic"


def test_limacon_unit_circle(angles):
    assert np.all(
        radial_point(LimaconCurve(0.0), angles) == 1.0
    ), "lam = 0 limacon should be the unit circle"


def test_limacon_values():
    curve = LimaconCurve(0.5)
    assert radial_point(curve, 0.0) == 1.5, "limacon maximum should sit at phi = 0"
    assert np.isclose(radial_point(curve, np.pi), 0.5), "limacon minimum should sit at phi = pi"
    assert np.isclose(radial_point(curve, np.pi / 2), 1.0), "limacon should cross 1 at phi = pi/2"
    assert radial_point(curve, np.zeros((3, 4))).shape == (3, 4), "shape should be preserved"


def test_limacon_is_immutable():
    curve = LimaconCurve(0.2)
    with pytest.raises(AttributeError):
        curve.lam = 0.3


def test_limacon_inner_loop_warns(caplog, propagate_logs):
    with caplog.at_level(logging.WARNING, logger="limacon_templates"):
        curve = LimaconCurve(1.5)
    assert "inner loop" in caplog.text, "|lam| > 1 should be reported"
    assert radial_point(curve, np.pi) == pytest.approx(-0.5), "negative radii are not clamped"


def test_limacon_rejects_non_numbers():
    with pytest.raises(InvalidParameters):
        LimaconCurve("wide")

######################################################################
# Contour sampling
######################################################################


def test_contour_unit_circle():
    x, y = Limacon_Profile_1D(0.0, n_points=50)
    assert x.shape == (50,), "contour should have n_points samples"
    assert np.allclose(np.hypot(x, y), 1.0), "lam = 0 contour should be the unit circle"
    assert np.isclose(x[0], x[-1]) and np.isclose(y[0], y[-1]), "contour should close with include_end"


def test_contour_polar_output():
    r, phi = Limacon_Profile_1D(0.5, return_type="polar", include_end=False, n_points=8)
    assert np.allclose(r, 1.0 + 0.5 * np.cos(phi)), "polar output should follow the limacon law"
    with pytest.raises(ValueError):
        Limacon_Profile_1D(0.5, return_type="bogus")


def test_contour_lies_on_template_ridge():
    lam1, lam2, phi, x0, y0 = 2.0, 0.4, 0.7, 0.3, -0.5
    x, y = Limacon_Profile_1D(lam2, r0=lam1, theta_rot=phi, x0=x0, y0=y0, n_points=40)
    model = build_gaussian_limacon_full(lam1, lam2, 0.1, phi, x0, y0)
    peak = 1.0 / lam1 ** 2
    assert np.allclose(
        intensity_point(model, x, y), peak
    ), "sampled contour should trace the template's ridge"
