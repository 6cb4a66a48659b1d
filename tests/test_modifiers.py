import numpy as np
import pytest

from limacon_templates.errors import InvalidParameters
from limacon_templates.nonjax.intensity_functions import PolarGaussian
from limacon_templates.nonjax.profiles2D import (
    Convolved, ImageModel, MLimacon, ModifiedModel, Rotate, Shift, Stretch,
    build_dbl_gaussian_limacon_basic, build_gaussian_limacon_basic,
    convolved, flux, intensity_point, modify, radial_extent
)


def test_stretch_preserves_flux_law(grid):
    X, Y = grid
    base = build_dbl_gaussian_limacon_basic(0.4, 0.05, 0.1)
    stretched = modify(base, Stretch(2.0, 2.0))
    assert np.allclose(
        intensity_point(stretched, 2 * X, 2 * Y), 0.25 * intensity_point(base, X, Y)
    ), "Stretch(2, 2) at (2x, 2y) should be a quarter of the base at (x, y)"


def test_stretch_anisotropic():
    base = build_gaussian_limacon_basic(0.0, 0.1)
    model = modify(base, Stretch(2.0, 0.5))
    assert np.isclose(intensity_point(model, 2.0, 0.0), 1.0), "ridge along X is at 2"
    assert np.isclose(intensity_point(model, 0.0, 0.5), 1.0), "ridge along Y is at 0.5"
    assert Stretch(3.0) == Stretch(3.0, 3.0), "single factor should stretch isotropically"
    assert Stretch(2.0, 4.0).intensity_scale == 0.125


@pytest.mark.parametrize("sx, sy", [(0.0, 1.0), (1.0, -1.0), (-2.0, None), (np.nan, 1.0)])
def test_stretch_rejects_bad_factors(sx, sy):
    with pytest.raises(InvalidParameters):
        Stretch(sx, sy)


def test_rotate():
    base = build_gaussian_limacon_basic(0.5, 0.05)
    # bulge on +Y at radius 1.5; rotating by +pi/2 moves it to -X
    model = modify(base, Rotate(np.pi / 2))
    assert np.isclose(intensity_point(model, -1.5, 0.0), 1.0)
    assert intensity_point(model, 0.0, 1.5) < 1e-6
    x = np.linspace(-2, 2, 9)
    assert np.allclose(
        intensity_point(modify(base, Rotate(2 * np.pi)), x, x[::-1]), intensity_point(base, x, x[::-1])
    ), "full turn should be the identity"


def test_shift():
    base = build_gaussian_limacon_basic(0.0, 0.1)
    model = modify(base, Shift(1.0, -2.0))
    assert np.isclose(intensity_point(model, 2.0, -2.0), 1.0)
    assert np.isclose(intensity_point(model, 1.0, -1.0), 1.0)
    assert intensity_point(model, 0.0, 0.0) < 1e-6


def test_modify_order():
    base = build_gaussian_limacon_basic(0.0, 0.1)
    model = modify(base, Stretch(2.0), Shift(3.0, 0.0))
    assert isinstance(model, ModifiedModel) and isinstance(model.modifier, Shift)
    assert isinstance(model.model.modifier, Stretch), "first modifier should be innermost"
    assert np.isclose(intensity_point(model, 5.0, 0.0), 0.25), "stretch about the origin, then shift"
    assert modify(base) is base


def test_modified_extent_and_flux():
    ring = MLimacon([0.1], [0.2], 0.3)
    model = modify(ring, Stretch(2.0, 3.0), Rotate(0.4), Shift(3.0, 4.0))
    assert radial_extent(model) == pytest.approx(3.0 * 3.0 + 5.0)
    assert flux(model) == 1.0, "geometric modifiers should not change flux"


def test_modified_model_requires_capabilities():
    with pytest.raises(InvalidParameters):
        ModifiedModel(build_gaussian_limacon_basic(0.1, 0.1), PolarGaussian(0.1))
    with pytest.raises(InvalidParameters):
        ModifiedModel(PolarGaussian(0.1), Shift(0.0, 0.0))


def test_convolved_is_a_record():
    ring = modify(MLimacon([0.1], [0.0], 0.2), Stretch(2.0))
    kernel = MLimacon([0.0], [0.0], 0.0)
    model = convolved(ring, kernel)
    assert isinstance(model, Convolved) and model.convolvable
    assert radial_extent(model) == pytest.approx(6.0 + 3.0)
    assert flux(model) == 1.0
    with pytest.raises(NotImplementedError):
        intensity_point(model, 0.0, 0.0)
    with pytest.raises(InvalidParameters):
        convolved(ring, Shift(0.0, 0.0))


class _FrameworkKernel:
    """Blurring kernel owned by an outside imaging framework."""

    def radial_extent(self):
        return 0.5

    def flux(self):
        return 2.0


def test_convolved_accepts_framework_kernel():
    ring = MLimacon([0.1], [0.0], 0.2)
    model = convolved(ring, _FrameworkKernel())
    assert radial_extent(model) == pytest.approx(3.5)
    assert flux(model) == 2.0
    with pytest.raises(InvalidParameters):
        convolved(_FrameworkKernel(), ring)


def test_incomplete_model_cannot_be_built():
    class NoExtent(ImageModel):
        def intensity_point(self, X, Y):
            return 0.0

    with pytest.raises(TypeError):
        NoExtent()
