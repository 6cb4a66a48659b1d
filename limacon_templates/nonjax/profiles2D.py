"""
2D profiles: evaluate template intensities on a grid (X, Y) by converting
pixels to polar form and composing curve, radial and azimuthal profiles,
plus the analytic thin Fourier ring and the geometric modifiers that wrap
either of them.

Every model answers intensity_point(X, Y), radial_extent() and flux().
Evaluation is pure and vectorized; X and Y may be scalars or arrays of any
broadcastable shape, so a whole image is one call. NaN/inf coordinates
propagate into the output; the origin evaluates with phi = atan2(0, 0) = 0.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from limacon_templates.config import lt_dtype, lt_logger
from limacon_templates.errors import InvalidParameters
from limacon_templates.nonjax.intensity_functions import (
    AzimuthalUniform, PolarDblGaussian, PolarGaussian
)
from limacon_templates.nonjax.profiles1D import LimaconCurve
from limacon_templates.nonjax.tools import (
    XY2RPHI, XY2RTHETA_MLIMACON, check_positive, mlimacon_ring,
    rotate_coordinates, shift_coordinates, stretch_coordinates
)

# Full width of the MLimacon annulus in units of the (unstretched) ring radius
MLIMACON_DR = 0.02


class ImageModel(ABC):
    """Shared interface of every evaluable model."""
    convolvable = True

    @abstractmethod
    def intensity_point(self, X, Y):
        ...

    @abstractmethod
    def radial_extent(self):
        ...

    def flux(self):
        raise NotImplementedError("%s has no closed-form flux." % type(self).__name__)


def _require(obj, method, role):
    if not callable(getattr(obj, method, None)):
        raise InvalidParameters("%s %r does not provide %s()." % (role, obj, method))

# -------------------- Polar template --------------------
@dataclass(frozen=True)
class PolarTemplate(ImageModel):
    """
    A flexible ring template formed by the product of a radial and an
    azimuthal brightness profile around a polar curve.

    Steps:
      1) r = hypot(X, Y), phi = ringphase(X, Y).
      2) r_curve = polarcurve.radial_point(phi).
      3) Return radial.radial_profile(r, r_curve) * azimuthal.azimuthal_profile(phi).

    Example:
        limacon = modify(
            PolarTemplate(PolarGaussian(0.1), AzimuthalUniform(), LimaconCurve(0.5)),
            Stretch(10.0), Shift(1.0, 2.0)
        )
    """
    radial: object
    azimuthal: object
    polarcurve: object

    def __post_init__(self):
        _require(self.radial, "radial_profile", "radial profile")
        _require(self.azimuthal, "azimuthal_profile", "azimuthal profile")
        _require(self.polarcurve, "radial_point", "polar curve")

    def intensity_point(self, X, Y):
        R, PHI = XY2RPHI(X, Y)
        R_curve = self.polarcurve.radial_point(PHI)
        return self.radial.radial_profile(R, R_curve) * self.azimuthal.azimuthal_profile(PHI)

    def radial_extent(self):
        return self.radial.radial_extent()

# -------------------- Fourier-mode ring --------------------
@dataclass(frozen=True)
class MLimacon(ImageModel):
    """
    Thin limacon ring with a truncated Fourier series brightness.

    With theta = atan2(-X, Y) and r = hypot(X, Y), the intensity is zero
    unless |r - (1 + lam*cos(theta))| < dr/2, where it is

        (1 + sum_n 2*(alpha_n*cos(n theta) - beta_n*sin(n theta))) / (2 pi dr)

    flux() is the constant term, 1, for any coefficients. On a pixel grid the
    n >= 2 modes integrate away; alpha_1 couples to the lam*cos(theta) radius
    and adds alpha_1*lam to the summed image.

    Parameters
    ----------
    alpha : sequence of float
        Cosine coefficients alpha_1..alpha_N.
    beta : sequence of float
        Sine coefficients beta_1..beta_N, same length as alpha.
    lam : float
        Limacon shape parameter.
    """
    alpha: tuple
    beta: tuple
    lam: float
    dr: ClassVar[float] = MLIMACON_DR

    def __post_init__(self):
        alpha = np.atleast_1d(np.asarray(self.alpha, dtype=lt_dtype))
        beta = np.atleast_1d(np.asarray(self.beta, dtype=lt_dtype))
        if alpha.ndim != 1 or beta.ndim != 1:
            raise InvalidParameters("alpha and beta must be 1-D sequences.")
        if alpha.size != beta.size:
            raise InvalidParameters(
                "alpha and beta must have the same length, got %d and %d." % (alpha.size, beta.size)
            )
        if alpha.size == 0:
            raise InvalidParameters("MLimacon needs at least one Fourier mode.")
        object.__setattr__(self, "alpha", tuple(alpha.tolist()))
        object.__setattr__(self, "beta", tuple(beta.tolist()))
        try:
            lam = float(self.lam)
        except (TypeError, ValueError) as err:
            raise InvalidParameters("lam must be a real number, got %r." % (self.lam,)) from err
        object.__setattr__(self, "lam", lam)
        lt_logger.debug("MLimacon with %d modes, lam=%g", alpha.size, self.lam)

    def intensity_point(self, X, Y):
        R, THETA = XY2RTHETA_MLIMACON(X, Y)
        return mlimacon_ring(R, THETA, self.alpha, self.beta, self.lam, self.dr)

    def radial_extent(self):
        return 3.0

    def flux(self):
        return 1.0

# -------------------- Geometric modifiers --------------------
@dataclass(frozen=True)
class Stretch:
    """
    Stretch a model by sx along X and sy along Y (sy defaults to sx).
    Intensity is divided by sx*sy so the flux is unchanged.
    """
    sx: float
    sy: float = None

    def __post_init__(self):
        sx = check_positive("sx", self.sx)
        sy = sx if self.sy is None else check_positive("sy", self.sy)
        object.__setattr__(self, "sx", sx)
        object.__setattr__(self, "sy", sy)

    def transform_coordinates(self, X, Y):
        return stretch_coordinates(X, Y, self.sx, self.sy)

    @property
    def intensity_scale(self):
        return 1.0 / (self.sx * self.sy)

    def transform_extent(self, r):
        return r * max(self.sx, self.sy)


@dataclass(frozen=True)
class Rotate:
    """Rotate a model by `angle` radians."""
    angle: float
    intensity_scale: ClassVar[float] = 1.0

    def __post_init__(self):
        object.__setattr__(self, "angle", float(self.angle))

    def transform_coordinates(self, X, Y):
        return rotate_coordinates(X, Y, self.angle)

    def transform_extent(self, r):
        return r


@dataclass(frozen=True)
class Shift:
    """Move a model's center to (dx, dy)."""
    dx: float
    dy: float
    intensity_scale: ClassVar[float] = 1.0

    def __post_init__(self):
        object.__setattr__(self, "dx", float(self.dx))
        object.__setattr__(self, "dy", float(self.dy))

    def transform_coordinates(self, X, Y):
        return shift_coordinates(X, Y, self.dx, self.dy)

    def transform_extent(self, r):
        return r + np.hypot(self.dx, self.dy)


@dataclass(frozen=True)
class ModifiedModel(ImageModel):
    """A model seen through one modifier."""
    model: object
    modifier: object

    def __post_init__(self):
        _require(self.model, "intensity_point", "model")
        _require(self.modifier, "transform_coordinates", "modifier")

    def intensity_point(self, X, Y):
        Xm, Ym = self.modifier.transform_coordinates(X, Y)
        return self.modifier.intensity_scale * self.model.intensity_point(Xm, Ym)

    def radial_extent(self):
        return self.modifier.transform_extent(self.model.radial_extent())

    def flux(self):
        # Stretch rescales intensity by 1/(sx*sy); none of the modifiers change flux
        return self.model.flux()


def modify(model, *modifiers):
    """
    Wrap `model` in `modifiers`, applied left to right: the first modifier
    acts on the bare model, the last one is outermost. For example
    modify(m, Stretch(2.0), Rotate(0.3), Shift(1.0, 0.0)) stretches, then
    rotates, then shifts.
    """
    for modifier in modifiers:
        model = ModifiedModel(model, modifier)
    return model

# -------------------- Convolution (capability only) --------------------
@dataclass(frozen=True)
class Convolved(ImageModel):
    """
    Record of `model` convolved with `kernel`.

    The convolution itself is carried out by the imaging framework that
    samples the model on a grid; this object only carries both members and
    the sizing/flux bookkeeping.
    """
    model: object
    kernel: object

    def __post_init__(self):
        if not getattr(self.model, "convolvable", False):
            raise InvalidParameters("model %r is not convolvable." % (self.model,))
        # kernels may come from the imaging framework; only sizing and flux are needed
        _require(self.kernel, "radial_extent", "kernel")
        _require(self.kernel, "flux", "kernel")

    def intensity_point(self, X, Y):
        raise NotImplementedError(
            "Convolved models have no point evaluation; convolve on an image grid instead."
        )

    def radial_extent(self):
        return self.model.radial_extent() + self.kernel.radial_extent()

    def flux(self):
        return self.model.flux() * self.kernel.flux()


def convolved(model, kernel):
    return Convolved(model, kernel)

# -------------------- Uniform entry points --------------------
def intensity_point(model, X, Y):
    """Intensity of `model` at image coordinates (X, Y)."""
    return model.intensity_point(X, Y)


def intensitymap(model, X, Y):
    """
    Evaluate `model` over coordinate arrays X, Y (e.g. from np.meshgrid).
    Returns a float64 array with the broadcast shape of X and Y.
    """
    X, Y = np.broadcast_arrays(np.asarray(X, dtype=lt_dtype), np.asarray(Y, dtype=lt_dtype))
    out = np.asarray(model.intensity_point(X, Y), dtype=lt_dtype)
    return np.array(np.broadcast_to(out, X.shape))


def radial_extent(model):
    """Radius that encloses the bulk of `model` (or profile); used to size images."""
    return model.radial_extent()


def flux(model):
    return model.flux()

# -------------------- Convenience builders --------------------
def build_gaussian_limacon_basic(lam, sigma):
    """
    Gaussian limacon of unit size, equivalent to

        PolarTemplate(PolarGaussian(sigma), AzimuthalUniform(), LimaconCurve(lam))

    Parameters
    ----------
    lam : float
        Limacon shape parameter; the ridge is r(phi) = 1 + lam*cos(phi).
    sigma : float
        Standard deviation of the ring cross-section.
    """
    return PolarTemplate(PolarGaussian(sigma), AzimuthalUniform(), LimaconCurve(lam))


def build_gaussian_limacon_full(lam1, lam2, sigma, phi, x0, y0):
    """
    Sized, oriented and placed Gaussian limacon, equivalent to

        modify(build_gaussian_limacon_basic(lam2, sigma / lam1),
               Stretch(lam1), Rotate(phi), Shift(x0, y0))

    sigma is divided by lam1 so that it keeps its meaning in image units after
    the stretch.

    Parameters
    ----------
    lam1, lam2 : float
        Limacon shape parameters; the ridge is r(phi) = lam1*(1 + lam2*cos(phi)).
    sigma : float
        Standard deviation of the ring cross-section in image units.
    phi : float
        Orientation of the limacon.
    x0, y0 : float
        Location of the limacon center.
    """
    lam1 = check_positive("lam1", lam1)
    lt_logger.debug(
        "Gaussian limacon: lam1=%g lam2=%g sigma=%g phi=%g center=(%g, %g)",
        lam1, lam2, sigma, phi, x0, y0,
    )
    return modify(
        build_gaussian_limacon_basic(lam2, sigma / lam1),
        Stretch(lam1),
        Rotate(phi),
        Shift(x0, y0),
    )


def build_dbl_gaussian_limacon_basic(lam, sigma_inner, sigma_outer):
    """
    Double Gaussian limacon of unit size, equivalent to

        PolarTemplate(PolarDblGaussian(sigma_inner, sigma_outer), AzimuthalUniform(), LimaconCurve(lam))
    """
    return PolarTemplate(
        PolarDblGaussian(sigma_inner, sigma_outer), AzimuthalUniform(), LimaconCurve(lam)
    )


def build_dbl_gaussian_limacon_full(lam1, lam2, sigma_inner, sigma_outer, phi, x0, y0):
    """
    Sized, oriented and placed double Gaussian limacon, equivalent to

        modify(build_dbl_gaussian_limacon_basic(lam2, sigma_inner / lam1, sigma_outer / lam1),
               Stretch(lam1), Rotate(phi), Shift(x0, y0))

    Parameters
    ----------
    lam1, lam2 : float
        Limacon shape parameters; the ridge is r(phi) = lam1*(1 + lam2*cos(phi)).
    sigma_inner, sigma_outer : float
        Widths inside/outside the ridge in image units.
    phi : float
        Orientation of the limacon.
    x0, y0 : float
        Location of the limacon center.
    """
    lam1 = check_positive("lam1", lam1)
    lt_logger.debug(
        "Double Gaussian limacon: lam1=%g lam2=%g sigma_inner=%g sigma_outer=%g phi=%g center=(%g, %g)",
        lam1, lam2, sigma_inner, sigma_outer, phi, x0, y0,
    )
    return modify(
        build_dbl_gaussian_limacon_basic(lam2, sigma_inner / lam1, sigma_outer / lam1),
        Stretch(lam1),
        Rotate(phi),
        Shift(x0, y0),
    )
