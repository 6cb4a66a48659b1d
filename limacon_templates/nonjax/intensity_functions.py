"""
Radial and azimuthal intensity profiles.

Notes
-----
A radial profile weights a pixel by its distance r - r_curve from the polar
curve at the pixel's angle; an azimuthal profile weights it by angle alone.
A template multiplies the two. Neither kind is normalised: the Gaussians
peak at exactly 1 on the curve.

All profiles are frozen dataclasses whose evaluation methods accept scalars
or arrays of any broadcastable shape.
"""
from dataclasses import dataclass

import numpy as np

from limacon_templates.config import lt_dtype
from limacon_templates.errors import InvalidParameters
from limacon_templates.nonjax.tools import check_positive, cosine_series, dbl_gaussian

# -------------------- Radial profiles --------------------
@dataclass(frozen=True)
class PolarGaussian:
    """
    Gaussian falloff about the polar curve.

    f(r) = exp(-(r - r_curve)^2 / (2 sigma^2))

    Parameters
    ----------
    sigma : float
        Standard deviation of the ring cross-section (> 0).
    """
    sigma: float

    def __post_init__(self):
        object.__setattr__(self, "sigma", check_positive("sigma", self.sigma))

    def radial_profile(self, r, r_curve):
        r = np.asarray(r, dtype=lt_dtype)
        r_curve = np.asarray(r_curve, dtype=lt_dtype)
        return np.exp(-(r - r_curve) ** 2 / (2.0 * self.sigma ** 2))

    def radial_extent(self):
        return 2.0 + 3.0 * self.sigma


@dataclass(frozen=True)
class PolarDblGaussian:
    """
    Asymmetric Gaussian falloff: sigma_inner inside the curve (r < r_curve),
    sigma_outer on and outside it. Continuous in value at the curve, with a
    kink in slope whenever the two widths differ.

    Parameters
    ----------
    sigma_inner : float
        Standard deviation for r < r_curve (> 0).
    sigma_outer : float
        Standard deviation for r >= r_curve (> 0).
    """
    sigma_inner: float
    sigma_outer: float

    def __post_init__(self):
        object.__setattr__(self, "sigma_inner", check_positive("sigma_inner", self.sigma_inner))
        object.__setattr__(self, "sigma_outer", check_positive("sigma_outer", self.sigma_outer))

    def radial_profile(self, r, r_curve):
        return dbl_gaussian(r, r_curve, self.sigma_inner, self.sigma_outer)

    def radial_extent(self):
        return 2.0 + 3.0 * self.sigma_outer


def radial_profile(profile, r, r_curve):
    """Weight of `profile` at radius r for a curve radius r_curve."""
    return profile.radial_profile(r, r_curve)

# -------------------- Azimuthal profiles --------------------
@dataclass(frozen=True)
class AzimuthalUniform:
    """Constant azimuthal weight of 1."""

    def azimuthal_profile(self, phi):
        phi = np.asarray(phi, dtype=lt_dtype)
        return np.ones_like(phi)[()]


@dataclass(frozen=True)
class AzimuthalCosine:
    """
    Cosine-modulated azimuthal weight.

    f(phi) = 1 - sum_n s[n-1] * cos(n*phi - xi[n-1]),  n = 1..N

    Parameters
    ----------
    s : sequence of float
        Modulation amplitude of each mode.
    xi : sequence of float
        Phase of each mode; same length as s.
    """
    s: tuple
    xi: tuple

    def __post_init__(self):
        s = np.atleast_1d(np.asarray(self.s, dtype=lt_dtype))
        xi = np.atleast_1d(np.asarray(self.xi, dtype=lt_dtype))
        if s.ndim != 1 or xi.ndim != 1:
            raise InvalidParameters("s and xi must be 1-D sequences.")
        if s.size != xi.size:
            raise InvalidParameters(
                "s and xi must have the same length, got %d and %d." % (s.size, xi.size)
            )
        object.__setattr__(self, "s", tuple(s.tolist()))
        object.__setattr__(self, "xi", tuple(xi.tolist()))

    def azimuthal_profile(self, phi):
        return 1.0 - cosine_series(phi, self.s, self.xi)


def azimuthal_profile(profile, phi):
    """Weight of `profile` at angle(s) phi."""
    return profile.azimuthal_profile(phi)
