"""
1D profiles: the polar curve r(phi) that sets the ring's ridge line, and
contour samples (x, y) or (r, phi) of that curve after the same
stretch/rotate/shift a template would receive.
"""
from dataclasses import dataclass

import numpy as np

from limacon_templates.config import lt_logger
from limacon_templates.errors import InvalidParameters
from limacon_templates.nonjax.tools import (
    RPHI2XY, XY2RPHI, angle_grid, check_positive, limacon_radius, rotate_coordinates
)


@dataclass(frozen=True)
class LimaconCurve:
    """
    A standard limacon curve r(phi) = 1 + lam*cos(phi).

    lam = 0 is the unit circle. For |lam| > 1 the curve passes through the
    origin and r(phi) goes negative on part of the circle; that is allowed
    (the template simply has no ridge there) but logged.
    """
    lam: float

    def __post_init__(self):
        try:
            lam = float(self.lam)
        except (TypeError, ValueError) as err:
            raise InvalidParameters("lam must be a real number, got %r." % (self.lam,)) from err
        object.__setattr__(self, "lam", lam)
        if abs(lam) > 1:
            lt_logger.warning("LimaconCurve with |lam| = %g > 1 has an inner loop", abs(lam))

    def radial_point(self, phi):
        return limacon_radius(phi, self.lam)


def radial_point(curve, phi):
    """Radius of `curve` at angle(s) `phi`."""
    return curve.radial_point(phi)


def _format_output(x, y, return_type='xy'):
    """Return (x, y) for return_type='xy', (r, phi) for return_type='polar'."""
    if return_type == 'xy':
        return x, y
    elif return_type == 'polar':
        return XY2RPHI(x, y)
    else:
        raise ValueError("return_type must be 'xy' or 'polar'.")


def Limacon_Profile_1D(lam, r0=1.0, theta_rot=0.0, x0=0.0, y0=0.0,
                       return_type='xy', include_end=True, n_points=100):
    """
    Ridge line of a limacon template as a closed contour.

    Construction (matches modify(template, Stretch(r0), Rotate(theta_rot), Shift(x0, y0))):
      1) Sample r(phi) = 1 + lam*cos(phi) on an angle grid in the ring-phase
         convention (phi measured from +Y towards +X).
      2) Scale by r0.
      3) Rotate the contour by +theta_rot.
      4) Translate by (x0, y0).
    """
    curve = LimaconCurve(lam)
    r0 = check_positive("r0", r0)
    phi = angle_grid(n_points=n_points, include_end=include_end)
    x, y = RPHI2XY(r0 * curve.radial_point(phi), phi)
    x, y = rotate_coordinates(x, y, -theta_rot)
    return _format_output(x + x0, y + y0, return_type=return_type)
