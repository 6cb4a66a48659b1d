"""
2D profiles written with jax.numpy.

Pure functions of (X, Y) and the model parameters, numerically matching the
object model in limacon_templates.nonjax but safe under jax.jit, jax.grad
and jax.vmap. Parameter values are not range checked here: under tracing
they are abstract, so bounds belong to the caller (e.g. an optimizer).
Array shapes are static, so coefficient sequences are still checked.
"""
import jax.numpy as jnp

from limacon_templates.errors import InvalidParameters
from limacon_templates.nonjax.profiles2D import MLIMACON_DR


def ringphase(X, Y):
    return jnp.arctan2(X, Y)


def limacon_radial_point(phi, lam):
    return 1.0 + lam * jnp.cos(phi)


def polar_gaussian(r, r_curve, sigma):
    return jnp.exp(-(r - r_curve) ** 2 / (2.0 * sigma ** 2))


def polar_dbl_gaussian(r, r_curve, sigma_inner, sigma_outer):
    # strict < : the curve itself takes the outer width
    sigma = jnp.where(r < r_curve, sigma_inner, sigma_outer)
    return jnp.exp(-(r - r_curve) ** 2 / (2.0 * sigma ** 2))


def _unmodify(X, Y, lam1, phi, x0, y0):
    """Undo Shift(x0, y0), Rotate(phi) and Stretch(lam1), in that order."""
    X = X - x0
    Y = Y - y0
    c, s = jnp.cos(phi), jnp.sin(phi)
    X, Y = c * X + s * Y, -s * X + c * Y
    return X / lam1, Y / lam1


def gaussian_limacon(X, Y, lam1, lam2, sigma, phi=0.0, x0=0.0, y0=0.0):
    """
    Gaussian limacon with ridge lam1*(1 + lam2*cos(phi)), width sigma in image
    units, orientation phi and center (x0, y0). With lam1 = 1, phi = 0 and no
    shift this is the unit-size template.
    """
    X = jnp.asarray(X)
    Y = jnp.asarray(Y)
    Xs, Ys = _unmodify(X, Y, lam1, phi, x0, y0)
    r = jnp.hypot(Xs, Ys)
    r_curve = limacon_radial_point(ringphase(Xs, Ys), lam2)
    return polar_gaussian(r, r_curve, sigma / lam1) / lam1 ** 2


def dbl_gaussian_limacon(X, Y, lam1, lam2, sigma_inner, sigma_outer, phi=0.0, x0=0.0, y0=0.0):
    """Double Gaussian counterpart of gaussian_limacon."""
    X = jnp.asarray(X)
    Y = jnp.asarray(Y)
    Xs, Ys = _unmodify(X, Y, lam1, phi, x0, y0)
    r = jnp.hypot(Xs, Ys)
    r_curve = limacon_radial_point(ringphase(Xs, Ys), lam2)
    return polar_dbl_gaussian(r, r_curve, sigma_inner / lam1, sigma_outer / lam1) / lam1 ** 2


def mlimacon(X, Y, alpha, beta, lam, dr=MLIMACON_DR):
    """
    Thin Fourier limacon ring; see limacon_templates.nonjax.profiles2D.MLimacon.
    alpha and beta are 1-D arrays of equal length N.
    """
    X = jnp.asarray(X)
    Y = jnp.asarray(Y)
    alpha = jnp.atleast_1d(jnp.asarray(alpha))
    beta = jnp.atleast_1d(jnp.asarray(beta))
    if alpha.ndim != 1 or beta.ndim != 1:
        raise InvalidParameters("alpha and beta must be 1-D sequences.")
    if alpha.shape != beta.shape:
        raise InvalidParameters(
            "alpha and beta must have the same length, got %d and %d." % (alpha.shape[0], beta.shape[0])
        )
    if alpha.shape[0] == 0:
        raise InvalidParameters("mlimacon needs at least one Fourier mode.")
    r = jnp.hypot(X, Y)
    theta = jnp.arctan2(-X, Y)

    # modes along a trailing axis: (..., N)
    n = jnp.arange(1, alpha.shape[0] + 1)
    ntheta = theta[..., None] * n
    series = 1.0 + 2.0 * jnp.sum(alpha * jnp.cos(ntheta) - beta * jnp.sin(ntheta), axis=-1)

    inside = jnp.abs(r - limacon_radial_point(theta, lam)) < dr / 2.0
    return jnp.where(inside, series / (2.0 * jnp.pi * dr), 0.0)
