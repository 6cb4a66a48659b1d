"""
Core geometric utilities shared by curves, profiles and templates.
Vectorized over arbitrary input shapes; per-pixel branching kernels are
compiled with Numba @njit and run on flattened float64 buffers. Public
wrappers coerce inputs, so scalars, lists and tuples work too.
"""
import numpy as np
from numba import njit

from limacon_templates.config import lt_dtype
from limacon_templates.errors import InvalidParameters

# -------------------- Flat-buffer helpers --------------------
def _flatten(*arrays):
    """Broadcast inputs together and return (shape, [contiguous 1-D float64 views])."""
    arrays = np.broadcast_arrays(*[np.asarray(a, dtype=lt_dtype) for a in arrays])
    shape = arrays[0].shape
    return shape, [np.ascontiguousarray(a).ravel() for a in arrays]

def _restore(out, shape):
    """Reshape a kernel result; 0-d results come back as NumPy scalars."""
    return out.reshape(shape)[()]

# -------------------- Kernels --------------------
@njit(cache=True)
def _dbl_gaussian_core(r, r_curve, sigma_inner, sigma_outer):
    n = r.size
    out = np.empty(n)
    for j in range(n):
        d = r[j] - r_curve[j]
        # boundary r == r_curve belongs to the outer branch
        if r[j] < r_curve[j]:
            s = sigma_inner
        else:
            s = sigma_outer
        out[j] = np.exp(-d * d / (2.0 * s * s))
    return out

@njit(cache=True)
def _mlimacon_core(r, theta, alpha, beta, lam, dr):
    n = r.size
    k = alpha.size
    norm = 2.0 * np.pi * dr
    out = np.zeros(n)
    for j in range(n):
        if np.abs(r[j] - (1.0 + lam * np.cos(theta[j]))) >= dr / 2.0:
            continue
        f = 1.0
        for i in range(k):
            m = i + 1
            f += 2.0 * (alpha[i] * np.cos(m * theta[j]) - beta[i] * np.sin(m * theta[j]))
        out[j] = f / norm
    return out

# -------------------- Public profile utilities --------------------
def limacon_radius(phi, lam):
    """Limacon radius r(phi) = 1 + lam*cos(phi)."""
    phi = np.asarray(phi, dtype=lt_dtype)
    return 1.0 + lam * np.cos(phi)

def dbl_gaussian(r, r_curve, sigma_inner, sigma_outer):
    """
    Asymmetric Gaussian falloff about r_curve: sigma_inner where r < r_curve,
    sigma_outer elsewhere. Accepts any broadcastable shapes.
    """
    shape, (r, r_curve) = _flatten(r, r_curve)
    out = _dbl_gaussian_core(r, r_curve, float(sigma_inner), float(sigma_outer))
    return _restore(out, shape)

def mlimacon_ring(r, theta, alpha, beta, lam, dr):
    """
    Thin Fourier ring of full width dr around r(theta) = 1 + lam*cos(theta):
    (1 + sum_n 2*(alpha_n*cos(n theta) - beta_n*sin(n theta))) / (2 pi dr)
    inside the band, exactly zero outside.
    """
    shape, (r, theta) = _flatten(r, theta)
    alpha = np.ascontiguousarray(alpha, dtype=lt_dtype)
    beta = np.ascontiguousarray(beta, dtype=lt_dtype)
    out = _mlimacon_core(r, theta, alpha, beta, float(lam), float(dr))
    return _restore(out, shape)

def cosine_series(phi, s, xi):
    """
    Sum_n s[n-1] * cos(n*phi - xi[n-1]) for n = 1..N with broadcasting.
    - s, xi: 1-D (or scalars), equal length
    - phi: arbitrary shape (...), e.g. (101, 101)
    Returns an array with the same shape as `phi`.
    """
    s = np.atleast_1d(np.asarray(s, dtype=lt_dtype))
    xi = np.atleast_1d(np.asarray(xi, dtype=lt_dtype))
    phi = np.asarray(phi, dtype=lt_dtype)
    n = np.arange(1, s.size + 1, dtype=lt_dtype)

    # Broadcast mode arrays to shape (N, 1, ..., 1) to match phi.ndim
    expand = (slice(None),) + (None,) * phi.ndim
    return (s[expand] * np.cos(n[expand] * phi - xi[expand])).sum(axis=0)

# -------------------- Coordinate transforms --------------------
def stretch_coordinates(X, Y, sx, sy):
    """Undo a stretch by (sx, sy)."""
    X = np.asarray(X, dtype=lt_dtype)
    Y = np.asarray(Y, dtype=lt_dtype)
    return X / sx, Y / sy

def rotate_coordinates(X, Y, angle):
    """Rotate coordinates by -angle (the image rotates by +angle)."""
    X = np.asarray(X, dtype=lt_dtype)
    Y = np.asarray(Y, dtype=lt_dtype)
    c, s = np.cos(angle), np.sin(angle)
    return c * X + s * Y, -s * X + c * Y

def shift_coordinates(X, Y, dx, dy):
    """Undo a translation by (dx, dy)."""
    X = np.asarray(X, dtype=lt_dtype)
    Y = np.asarray(Y, dtype=lt_dtype)
    return X - dx, Y - dy

# -------------------- Cartesian <-> Polar --------------------
def ringphase(X, Y):
    """Ring phase of a pixel: angle measured from +Y towards +X."""
    X = np.asarray(X, dtype=lt_dtype)
    Y = np.asarray(Y, dtype=lt_dtype)
    return np.arctan2(X, Y)

def XY2RPHI(X, Y):
    """Cartesian -> polar (R, ring phase). The origin maps to phi = 0."""
    X = np.asarray(X, dtype=lt_dtype)
    Y = np.asarray(Y, dtype=lt_dtype)
    return np.hypot(X, Y), ringphase(X, Y)

def RPHI2XY(R, PHI):
    """Polar (R, ring phase) -> Cartesian (X, Y)."""
    R = np.asarray(R, dtype=lt_dtype)
    PHI = np.asarray(PHI, dtype=lt_dtype)
    return R * np.sin(PHI), R * np.cos(PHI)

def XY2RTHETA_MLIMACON(X, Y):
    """Cartesian -> polar with the Fourier ring azimuth theta = atan2(-X, Y)."""
    X = np.asarray(X, dtype=lt_dtype)
    Y = np.asarray(Y, dtype=lt_dtype)
    return np.hypot(X, Y), np.arctan2(-X, Y)

# -------------------- Angle grid helpers --------------------
def angle_grid(n_points=100, include_end=True):
    """Angle grid of n_points samples over [0, 2π] (or [0, 2π) without the end)."""
    n_points = int(n_points)
    if n_points < 2:
        raise ValueError("Need at least 2 samples to build an angle grid.")
    return np.linspace(0.0, 2.0 * np.pi, n_points, endpoint=include_end)

# -------------------- Parameter checks --------------------
def check_positive(name, value):
    """Coerce value to float and require it to be > 0 (NaN fails)."""
    try:
        value = float(value)
    except (TypeError, ValueError) as err:
        raise InvalidParameters("%s must be a real number, got %r." % (name, value)) from err
    if not (value > 0):
        raise InvalidParameters("%s must be > 0, got %r." % (name, value))
    return value
