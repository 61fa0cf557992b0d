"""2-D SDF math primitives for the mechsdf package.

Vector helpers, the generic point SDFs the profile classes are built on,
boolean operators and the periodic fold used by the gear rack.

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A "point array" *p*
has shape ``(..., 2)``; scalar SDF results have shape ``(...,)``.

Circle and polygon formulas are adapted from Inigo Quilez's distance
function reference: https://iquilezles.org/articles/distfunctions2d/
"""

from __future__ import annotations

from typing import Callable

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]
_SDFFunc = Callable[[_F], _F]

PI = np.pi
TAU = 2.0 * np.pi

__all__ = [
    "_F",
    "PI", "TAU",
    "vec2", "length", "dot", "dot2", "clamp", "safe_div", "normalize", "perp",
    "sdCircle", "sdPolygon2D",
    "opUnion", "opSubtraction", "opIntersection",
    "rot2D", "opTx2D", "sawTooth",
]


# ===========================================================================
# Vector helpers
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def dot2(a: _F) -> _F:
    """Squared length: ``dot(a, a)``."""
    return dot(a, a)


def clamp(x: _F, lo: float | _F, hi: float | _F) -> _F:
    """Clamp *x* element-wise to ``[lo, hi]``."""
    return np.minimum(np.maximum(x, lo), hi)


def safe_div(n: _F, d: _F, eps: float = 1e-12) -> _F:
    """Division that avoids exact zero in the denominator."""
    return n / np.where(np.abs(d) < eps, np.sign(d) * eps + eps, d)


def normalize(v: _F) -> _F:
    """Unit vector along the last axis of *v*."""
    return v / length(v)[..., None]


def perp(v: _F) -> _F:
    """Clockwise perpendicular ``(v.y, -v.x)``."""
    return vec2(v[..., 1], -v[..., 0])


# ===========================================================================
# Point SDFs
# ===========================================================================

def sdCircle(p: _F, r: float) -> _F:
    """2-D circle of radius *r* centred at origin."""
    return length(p) - r


def sdPolygon2D(p: _F, v: _F) -> _F:
    """2-D polygon from *N* vertices *v* (shape ``(N, 2)``).

    Either winding order is accepted; the sign comes from a crossing test.
    Repeated consecutive vertices (zero-length edges) are tolerated.
    """
    N = v.shape[0]
    d = dot2(p - v[0])
    s = np.ones(p.shape[:-1])
    for i in range(N):
        j = (i + 1) % N
        e = v[j] - v[i]
        w = p - v[i]
        b = w - e * clamp(safe_div(dot(w, e), dot2(e)), 0.0, 1.0)[..., None]
        d = np.minimum(d, dot2(b))
        c1 = p[..., 1] >= v[i][1]
        c2 = p[..., 1] < v[j][1]
        c3 = e[0] * w[..., 1] > e[1] * w[..., 0]
        flip = (c1 & c2 & c3) | (~c1 & ~c2 & ~c3)
        s = np.where(flip, -s, s)
    return s * np.sqrt(d)


# ===========================================================================
# Boolean operators
# ===========================================================================

def opUnion(d1: _F, d2: _F) -> _F:
    """Union of two SDFs: ``min(d1, d2)``."""
    return np.minimum(d1, d2)


def opSubtraction(d1: _F, d2: _F) -> _F:
    """Subtract *d1* from *d2*: ``max(-d1, d2)``."""
    return np.maximum(-d1, d2)


def opIntersection(d1: _F, d2: _F) -> _F:
    """Intersection of two SDFs: ``max(d1, d2)``."""
    return np.maximum(d1, d2)


# ===========================================================================
# Transforms and domain folds
# ===========================================================================

def rot2D(angle: float) -> _F:
    """Counter-clockwise rotation matrix for *angle* radians."""
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([[c, -s], [s, c]])


def opTx2D(p: _F, mat: _F, trans: _F, sdf_func: _SDFFunc) -> _F:
    """Apply 2-D rotation *mat* and translation *trans* to *sdf_func*."""
    p_transformed = np.dot(p, mat.T) - trans
    return sdf_func(p_transformed)


def sawTooth(x: _F, period: float) -> _F:
    """Fold *x* into ``[-period/2, period/2)``."""
    x = np.asarray(x, dtype=float) + period / 2.0
    t = x / period
    return period * (t - np.floor(t)) - period / 2.0
