"""2D geometry base class, bounding boxes and boolean composition."""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from . import primitives as sdf
from .errors import ProfileParameterError

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]
_Vec2 = Tuple[float, float]


# ===========================================================================
# Bounding box
# ===========================================================================

class Box2(NamedTuple):
    """Axis-aligned rectangle given by its ``min`` and ``max`` corners."""

    min: _Vec2
    max: _Vec2

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]]) -> Box2:
        """Smallest box enclosing *points* (shape ``(N, 2)``)."""
        v = np.asarray(points, dtype=float).reshape(-1, 2)
        lo = v.min(axis=0)
        hi = v.max(axis=0)
        return cls((float(lo[0]), float(lo[1])), (float(hi[0]), float(hi[1])))

    def validate(self) -> Box2:
        if self.min[0] > self.max[0] or self.min[1] > self.max[1]:
            raise ProfileParameterError("bbox", f"min {self.min} exceeds max {self.max}")
        return self

    @property
    def size(self) -> _Vec2:
        return (self.max[0] - self.min[0], self.max[1] - self.min[1])

    @property
    def center(self) -> _Vec2:
        return (0.5 * (self.min[0] + self.max[0]), 0.5 * (self.min[1] + self.max[1]))

    def corners(self) -> _Array:
        (x0, y0), (x1, y1) = self.min, self.max
        return np.array([[x0, y0], [x1, y0], [x1, y1], [x0, y1]])

    def extend(self, other: Box2) -> Box2:
        """Smallest box enclosing both boxes."""
        return Box2(
            (min(self.min[0], other.min[0]), min(self.min[1], other.min[1])),
            (max(self.max[0], other.max[0]), max(self.max[1], other.max[1])),
        )

    def intersect(self, other: Box2) -> Box2:
        """Overlap of both boxes (degenerates to a point when disjoint)."""
        lo = (max(self.min[0], other.min[0]), max(self.min[1], other.min[1]))
        hi = (min(self.max[0], other.max[0]), min(self.max[1], other.max[1]))
        hi = (max(hi[0], lo[0]), max(hi[1], lo[1]))
        return Box2(lo, hi)

    def translate(self, dx: float, dy: float) -> Box2:
        return Box2((self.min[0] + dx, self.min[1] + dy), (self.max[0] + dx, self.max[1] + dy))

    def rotate(self, angle: float) -> Box2:
        """Box enclosing this box rotated counter-clockwise by *angle*."""
        return Box2.from_points(self.corners() @ sdf.rot2D(angle).T)

    def enlarge(self, delta: float) -> Box2:
        return Box2((self.min[0] - delta, self.min[1] - delta), (self.max[0] + delta, self.max[1] + delta))

    def contains(self, p: _Array) -> npt.NDArray[np.bool_]:
        """Element-wise test of points *p* (shape ``(..., 2)``) against the box."""
        p = np.asarray(p, dtype=float)
        return (
            (p[..., 0] >= self.min[0]) & (p[..., 0] <= self.max[0])
            & (p[..., 1] >= self.min[1]) & (p[..., 1] <= self.max[1])
        )


# ===========================================================================
# Base class
# ===========================================================================

class Geometry2D:
    """Base class for 2D signed-distance-function geometries.

    A ``Geometry2D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 2)`` array of 2D points and the return value is a ``(...)``
    array of signed distances, together with an optional :class:`Box2`
    enclosing the shape.

    Subclasses either pass the appropriate SDF to ``super().__init__(func,
    bbox)`` or override :meth:`sdf` directly.

    Implements:
    - Boolean operations: :meth:`union`, :meth:`subtract`, :meth:`intersect`
    - Transforms:         :meth:`translate`, :meth:`rotate`
    """

    def __init__(self, func: _SDFFunc, bbox: Optional[Box2] = None) -> None:
        self._func = func
        self._bbox = bbox

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 2)``)."""
        return self._func(np.asarray(p, dtype=float))

    def __call__(self, p: _Array) -> _Array:
        return self.sdf(p)

    def bounding_box(self) -> Box2:
        """Axis-aligned box enclosing the shape."""
        if self._bbox is None:
            raise ValueError(f"{type(self).__name__} has no bounding box")
        return self._bbox

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, other: Geometry2D) -> Geometry2D:
        """Return the union (min) of this shape and *other*."""
        return Union2D(self, other)

    def subtract(self, other: Geometry2D) -> Geometry2D:
        """Subtract *other* from this shape."""
        return Subtraction2D(self, other)

    def intersect(self, other: Geometry2D) -> Geometry2D:
        """Return the intersection (max) of this shape and *other*."""
        return Intersection2D(self, other)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def translate(self, tx: float, ty: float) -> Geometry2D:
        """Translate by ``(tx, ty)``."""
        t = np.array([tx, ty], dtype=float)
        bbox = self._bbox.translate(tx, ty) if self._bbox is not None else None
        return Geometry2D(lambda p: self.sdf(p - t), bbox)

    def rotate(self, angle_rad: float) -> Geometry2D:
        """Rotate by *angle_rad* radians (counter-clockwise)."""
        rot = sdf.rot2D(-angle_rad)
        bbox = self._bbox.rotate(angle_rad) if self._bbox is not None else None
        return Geometry2D(lambda p: sdf.opTx2D(p, rot, np.zeros(2), self.sdf), bbox)


# ===========================================================================
# Primitive shapes
# ===========================================================================

class Circle2D(Geometry2D):
    """Circle centred at origin with given *radius*."""

    def __init__(self, radius: float) -> None:
        self.radius = radius
        r = abs(radius)
        super().__init__(lambda p: sdf.sdCircle(p, radius), Box2((-r, -r), (r, r)))


class Polygon2D(Geometry2D):
    """Arbitrary convex or concave polygon from N 2-D *vertices*."""

    def __init__(self, vertices: Sequence[Sequence[float]]) -> None:
        v = np.array(vertices, dtype=float)
        if v.ndim != 2 or v.shape[1] != 2 or v.shape[0] < 3:
            raise ProfileParameterError("vertices", f"need at least 3 2-D points, got shape {v.shape}")
        v.setflags(write=False)
        self.vertices = v
        super().__init__(lambda p: sdf.sdPolygon2D(p, v), Box2.from_points(v))

    def __len__(self) -> int:
        return self.vertices.shape[0]


# ===========================================================================
# Boolean operation and replication classes
# ===========================================================================

def _boxes(geoms: Sequence[Geometry2D]):
    return [g._bbox for g in geoms]


class Union2D(Geometry2D):
    """Union of two or more 2-D geometries (minimum SDF)."""

    def __init__(self, *geoms: Geometry2D) -> None:
        if not geoms:
            raise ValueError("Union2D needs at least one geometry")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opUnion(d, g.sdf(p))
            return d

        boxes = _boxes(geoms)
        bbox = None
        if all(b is not None for b in boxes):
            bbox = boxes[0]
            for b in boxes[1:]:
                bbox = bbox.extend(b)
        super().__init__(_sdf, bbox)


class Intersection2D(Geometry2D):
    """Intersection of two or more 2-D geometries (maximum SDF)."""

    def __init__(self, *geoms: Geometry2D) -> None:
        if not geoms:
            raise ValueError("Intersection2D needs at least one geometry")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opIntersection(d, g.sdf(p))
            return d

        bbox = None
        for b in _boxes(geoms):
            if b is not None:
                bbox = b if bbox is None else bbox.intersect(b)
        super().__init__(_sdf, bbox)


class Subtraction2D(Geometry2D):
    """Subtract *cutter* from *base*."""

    def __init__(self, base: Geometry2D, cutter: Geometry2D) -> None:
        super().__init__(
            lambda p: sdf.opSubtraction(cutter.sdf(p), base.sdf(p)),
            base._bbox,
        )


class RotateArray2D(Geometry2D):
    """Union of *count* copies of *geom*, each rotated *step* radians further.

    Copy ``k`` is *geom* rotated counter-clockwise by ``k * step`` about the
    origin; copy 0 is *geom* itself.
    """

    def __init__(self, geom: Geometry2D, count: int, step: float) -> None:
        if count < 1:
            raise ValueError(f"RotateArray2D needs count >= 1, got {count}")
        # evaluating copy k means rotating p back by k * step
        mats = [sdf.rot2D(-k * step) for k in range(count)]

        def _sdf(p: _Array) -> _Array:
            d = geom.sdf(p)
            for m in mats[1:]:
                d = sdf.opUnion(d, sdf.opTx2D(p, m, np.zeros(2), geom.sdf))
            return d

        bbox = None
        if geom._bbox is not None:
            bbox = geom._bbox
            for k in range(1, count):
                bbox = bbox.extend(geom._bbox.rotate(k * step))
        self.count = count
        self.step = step
        super().__init__(_sdf, bbox)
