"""Plate cam profiles.

Two closed-form cam outlines are provided, both built from a base circle
centred on the origin and a nose circle centred on the positive y axis:

* :class:`CamProfile1` joins the circles with straight tangent flanks.
* :class:`CamProfile2` joins them with circular flank arcs that are
  internally tangent to both circles.

Both profiles are symmetric about the y axis, so only the ``x >= 0`` half is
worked out and points are mirrored before classification.

:func:`make_cam` derives a flat-flank cam from follower design values
(lift, duration, maximum diameter).
"""

from __future__ import annotations

import logging
import math

import numpy as np
import numpy.typing as npt

from . import primitives as sdf
from .errors import CamDesignNotImplementedError, ProfileParameterError
from .geometry import Box2, Geometry2D

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]

CAM_TYPES = ("flat_flank", "three_arc")


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if not value > 0:
            raise ProfileParameterError(name, f"must be > 0, got {value}")


def _frozen(*xy: float) -> _Array:
    v = np.array(xy, dtype=float)
    v.setflags(write=False)
    return v


def _cam_bbox(distance: float, base_radius: float, nose_radius: float) -> Box2:
    return Box2((-base_radius, -base_radius), (base_radius, distance + nose_radius)).validate()


# ===========================================================================
# Cam Type 1: flat flank cam
# ===========================================================================

class CamProfile1(Geometry2D):
    """Cam made from two circles joined by straight flanks.

    Parameters
    ----------
    distance:
        Centre-to-centre distance between base and nose circles.
    base_radius:
        Radius of the base circle (centred on the origin).
    nose_radius:
        Radius of the nose circle (centred on ``(0, distance)``).

    The flank line runs from ``a`` on the base circle to ``b`` on the nose
    circle and is tangent to both, so the three distance branches meet
    continuously at the flank ends.
    """

    def __init__(self, distance: float, base_radius: float, nose_radius: float) -> None:
        _require_positive(distance=distance, base_radius=base_radius, nose_radius=nose_radius)
        self.distance = float(distance)
        self.base_radius = float(base_radius)
        self.nose_radius = float(nose_radius)

        # work out the flank line
        sin = (self.base_radius - self.nose_radius) / self.distance
        if abs(sin) >= 1.0:
            raise ProfileParameterError(
                "distance",
                f"circles of radius {base_radius} and {nose_radius} at distance {distance} "
                "have no external tangent",
            )
        cos = math.sqrt(1.0 - sin * sin)
        self.a = _frozen(cos * self.base_radius, sin * self.base_radius)
        self.b = _frozen(cos * self.nose_radius, sin * self.nose_radius + self.distance)
        u = self.b - self.a
        self.flank_length = float(np.linalg.norm(u))
        self.u = _frozen(*(u / self.flank_length))
        self._n = sdf.perp(self.u)
        self._nose_center = _frozen(0.0, self.distance)

        logger.debug(
            "CamProfile1 d=%g rb=%g rn=%g flank a=%s b=%s l=%g",
            self.distance, self.base_radius, self.nose_radius, self.a, self.b, self.flank_length,
        )
        super().__init__(self._evaluate, _cam_bbox(self.distance, self.base_radius, self.nose_radius))

    def _evaluate(self, p: _Array) -> _Array:
        p0 = sdf.vec2(np.abs(p[..., 0]), p[..., 1])
        v = p0 - self.a
        # projection onto the flank line picks the nearest feature
        t = sdf.dot(v, self.u)
        d_base = sdf.length(p0) - self.base_radius
        d_flank = sdf.dot(v, self._n)
        d_nose = sdf.length(p0 - self._nose_center) - self.nose_radius
        return np.where(t < 0.0, d_base, np.where(t <= self.flank_length, d_flank, d_nose))


# ===========================================================================
# Cam Type 2: three arc cam
# ===========================================================================

class CamProfile2(Geometry2D):
    """Cam made from two circles joined by circular flank arcs.

    Parameters
    ----------
    distance:
        Centre-to-centre distance between base and nose circles.
    base_radius:
        Radius of the base circle (centred on the origin).
    nose_radius:
        Radius of the nose circle (centred on ``(0, distance)``).
    flank_radius:
        Radius of the flank arcs; must exceed both circle radii.

    ``flank_center`` is the centre of the arc forming the ``+x`` flank. It
    lies at ``x < 0``, so for every mirrored point the angle about it stays
    inside ``(-pi/2, pi/2)`` and ``theta_base``/``theta_nose`` split that
    range without wrapping.
    """

    def __init__(
        self,
        distance: float,
        base_radius: float,
        nose_radius: float,
        flank_radius: float,
    ) -> None:
        _require_positive(
            distance=distance, base_radius=base_radius,
            nose_radius=nose_radius, flank_radius=flank_radius,
        )
        self.distance = float(distance)
        self.base_radius = float(base_radius)
        self.nose_radius = float(nose_radius)
        self.flank_radius = float(flank_radius)
        if self.flank_radius <= max(self.base_radius, self.nose_radius):
            raise ProfileParameterError(
                "flank_radius", f"must exceed base and nose radii, got {flank_radius}"
            )

        # the flank centre lies on circles of radius r0, r1 about the base/nose centres
        r0 = self.flank_radius - self.base_radius
        r1 = self.flank_radius - self.nose_radius
        y = (r0 * r0 - r1 * r1 + self.distance * self.distance) / (2.0 * self.distance)
        h2 = r0 * r0 - y * y
        if h2 < 0.0:
            raise ProfileParameterError(
                "flank_radius",
                f"no arc of radius {flank_radius} is tangent to both circles",
            )
        self.flank_center = _frozen(-math.sqrt(h2), y)

        cx, cy = self.flank_center
        self.theta_base = math.atan2(-cy, -cx)
        self.theta_nose = math.atan2(self.distance - cy, -cx)
        self._nose_center = _frozen(0.0, self.distance)

        logger.debug(
            "CamProfile2 d=%g rb=%g rn=%g rf=%g center=%s theta=[%g, %g]",
            self.distance, self.base_radius, self.nose_radius, self.flank_radius,
            self.flank_center, self.theta_base, self.theta_nose,
        )
        super().__init__(self._evaluate, _cam_bbox(self.distance, self.base_radius, self.nose_radius))

    def _evaluate(self, p: _Array) -> _Array:
        p0 = sdf.vec2(np.abs(p[..., 0]), p[..., 1])
        v = p0 - self.flank_center
        t = np.arctan2(v[..., 1], v[..., 0])
        d_base = sdf.length(p0) - self.base_radius
        d_nose = sdf.length(p0 - self._nose_center) - self.nose_radius
        d_flank = sdf.length(v) - self.flank_radius
        return np.where(t < self.theta_base, d_base, np.where(t > self.theta_nose, d_nose, d_flank))


# ===========================================================================
# Cam design
# ===========================================================================

def make_cam(cam_type: str, lift: float, duration: float, max_diameter: float) -> Geometry2D:
    """Create a cam profile from follower design parameters.

    Parameters
    ----------
    cam_type:
        ``"flat_flank"`` or ``"three_arc"``.
    lift:
        Follower lift above the base circle.
    duration:
        Cam rotation angle (radians, in ``(0, pi)``) over which the follower
        is lifted off the base circle.
    max_diameter:
        Diameter swept by the cam tip.

    Raises
    ------
    ProfileParameterError
        When an input, or a radius derived from the inputs, is out of range.
    CamDesignNotImplementedError
        For ``"three_arc"``, which has no closed-form design mapping.
    """
    if not max_diameter > 0:
        raise ProfileParameterError("max_diameter", f"must be > 0, got {max_diameter}")
    if not lift > 0:
        raise ProfileParameterError("lift", f"must be > 0, got {lift}")
    if not 0 < duration < math.pi:
        raise ProfileParameterError("duration", f"must be in (0, pi), got {duration}")

    base_radius = max_diameter / 2.0 - lift
    if base_radius <= 0:
        raise ProfileParameterError(
            "base_radius", f"max_diameter / 2 - lift = {base_radius} must be > 0"
        )

    delta = duration / 2.0

    if cam_type == "flat_flank":
        c = math.cos(delta)
        nose_radius = base_radius - (lift * c) / (1.0 - c)
        if nose_radius <= 0:
            raise ProfileParameterError(
                "nose_radius", f"derived nose radius {nose_radius} must be > 0"
            )
        distance = base_radius + lift - nose_radius
        logger.debug(
            "flat_flank cam: lift=%g duration=%g -> base=%g nose=%g distance=%g",
            lift, duration, base_radius, nose_radius, distance,
        )
        return CamProfile1(distance, base_radius, nose_radius)
    if cam_type == "three_arc":
        raise CamDesignNotImplementedError(
            "cam_type", "three_arc cams must be built directly with CamProfile2"
        )
    raise ProfileParameterError(
        "cam_type", f"unknown cam type {cam_type!r}, expected one of {CAM_TYPES}"
    )
