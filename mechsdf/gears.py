"""Involute gear profiles.

* :func:`involute` / :func:`involute_angle` -- parametric involute of a circle.
* :class:`GearToothProfile` -- one tooth wedge polygon with involute flanks.
* :class:`GearProfile` -- a full spur gear: replicated teeth, root disk and
  an optional central bore.
* :class:`GearRackProfile` -- a finite linear rack with straight flanks.

Angles are in radians.  ``gear_module`` is the pitch circle diameter divided
by the number of teeth; ``backlash`` is expressed in units of pitch
circumference.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import numpy.typing as npt

from . import primitives as sdf
from .errors import ProfileParameterError
from .geometry import Box2, Circle2D, Geometry2D, Polygon2D, RotateArray2D, Subtraction2D, Union2D

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]

# Constants
DEFAULT_PRESSURE_ANGLE = math.radians(20.0)
DEFAULT_FACETS = 16
ADDENDUM_FACTOR = 1.0
DEDENDUM_FACTOR = 1.25


# ============================================================================
# INVOLUTE CURVE
# ============================================================================

def involute(r: float, theta) -> _Array:
    """Point on the involute of a circle of radius *r* at angle *theta*.

    *theta* may be a scalar or an array; the result has shape
    ``theta.shape + (2,)``.
    """
    theta = np.asarray(theta, dtype=float)
    c = np.cos(theta)
    s = np.sin(theta)
    return sdf.vec2(r * (c + theta * s), r * (s - theta * c))


def involute_angle(r: float, d: float) -> float:
    """Involute angle at which the involute of radius *r* reaches distance *d*.

    Only defined for ``d >= r``; callers clamp with ``max(r, d)``.
    """
    x = d / r
    return math.sqrt(x * x - 1.0)


def _check_teeth(number_teeth: int, gear_module: float) -> None:
    if int(number_teeth) != number_teeth or number_teeth < 1:
        raise ProfileParameterError("number_teeth", f"must be a positive integer, got {number_teeth}")
    if not gear_module > 0:
        raise ProfileParameterError("gear_module", f"must be > 0, got {gear_module}")


# ============================================================================
# SINGLE TOOTH
# ============================================================================

class GearToothProfile(Polygon2D):
    """Polygon for a single involute tooth, pointing along +x.

    The polygon is the lower flank (``facets + 1`` involute points), the
    upper flank (the lower one mirrored in y, in reverse order) and the
    origin, which closes it into a wedge.  It therefore has
    ``2 * (facets + 1) + 1`` vertices and is symmetric about the x axis.

    Parameters
    ----------
    number_teeth:
        Number of teeth on the gear this tooth belongs to.
    gear_module:
        Pitch circle diameter / number of teeth.
    root_radius:
        Radius at the tooth root.
    base_radius:
        Radius of the circle the involute is unwound from.
    outer_radius:
        Radius at the tooth tip.
    backlash:
        Backlash in units of pitch circumference.
    facets:
        Number of straight segments approximating each involute flank.
    """

    def __init__(
        self,
        number_teeth: int,
        gear_module: float,
        root_radius: float,
        base_radius: float,
        outer_radius: float,
        backlash: float = 0.0,
        facets: int = DEFAULT_FACETS,
    ) -> None:
        _check_teeth(number_teeth, gear_module)
        if int(facets) != facets or facets < 1:
            raise ProfileParameterError("facets", f"must be an integer >= 1, got {facets}")
        if not base_radius > 0:
            raise ProfileParameterError("base_radius", f"must be > 0, got {base_radius}")
        if not outer_radius > base_radius:
            raise ProfileParameterError(
                "outer_radius", f"{outer_radius} must exceed base_radius {base_radius}"
            )
        number_teeth = int(number_teeth)
        facets = int(facets)

        pitch_radius = number_teeth * gear_module / 2.0

        # angular extent of the tooth on the base radius
        pitch_point = involute(base_radius, involute_angle(base_radius, max(base_radius, pitch_radius)))
        face_angle = math.atan2(pitch_point[1], pitch_point[0])
        backlash_angle = backlash / (2.0 * pitch_radius)
        center_angle = math.pi / (2.0 * number_teeth) + face_angle - backlash_angle

        # involute angles spanning root (or base) to tip
        start_angle = involute_angle(base_radius, max(base_radius, root_radius))
        stop_angle = involute_angle(base_radius, outer_radius)
        angles = start_angle + (stop_angle - start_angle) / facets * np.arange(facets + 1)

        lower = involute(base_radius, angles) @ sdf.rot2D(-center_angle).T
        upper = lower[::-1] * np.array([1.0, -1.0])
        vertices = np.concatenate([lower, upper, np.zeros((1, 2))])

        self.number_teeth = number_teeth
        self.gear_module = gear_module
        self.pitch_radius = pitch_radius
        self.center_angle = center_angle
        self.facets = facets
        logger.debug(
            "GearToothProfile n=%d m=%g center_angle=%g involute=[%g, %g] facets=%d",
            number_teeth, gear_module, center_angle, start_angle, stop_angle, facets,
        )
        super().__init__(vertices)


# ============================================================================
# FULL GEAR
# ============================================================================

class GearProfile(Geometry2D):
    """Involute spur gear centred on the origin.

    The outline is ``(teeth U root disk) - bore disk``, where the teeth are
    ``number_teeth`` copies of a :class:`GearToothProfile` spaced ``2*pi/N``
    apart.  The bore radius is ``root_radius - ring_width``; when that is not
    positive the gear is solid.

    Parameters
    ----------
    number_teeth:
        Number of gear teeth.
    gear_module:
        Pitch circle diameter / number of teeth.
    pressure_angle:
        Gear pressure angle (radians).
    backlash:
        Backlash in units of pitch circumference.
    clearance:
        Additional root clearance added to the dedendum.
    ring_width:
        Wall thickness of the gear body, measured inward from the root circle.
        ``None`` gives a solid gear.
    facets:
        Number of facets for each involute flank.
    """

    def __init__(
        self,
        number_teeth: int,
        gear_module: float,
        pressure_angle: float = DEFAULT_PRESSURE_ANGLE,
        backlash: float = 0.0,
        clearance: float = 0.0,
        ring_width: Optional[float] = None,
        facets: int = DEFAULT_FACETS,
    ) -> None:
        _check_teeth(number_teeth, gear_module)
        if ring_width is not None and ring_width < 0:
            raise ProfileParameterError("ring_width", f"must be >= 0, got {ring_width}")
        number_teeth = int(number_teeth)

        self.number_teeth = number_teeth
        self.gear_module = gear_module
        self.pressure_angle = pressure_angle

        self.pitch_radius = number_teeth * gear_module / 2.0
        self.base_radius = self.pitch_radius * math.cos(pressure_angle)
        # addendum: radial distance from pitch circle to outside circle
        self.addendum = gear_module * ADDENDUM_FACTOR
        # dedendum: radial distance from pitch circle to root circle
        self.dedendum = self.addendum + clearance
        self.outer_radius = self.pitch_radius + self.addendum
        self.root_radius = self.pitch_radius - self.dedendum
        # no ring_width means a solid gear
        self.ring_radius = self.root_radius - ring_width if ring_width is not None else 0.0
        if not self.root_radius > 0:
            raise ProfileParameterError(
                "root_radius", f"pitch_radius - dedendum = {self.root_radius} must be > 0"
            )

        self.tooth = GearToothProfile(
            number_teeth,
            gear_module,
            self.root_radius,
            self.base_radius,
            self.outer_radius,
            backlash,
            facets,
        )

        teeth = RotateArray2D(self.tooth, number_teeth, sdf.TAU / number_teeth)
        body: Geometry2D = Union2D(teeth, Circle2D(self.root_radius))
        if self.ring_radius > 0:
            body = Subtraction2D(body, Circle2D(self.ring_radius))
        self._body = body

        logger.debug(
            "GearProfile n=%d pitch=%g base=%g outer=%g root=%g ring=%g",
            number_teeth, self.pitch_radius, self.base_radius,
            self.outer_radius, self.root_radius, self.ring_radius,
        )
        super().__init__(body.sdf, body.bounding_box())


# ============================================================================
# GEAR RACK
# ============================================================================

class GearRackProfile(Geometry2D):
    """Finite linear gear rack lying along the x axis.

    The rack base sits on ``y = 0``; teeth point along +y, with one tooth
    centred on ``x = 0`` and the pattern repeating every ``pitch``.  The
    rack is cut to ``|x| <= half_length``.

    Parameters
    ----------
    number_teeth:
        Number of rack teeth; may be fractional, only sets the length.
    gear_module:
        Module of the mating gear.
    pressure_angle:
        Gear pressure angle (radians).
    backlash:
        Backlash in units of pitch circumference.
    base_height:
        Height of the solid rack base below the tooth roots.
    """

    def __init__(
        self,
        number_teeth: float,
        gear_module: float,
        pressure_angle: float = DEFAULT_PRESSURE_ANGLE,
        backlash: float = 0.0,
        base_height: float = 0.0,
    ) -> None:
        if not number_teeth > 0:
            raise ProfileParameterError("number_teeth", f"must be > 0, got {number_teeth}")
        if not gear_module > 0:
            raise ProfileParameterError("gear_module", f"must be > 0, got {gear_module}")
        if base_height < 0:
            raise ProfileParameterError("base_height", f"must be >= 0, got {base_height}")

        # addendum: distance from pitch line to top of tooth
        addendum = gear_module * ADDENDUM_FACTOR
        # dedendum: distance from pitch line to root of tooth
        dedendum = gear_module * DEDENDUM_FACTOR
        tooth_height = base_height + addendum + dedendum
        # tooth to tooth distance along the pitch line
        pitch = gear_module * math.pi

        # x size of tooth flank
        dx = (addendum + dedendum) * math.tan(pressure_angle)
        # 1/2 x size of tooth top
        dxt = (pitch / 2.0 - dx) / 2.0
        # x size of backlash
        bl = backlash / 2.0
        if not dxt - bl > 0:
            raise ProfileParameterError(
                "pressure_angle", f"tooth top width {2.0 * (dxt - bl)} must be > 0"
            )

        # half tooth profile centred on the y axis
        self.tooth = Polygon2D([
            (pitch, 0.0),
            (pitch, base_height),
            (dx + dxt - bl, base_height),
            (dxt - bl, tooth_height),
            (-pitch, tooth_height),
            (-pitch, 0.0),
        ])
        self.pitch = pitch
        self.tooth_height = tooth_height
        self.half_length = pitch * number_teeth / 2.0

        logger.debug(
            "GearRackProfile m=%g pitch=%g height=%g half_length=%g",
            gear_module, pitch, tooth_height, self.half_length,
        )
        super().__init__(
            self._evaluate,
            Box2((-self.half_length, 0.0), (self.half_length, tooth_height)).validate(),
        )

    def _evaluate(self, p: _Array) -> _Array:
        # map p.x back into [0, pitch/2]
        p0 = sdf.vec2(np.abs(sdf.sawTooth(p[..., 0], self.pitch)), p[..., 1])
        d0 = self.tooth.sdf(p0)
        # clip to the rack length
        d1 = np.abs(p[..., 0]) - self.half_length
        return sdf.opIntersection(d0, d1)
