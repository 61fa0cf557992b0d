"""
mechsdf: 2D Signed Distance Fields for Cams and Gears
=======================================================

Exact, closed-form signed distance fields (SDFs) for mechanical profile
curves, meant to be combined with boolean operations into part outlines.

Implemented features
--------------------
- Plate cams: flat flank (:class:`CamProfile1`), three arc
  (:class:`CamProfile2`) and :func:`make_cam` for design-driven cams
- Involute gears: :class:`GearToothProfile`, :class:`GearProfile`,
  :class:`GearRackProfile`
- Generic shapes: :class:`Circle2D`, :class:`Polygon2D`
- Boolean operations: Union, Intersection, Subtraction, RotateArray
- Transforms: translate, rotate
- Bounding boxes: :class:`Box2` for every profile
- Grid sampling: :func:`sample_levelset_2d`

Quick start
-----------

::

    import numpy as np
    from mechsdf import GearProfile, make_cam, sample_levelset_2d

    gear = GearProfile(number_teeth=20, gear_module=1.0, ring_width=3.0)
    cam  = make_cam("flat_flank", lift=5.0, duration=2.0, max_diameter=40.0)

    phi = sample_levelset_2d(gear, resolution=(512, 512))
    d   = cam.sdf(np.array([[0.0, 0.0]]))
"""

from .cams import CAM_TYPES, CamProfile1, CamProfile2, make_cam
from .errors import CamDesignNotImplementedError, ProfileParameterError
from .gears import (
    DEFAULT_FACETS,
    DEFAULT_PRESSURE_ANGLE,
    GearProfile,
    GearRackProfile,
    GearToothProfile,
    involute,
    involute_angle,
)
from .geometry import (
    # Base class
    Geometry2D,
    Box2,

    # Generic shapes
    Circle2D,
    Polygon2D,

    # Boolean operations
    Union2D,
    Intersection2D,
    Subtraction2D,
    RotateArray2D,
)
from .grid import profile_bounds, sample_levelset_2d, save_npy

__version__ = "0.1.0"

__all__ = [
    # Base
    "Geometry2D",
    "Box2",

    # Generic shapes
    "Circle2D",
    "Polygon2D",

    # Boolean operations
    "Union2D",
    "Intersection2D",
    "Subtraction2D",
    "RotateArray2D",

    # Cams
    "CAM_TYPES",
    "CamProfile1",
    "CamProfile2",
    "make_cam",

    # Gears
    "DEFAULT_FACETS",
    "DEFAULT_PRESSURE_ANGLE",
    "involute",
    "involute_angle",
    "GearToothProfile",
    "GearProfile",
    "GearRackProfile",

    # Errors
    "ProfileParameterError",
    "CamDesignNotImplementedError",

    # Grid utilities
    "profile_bounds",
    "sample_levelset_2d",
    "save_npy",
]
