"""Geometry: the path command model and the rounded rectangle builders."""

from __future__ import annotations

from .path2d import ArcTo, Close, CubicTo, LineTo, MoveTo, Path2D
from .smooth_rect import (
    EDGE_CURVE_POINT_RATIO,
    PI_DIV_4,
    CornerFrame,
    CornerGeometry,
    PreconditionViolation,
    RoundRectRequest,
    build_round_rect,
    build_smooth_round_rect,
    compute_corner_geometry,
    corner_frames,
    fit_corner_parameters,
    make_round_rect,
)

__all__ = [
    "ArcTo",
    "Close",
    "CubicTo",
    "LineTo",
    "MoveTo",
    "Path2D",
    "EDGE_CURVE_POINT_RATIO",
    "PI_DIV_4",
    "CornerFrame",
    "CornerGeometry",
    "PreconditionViolation",
    "RoundRectRequest",
    "build_round_rect",
    "build_smooth_round_rect",
    "compute_corner_geometry",
    "corner_frames",
    "fit_corner_parameters",
    "make_round_rect",
]
