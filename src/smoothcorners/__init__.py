"""smoothcorners – smooth (squircle-style) rounded rectangle outlines."""

from __future__ import annotations

from .geometry import (
    CornerGeometry,
    Path2D,
    PreconditionViolation,
    RoundRectRequest,
    build_round_rect,
    build_smooth_round_rect,
    compute_corner_geometry,
    fit_corner_parameters,
    make_round_rect,
)

__all__ = [
    "__version__",
    "CornerGeometry",
    "Path2D",
    "PreconditionViolation",
    "RoundRectRequest",
    "build_round_rect",
    "build_smooth_round_rect",
    "compute_corner_geometry",
    "fit_corner_parameters",
    "make_round_rect",
]

__version__ = "0.1.0"
