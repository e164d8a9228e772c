"""Smooth (squircle-style) rounded rectangle outlines.

Coordinates follow screen conventions: ``(x, y)`` is the top-left corner and
the y axis points down, so "clockwise" reads clockwise on screen.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .path2d import Path2D

PI_DIV_4 = math.pi / 4.0
# Places the edge-side Bezier control point between the edge connector and the
# arc-side control point; controls how flat the shoulder of the curve looks.
EDGE_CURVE_POINT_RATIO = 2.0 / 3.0


class PreconditionViolation(ValueError):
    """Raised when the builder is called outside its documented input domain."""


@dataclass(frozen=True)
class CornerGeometry:
    """Scalar offsets shared by all four corners, in edge-local terms."""

    rounding_segment_length: float
    smoothing_rounding_segment_length: float
    edge_connecting_offset: float
    arc_connecting_angle: float
    arc_connecting_vector: tuple[float, float]
    arc_curve_offset_from_connecting: float
    arc_curve_offset: float
    edge_curve_offset: float


@dataclass(frozen=True)
class CornerFrame:
    """Orientation of one corner.

    ``entry_axis`` points from the corner along the edge the traversal arrives
    on, ``exit_axis`` along the edge it leaves on.
    """

    name: str
    corner: np.ndarray
    entry_axis: np.ndarray
    exit_axis: np.ndarray

    def at(self, along_entry: float, along_exit: float) -> np.ndarray:
        return self.corner + self.entry_axis * along_entry + self.exit_axis * along_exit


def corner_frames(x: float, y: float, width: float, height: float) -> list[CornerFrame]:
    """Return the four corners in clockwise order starting at the top-left."""

    return [
        CornerFrame("top_left", np.array([x, y]), np.array([0.0, 1.0]), np.array([1.0, 0.0])),
        CornerFrame("top_right", np.array([x + width, y]), np.array([-1.0, 0.0]), np.array([0.0, 1.0])),
        CornerFrame("bottom_right", np.array([x + width, y + height]), np.array([0.0, -1.0]), np.array([-1.0, 0.0])),
        CornerFrame("bottom_left", np.array([x, y + height]), np.array([1.0, 0.0]), np.array([0.0, -1.0])),
    ]


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise PreconditionViolation(message)


def compute_corner_geometry(smoothness: float, radius: float) -> CornerGeometry:
    # For a 90 degree corner the rounding edge length R * sqrt((1 + cos t) / (1 - cos t))
    # reduces to R.
    rounding_segment_length = radius
    smoothing_rounding_segment_length = (1.0 + smoothness) * rounding_segment_length
    edge_connecting_offset = smoothing_rounding_segment_length

    arc_connecting_angle = PI_DIV_4 * smoothness
    arc_connecting_vector = (
        (1.0 - math.sin(arc_connecting_angle)) * radius,
        (1.0 - math.cos(arc_connecting_angle)) * radius,
    )
    arc_curve_offset_from_connecting = (
        math.tan(arc_connecting_angle / 2.0) * math.cos(arc_connecting_angle) * radius
    )
    arc_curve_offset = arc_connecting_vector[0] + arc_curve_offset_from_connecting
    edge_curve_offset = smoothing_rounding_segment_length - (
        (smoothing_rounding_segment_length - arc_curve_offset) * EDGE_CURVE_POINT_RATIO
    )
    return CornerGeometry(
        rounding_segment_length=rounding_segment_length,
        smoothing_rounding_segment_length=smoothing_rounding_segment_length,
        edge_connecting_offset=edge_connecting_offset,
        arc_connecting_angle=arc_connecting_angle,
        arc_connecting_vector=arc_connecting_vector,
        arc_curve_offset_from_connecting=arc_curve_offset_from_connecting,
        arc_curve_offset=arc_curve_offset,
        edge_curve_offset=edge_curve_offset,
    )


def _add_smooth_corner(
    path: Path2D,
    frame: CornerFrame,
    geometry: CornerGeometry,
    radius: float,
    first: bool,
) -> None:
    vx, vy = geometry.arc_connecting_vector
    entry = frame.at(geometry.edge_connecting_offset, 0.0)
    if first:
        path.move_to(entry)
    else:
        path.line_to(entry)
    path.cubic_to(
        frame.at(geometry.edge_curve_offset, 0.0),
        frame.at(geometry.arc_curve_offset, 0.0),
        frame.at(vx, vy),
    )
    path.arc_to((radius, radius), frame.at(vy, vx), large_arc=False, clockwise=True)
    path.cubic_to(
        frame.at(0.0, geometry.arc_curve_offset),
        frame.at(0.0, geometry.edge_curve_offset),
        frame.at(0.0, geometry.edge_connecting_offset),
    )


def build_smooth_round_rect(
    x: float,
    y: float,
    width: float,
    height: float,
    smoothness: float,
    radius: float,
) -> Path2D:
    """Build a closed, clockwise smooth rounded rectangle outline.

    The path starts on the left edge at ``(x, y + edge_connecting_offset)`` and
    emits four commands per corner (edge, shoulder curve, arc, shoulder curve)
    for top-left, top-right, bottom-right and bottom-left, then ``Close``.

    ``smoothness == 0`` is not handled here; use :func:`build_round_rect`.
    The rectangle must fit ``2 * (1 + smoothness) * radius`` along both axes;
    overlapping corners are not detected (see :func:`fit_corner_parameters`).
    """

    if __debug__:
        _check(width > 0, "width must be positive.")
        _check(height > 0, "height must be positive.")
        _check(0 < smoothness <= 1, "smoothness must be in (0, 1]; use build_round_rect for 0.")
        _check(radius > 0, "radius must be positive.")

    geometry = compute_corner_geometry(smoothness, radius)
    path = Path2D(metadata={"kind": "smooth_round_rect", "corner_geometry": geometry})
    for index, frame in enumerate(corner_frames(x, y, width, height)):
        _add_smooth_corner(path, frame, geometry, radius, first=index == 0)
    return path.close()


def build_round_rect(x: float, y: float, width: float, height: float, radius: float) -> Path2D:
    """Build a plain circular-corner rectangle with the same start point and winding."""

    if __debug__:
        _check(width > 0, "width must be positive.")
        _check(height > 0, "height must be positive.")
        _check(radius > 0, "radius must be positive.")

    path = Path2D(metadata={"kind": "round_rect"})
    for index, frame in enumerate(corner_frames(x, y, width, height)):
        entry = frame.at(radius, 0.0)
        if index == 0:
            path.move_to(entry)
        else:
            path.line_to(entry)
        path.arc_to((radius, radius), frame.at(0.0, radius), large_arc=False, clockwise=True)
    return path.close()


def fit_corner_parameters(
    width: float,
    height: float,
    smoothness: float,
    radius: float,
) -> tuple[float, float]:
    """Clamp radius and smoothness so opposing corners cannot overlap.

    The radius is limited to half the shorter side first; smoothness then
    gives way so that ``(1 + smoothness) * radius`` fits in the same half.
    """

    limit = min(width, height) / 2.0
    fitted_smoothness = min(max(float(smoothness), 0.0), 1.0)
    fitted_radius = max(float(radius), 0.0)
    if fitted_radius > limit:
        warnings.warn(
            f"Corner radius {fitted_radius:.4g} exceeds half the shorter side; clamped to {limit:.4g}.",
            RuntimeWarning,
        )
        fitted_radius = limit
    if fitted_radius > 0 and (1.0 + fitted_smoothness) * fitted_radius > limit:
        reduced = max(limit / fitted_radius - 1.0, 0.0)
        warnings.warn(
            f"Smoothness {fitted_smoothness:.4g} does not fit the rectangle; reduced to {reduced:.4g}.",
            RuntimeWarning,
        )
        fitted_smoothness = reduced
    return fitted_smoothness, fitted_radius


def make_round_rect(
    x: float = 0.0,
    y: float = 0.0,
    width: float = 1.0,
    height: float = 1.0,
    smoothness: float = 0.6,
    radius: float = 0.1,
    fit: bool = True,
    color: Sequence[float] | str | None = None,
) -> Path2D:
    """Fit the corner parameters and dispatch to the matching outline builder."""

    values = (x, y, width, height, smoothness, radius)
    if not all(math.isfinite(float(v)) for v in values):
        raise ValueError("Rectangle parameters must be finite.")
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")
    if not 0 <= smoothness <= 1:
        raise ValueError("smoothness must be in [0, 1].")

    if fit:
        smoothness, radius = fit_corner_parameters(width, height, smoothness, radius)

    if radius <= 0:
        path = Path2D(metadata={"kind": "rect"})
        for index, frame in enumerate(corner_frames(x, y, width, height)):
            if index == 0:
                path.move_to(frame.corner)
            else:
                path.line_to(frame.corner)
        path.close()
    elif smoothness <= 0:
        path = build_round_rect(x, y, width, height, radius)
    else:
        path = build_smooth_round_rect(x, y, width, height, smoothness, radius)

    if color is not None:
        path.with_color(color)
    return path


@dataclass(frozen=True)
class RoundRectRequest:
    """Parameters for one smooth rounded rectangle."""

    x: float
    y: float
    width: float
    height: float
    smoothness: float
    radius: float

    def validate(self) -> None:
        for name in ("x", "y", "width", "height", "smoothness", "radius"):
            _check(math.isfinite(getattr(self, name)), f"{name} must be finite.")
        _check(self.width > 0, "width must be positive.")
        _check(self.height > 0, "height must be positive.")
        _check(0 < self.smoothness <= 1, "smoothness must be in (0, 1].")
        _check(self.radius > 0, "radius must be positive.")

    def corner_geometry(self) -> CornerGeometry:
        return compute_corner_geometry(self.smoothness, self.radius)

    def build(self) -> Path2D:
        return build_smooth_round_rect(self.x, self.y, self.width, self.height, self.smoothness, self.radius)


__all__ = [
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
