from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from ._color import _normalize_color


def _require_vec2(value: Sequence[float], label: str) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return arr


def _fmt(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


@dataclass(frozen=True)
class MoveTo:
    point: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", _require_vec2(self.point, "point"))


@dataclass(frozen=True)
class LineTo:
    point: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", _require_vec2(self.point, "point"))

    def sample(self, start: np.ndarray) -> np.ndarray:
        return np.vstack([start, self.point])


@dataclass(frozen=True)
class CubicTo:
    control1: np.ndarray
    control2: np.ndarray
    point: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "control1", _require_vec2(self.control1, "control1"))
        object.__setattr__(self, "control2", _require_vec2(self.control2, "control2"))
        object.__setattr__(self, "point", _require_vec2(self.point, "point"))

    def sample(self, start: np.ndarray, samples: int) -> np.ndarray:
        samples = max(int(samples), 2)
        t = np.linspace(0.0, 1.0, samples, endpoint=True)
        t = t.reshape(-1, 1)
        a = (1 - t) ** 3
        b = 3 * (1 - t) ** 2 * t
        c = 3 * (1 - t) * t**2
        d = t**3
        return a * start + b * self.control1 + c * self.control2 + d * self.point


@dataclass(frozen=True)
class ArcTo:
    """Circular arc in SVG endpoint form (``A rx ry rot large sweep x y``).

    ``clockwise`` is the SVG sweep flag: clockwise on screen with y pointing down.
    """

    radii: np.ndarray
    point: np.ndarray
    rotation_deg: float = 0.0
    large_arc: bool = False
    clockwise: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "radii", _require_vec2(self.radii, "radii"))
        object.__setattr__(self, "point", _require_vec2(self.point, "point"))
        if np.any(self.radii <= 0):
            raise ValueError("radii must be positive.")
        if not np.isclose(self.radii[0], self.radii[1]) or not np.isclose(self.rotation_deg % 180.0, 0.0):
            raise ValueError("Only circular, unrotated arcs are supported.")

    def center_parameters(self, start: np.ndarray) -> tuple[np.ndarray, float, float, float] | None:
        """Return (center, radius, start_angle, sweep_angle) in radians, or None for a zero-length arc."""

        half = (start - self.point) / 2.0
        half_sq = float(half @ half)
        if half_sq < 1e-24:
            return None
        radius = float(self.radii[0])
        # Chords longer than the diameter scale the radius up.
        radius = max(radius, float(np.sqrt(half_sq)))
        radicand = max((radius * radius - half_sq) / half_sq, 0.0)
        coef = np.sqrt(radicand)
        if self.large_arc == self.clockwise:
            coef = -coef
        center_local = coef * np.array([half[1], -half[0]])
        center = center_local + (start + self.point) / 2.0

        u = (half - center_local) / radius
        v = (-half - center_local) / radius
        theta = float(np.arctan2(u[1], u[0]))
        delta = float(np.arctan2(v[1], v[0]) - theta)
        if self.clockwise and delta < 0:
            delta += 2 * np.pi
        elif not self.clockwise and delta > 0:
            delta -= 2 * np.pi
        return center, radius, theta, delta

    def sample(self, start: np.ndarray, segments_per_circle: int) -> np.ndarray:
        if segments_per_circle < 3:
            raise ValueError("segments_per_circle must be >= 3.")
        params = self.center_parameters(start)
        if params is None:
            return np.vstack([start, self.point])
        center, radius, theta, delta = params
        steps = max(int(np.ceil(segments_per_circle * (abs(delta) / (2 * np.pi)))), 2)
        angles = np.linspace(theta, theta + delta, steps, endpoint=True)
        x = center[0] + radius * np.cos(angles)
        y = center[1] + radius * np.sin(angles)
        pts = np.column_stack([x, y])
        # Pin the ends to the exact anchors.
        pts[0] = start
        pts[-1] = self.point
        return pts


@dataclass(frozen=True)
class Close:
    pass


PathCommand = MoveTo | LineTo | CubicTo | ArcTo | Close


@dataclass
class Path2D:
    """Ordered drawing commands describing a single 2D outline (y axis pointing down)."""

    commands: List[PathCommand] = field(default_factory=list)
    color: tuple[float, float, float, float] | None = None
    metadata: dict[str, object] = field(default_factory=dict)

    # Builders -------------------------------------------------------------

    def move_to(self, point: Sequence[float]) -> "Path2D":
        self.commands.append(MoveTo(point))
        return self

    def line_to(self, point: Sequence[float]) -> "Path2D":
        self._require_current("line_to")
        self.commands.append(LineTo(point))
        return self

    def cubic_to(
        self,
        control1: Sequence[float],
        control2: Sequence[float],
        point: Sequence[float],
    ) -> "Path2D":
        self._require_current("cubic_to")
        self.commands.append(CubicTo(control1, control2, point))
        return self

    def arc_to(
        self,
        radii: Sequence[float],
        point: Sequence[float],
        rotation_deg: float = 0.0,
        large_arc: bool = False,
        clockwise: bool = True,
    ) -> "Path2D":
        self._require_current("arc_to")
        self.commands.append(
            ArcTo(radii=radii, point=point, rotation_deg=rotation_deg, large_arc=large_arc, clockwise=clockwise)
        )
        return self

    def close(self) -> "Path2D":
        self._require_current("close")
        self.commands.append(Close())
        return self

    def _require_current(self, name: str) -> None:
        if not self.commands or isinstance(self.commands[-1], Close):
            raise ValueError(f"{name} requires a current point; call move_to first.")

    # Queries --------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1], Close)

    @property
    def start_point(self) -> np.ndarray:
        if not self.commands:
            raise ValueError("Path2D is empty.")
        return self.commands[0].point.copy()

    @property
    def end_point(self) -> np.ndarray:
        return self.anchor_points()[-1].copy()

    def anchor_points(self) -> np.ndarray:
        """Return the endpoint of every command; Close contributes its subpath start."""

        anchors = []
        subpath_start = None
        for command in self.commands:
            if isinstance(command, Close):
                anchors.append(subpath_start)
                continue
            if isinstance(command, MoveTo):
                subpath_start = command.point
            anchors.append(command.point)
        if not anchors:
            return np.zeros((0, 2), dtype=float)
        return np.vstack(anchors)

    def control_points(self) -> np.ndarray:
        """Return anchors plus Bezier control points."""

        pts = [self.anchor_points()]
        for command in self.commands:
            if isinstance(command, CubicTo):
                pts.append(np.vstack([command.control1, command.control2]))
        return np.vstack(pts)

    def bounds(self) -> tuple[float, float, float, float]:
        pts = self.control_points()
        if pts.shape[0] == 0:
            return (0.0, 0.0, 0.0, 0.0)
        mins = pts.min(axis=0)
        maxs = pts.max(axis=0)
        return (float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    # Conversions ----------------------------------------------------------

    def sample(
        self,
        segments_per_circle: int = 64,
        bezier_samples: int = 32,
    ) -> np.ndarray:
        if not self.commands:
            return np.zeros((0, 2), dtype=float)
        points = []
        current = None
        subpath_start = None
        for command in self.commands:
            if isinstance(command, MoveTo):
                current = subpath_start = command.point
                points.append(command.point.reshape(1, 2))
                continue
            if isinstance(command, Close):
                if not np.allclose(current, subpath_start):
                    points.append(subpath_start.reshape(1, 2))
                current = subpath_start
                continue
            if isinstance(command, LineTo):
                seg_points = command.sample(current)
            elif isinstance(command, ArcTo):
                seg_points = command.sample(current, segments_per_circle)
            else:
                seg_points = command.sample(current, bezier_samples)
            points.append(seg_points[1:])
            current = command.point
        pts = np.vstack(points)
        if self.closed and not np.allclose(pts[0], pts[-1]):
            pts = np.vstack([pts, pts[0]])
        return pts

    def to_svg_path_data(self, precision: int = 6) -> str:
        def pt(p: np.ndarray) -> str:
            return f"{_fmt(p[0], precision)} {_fmt(p[1], precision)}"

        parts: list[str] = []
        for command in self.commands:
            if isinstance(command, MoveTo):
                parts.append(f"M {pt(command.point)}")
            elif isinstance(command, LineTo):
                parts.append(f"L {pt(command.point)}")
            elif isinstance(command, CubicTo):
                parts.append(f"C {pt(command.control1)} {pt(command.control2)} {pt(command.point)}")
            elif isinstance(command, ArcTo):
                parts.append(
                    f"A {pt(command.radii)} {_fmt(command.rotation_deg, precision)} "
                    f"{int(command.large_arc)} {int(command.clockwise)} {pt(command.point)}"
                )
            else:
                parts.append("Z")
        return " ".join(parts)

    def to_polydata(
        self,
        z: float = 0.0,
        segments_per_circle: int = 64,
        bezier_samples: int = 32,
    ):
        import pyvista as pv

        pts = self.sample(segments_per_circle=segments_per_circle, bezier_samples=bezier_samples)
        if self.closed and pts.shape[0] > 1:
            pts = pts[:-1]
        pts3 = np.column_stack([pts, np.full((pts.shape[0], 1), float(z))])
        n_pts = pts3.shape[0]
        ids = list(range(n_pts))
        if self.closed:
            ids.append(0)
        lines = np.hstack(([len(ids)], ids))
        return pv.PolyData(pts3, lines=lines)

    def with_color(self, color: Sequence[float] | str | None) -> "Path2D":
        if color is None:
            self.color = None
            return self
        self.color = _normalize_color(color)
        return self


__all__ = [
    "ArcTo",
    "Close",
    "CubicTo",
    "LineTo",
    "MoveTo",
    "Path2D",
    "PathCommand",
]
