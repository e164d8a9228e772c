from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Sequence
from xml.sax.saxutils import quoteattr

from smoothcorners.geometry._color import svg_color
from smoothcorners.geometry.path2d import Path2D, _fmt


def _union_bounds(paths: Sequence[Path2D]) -> tuple[float, float, float, float]:
    boxes = [p.bounds() for p in paths if p.commands]
    if not boxes:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def _paint_attrs(name: str, color: Sequence[float] | str | None) -> str:
    value, opacity = svg_color(color)
    attrs = f"{name}={quoteattr(value)}"
    if value != "none" and opacity < 1.0:
        attrs += f' {name}-opacity="{opacity:.4g}"'
    return attrs


def svg_document(
    paths: Path2D | Iterable[Path2D],
    fill: Sequence[float] | str | None = "#5a7bff",
    stroke: Sequence[float] | str | None = None,
    stroke_width: float = 1.0,
    margin: float = 4.0,
    precision: int = 4,
) -> str:
    """Return an SVG document containing one ``<path>`` per outline.

    A path's own color overrides ``fill``. The viewBox covers every path's
    control points plus ``margin``.
    """

    if isinstance(paths, Path2D):
        paths = [paths]
    paths = list(paths)
    if not paths:
        raise ValueError("svg_document requires at least one path.")

    min_x, min_y, max_x, max_y = _union_bounds(paths)
    # Snap outward on the output grid so rounding never clips the outline.
    scale = 10.0**precision
    vb_x = math.floor((min_x - margin) * scale) / scale
    vb_y = math.floor((min_y - margin) * scale) / scale
    vb_w = math.ceil(((max_x + margin) - vb_x) * scale) / scale
    vb_h = math.ceil(((max_y + margin) - vb_y) * scale) / scale
    size = f'width="{_fmt(vb_w, precision)}" height="{_fmt(vb_h, precision)}"'
    view_box = " ".join(_fmt(v, precision) for v in (vb_x, vb_y, vb_w, vb_h))

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (
            '<svg xmlns="http://www.w3.org/2000/svg" '
            f'{size} viewBox="{view_box}">'
        ),
    ]
    for path in paths:
        path_fill = path.color if path.color is not None else fill
        paint = _paint_attrs("fill", path_fill) + " " + _paint_attrs("stroke", stroke)
        if svg_color(stroke)[0] != "none":
            paint += f' stroke-width="{stroke_width:.4g}"'
        d = quoteattr(path.to_svg_path_data(precision=precision))
        lines.append(f"  <path d={d} {paint} />")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def write_svg(
    paths: Path2D | Iterable[Path2D],
    path: Path,
    **kwargs,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(svg_document(paths, **kwargs))
    return path
