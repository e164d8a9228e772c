from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
import pyvista as pv

RGBA = Tuple[float, float, float, float]


def _normalize_color(color: Sequence[float] | str) -> RGBA:
    if isinstance(color, str):
        if color.strip().lower() == "none":
            return (0.0, 0.0, 0.0, 0.0)
        col = pv.Color(color)
        r, g, b = (float(c) for c in col.float_rgb)
        return (r, g, b, 1.0)

    arr = np.asarray(color, dtype=float).flatten()
    if arr.size not in (3, 4):
        raise ValueError("Color must be RGB or RGBA.")
    if arr.max() > 1.0:
        arr = arr / 255.0
    r, g, b = (float(c) for c in arr[:3])
    alpha = float(arr[3]) if arr.size == 4 else 1.0
    return (r, g, b, alpha)


def svg_color(color: Sequence[float] | str | None) -> tuple[str, float]:
    """Return an SVG ``#rrggbb`` string and an opacity for a color spec."""

    if color is None:
        return "none", 1.0
    r, g, b, alpha = _normalize_color(color)
    if alpha <= 0.0:
        return "none", 1.0
    channels = [int(round(np.clip(c, 0.0, 1.0) * 255)) for c in (r, g, b)]
    return "#{:02x}{:02x}{:02x}".format(*channels), alpha
