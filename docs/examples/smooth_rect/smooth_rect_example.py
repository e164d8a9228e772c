"""Smooth rounded rectangle exported to SVG.

Run with:
  python docs/examples/smooth_rect/smooth_rect_example.py
"""

from __future__ import annotations

from pathlib import Path

from smoothcorners.geometry import build_smooth_round_rect
from smoothcorners.io import write_svg


def build():
    return build_smooth_round_rect(0.0, 0.0, 200.0, 100.0, smoothness=0.6, radius=20.0).with_color("#5a7bff")


if __name__ == "__main__":
    out = write_svg(build(), Path("smooth_rect.svg"))
    print(f"Wrote {out}")
