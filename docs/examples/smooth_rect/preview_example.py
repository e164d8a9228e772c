"""Preview a smooth outline next to a plain rounded one.

Run with:
  python docs/examples/smooth_rect/preview_example.py
"""

from __future__ import annotations

from smoothcorners.geometry import build_round_rect, build_smooth_round_rect
from smoothcorners.preview import OutlinePreviewer


def build():
    smooth = build_smooth_round_rect(0.0, 0.0, 160.0, 160.0, smoothness=1.0, radius=40.0).with_color("#9ae6b4")
    plain = build_round_rect(0.0, 0.0, 160.0, 160.0, radius=40.0).with_color("#f58f7c")
    return [plain, smooth]


if __name__ == "__main__":
    OutlinePreviewer(console=None).show(build(), show_points=True)
