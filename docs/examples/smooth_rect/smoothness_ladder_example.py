"""Row of tiles from plain circular corners (0) to full smoothing (1)."""

from __future__ import annotations

from pathlib import Path

from smoothcorners.geometry import make_round_rect
from smoothcorners.io import write_svg

STEPS = (0.0, 0.25, 0.5, 0.75, 1.0)
TILE = 120.0
GAP = 20.0


def build():
    return [
        make_round_rect(index * (TILE + GAP), 0.0, TILE, TILE, smoothness=smoothness, radius=30.0)
        for index, smoothness in enumerate(STEPS)
    ]


if __name__ == "__main__":
    out = write_svg(build(), Path("smoothness_ladder.svg"), fill="#f58f7c", stroke="#1b2333")
    print(f"Wrote {out}")
