from __future__ import annotations

from .svg import svg_document, write_svg

__all__ = ["svg_document", "write_svg"]
