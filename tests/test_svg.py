from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from smoothcorners.geometry.smooth_rect import build_round_rect, build_smooth_round_rect
from smoothcorners.io.svg import svg_document, write_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_svg_document_view_box_and_path():
    outline = build_smooth_round_rect(0, 0, 200, 100, 0.6, 20)
    doc = svg_document(outline, margin=4.0)
    root = ET.fromstring(doc.split("\n", 1)[1])
    assert root.attrib["viewBox"] == "-4 -4 208 108"
    paths = root.findall(f"{SVG_NS}path")
    assert len(paths) == 1
    assert paths[0].attrib["d"].startswith("M 0 32 C ")
    assert paths[0].attrib["d"].endswith(" Z")
    assert paths[0].attrib["fill"] == "#5a7bff"
    assert paths[0].attrib["stroke"] == "none"
    assert "stroke-width" not in paths[0].attrib


def test_svg_document_uses_path_color_and_stroke():
    first = build_round_rect(0, 0, 50, 50, 5).with_color((0, 0, 255, 128))
    second = build_smooth_round_rect(60, 0, 50, 50, 0.5, 10)
    doc = svg_document([first, second], fill="red", stroke="black", stroke_width=2.0, margin=0.0)
    root = ET.fromstring(doc.split("\n", 1)[1])
    assert root.attrib["viewBox"] == "0 0 110 50"
    paths = root.findall(f"{SVG_NS}path")
    assert paths[0].attrib["fill"] == "#0000ff"
    assert float(paths[0].attrib["fill-opacity"]) == pytest.approx(128 / 255, abs=1e-3)
    assert paths[1].attrib["fill"] == "#ff0000"
    assert paths[1].attrib["stroke"] == "#000000"
    assert paths[1].attrib["stroke-width"] == "2"


def test_svg_document_requires_paths():
    with pytest.raises(ValueError):
        svg_document([])


def test_write_svg(tmp_path):
    target = tmp_path / "nested" / "rect.svg"
    written = write_svg(build_smooth_round_rect(0, 0, 80, 40, 0.3, 8), target)
    assert written == target
    text = target.read_text()
    assert text.startswith("<?xml")
    assert "<path d=" in text


def _view_box(doc: str) -> list[float]:
    root = ET.fromstring(doc.split("\n", 1)[1])
    return [float(v) for v in root.attrib["viewBox"].split()]


def test_svg_view_box_keeps_large_extents():
    outline = build_smooth_round_rect(0, 0, 19997, 100, 0.6, 20)
    doc = svg_document(outline, margin=4.0)
    assert _view_box(doc) == [-4.0, -4.0, 20005.0, 108.0]
    root = ET.fromstring(doc.split("\n", 1)[1])
    assert root.attrib["width"] == "20005"
    assert "e+" not in doc


def test_svg_view_box_covers_fractional_origin():
    outline = build_smooth_round_rect(1.23456, 7.654321, 100, 50, 0.5, 10)
    vb_x, vb_y, vb_w, vb_h = _view_box(svg_document(outline, margin=0.0))
    assert vb_x <= 1.23456
    assert vb_y <= 7.654321
    assert vb_x + vb_w >= 101.23456
    assert vb_y + vb_h >= 57.654321
