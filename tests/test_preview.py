from __future__ import annotations

import io

import pytest
from rich.console import Console

from smoothcorners._config import get_render_settings
from smoothcorners.geometry.smooth_rect import build_smooth_round_rect
from smoothcorners.preview import OutlinePreviewer, PreviewBackendError


def test_collect_datasets_builds_polylines():
    previewer = OutlinePreviewer(console=None, settings=get_render_settings())
    outline = build_smooth_round_rect(0, 0, 200, 100, 0.6, 20)
    datasets = previewer.collect_datasets([outline, [outline]])
    assert len(datasets) == 2
    path, poly = datasets[0]
    assert path is outline
    assert poly.n_points > 16
    bounds = poly.bounds
    assert bounds[0] == pytest.approx(0.0, abs=1e-6)
    assert bounds[1] == pytest.approx(200.0, abs=1e-6)


def test_collect_datasets_rejects_other_objects():
    previewer = OutlinePreviewer(console=None)
    with pytest.raises(PreviewBackendError):
        previewer.collect_datasets(["not a path"])
    with pytest.raises(PreviewBackendError):
        previewer.collect_datasets([])


def test_show_screenshot_uses_off_screen_plotter(fake_plotter, tmp_path):
    previewer = OutlinePreviewer(console=None)
    outline = build_smooth_round_rect(0, 0, 200, 100, 0.6, 20).with_color("orange")
    target = tmp_path / "shots" / "outline.png"
    previewer.show(outline, screenshot_path=target, show_points=True)

    plotter = fake_plotter.instances[-1]
    assert plotter.kwargs["off_screen"] is True
    assert plotter.shown["screenshot"] == str(target)
    assert plotter.closed
    assert target.parent.is_dir()
    assert len(plotter.meshes) == 1
    assert plotter.meshes[0][1]["opacity"] == 1.0
    assert plotter.points[0].shape == (17, 3)
    camera, focal, up = plotter.camera_position
    assert focal == pytest.approx((100.0, 50.0, 0.0))
    assert up == (0.0, -1.0, 0.0)


def test_show_reports_progress_on_console(fake_plotter, tmp_path):
    stream = io.StringIO()
    console = Console(file=stream, width=200)
    previewer = OutlinePreviewer(console=console)
    outline = build_smooth_round_rect(0, 0, 200, 100, 0.6, 20)
    target = tmp_path / "outline.png"
    previewer.show([outline, outline], screenshot_path=target)

    text = stream.getvalue()
    assert "Rendering 2 outline(s)" in text
    assert f"Saved screenshot to {target}" in text


def test_show_interactive_stays_quiet_about_screenshots(fake_plotter):
    stream = io.StringIO()
    previewer = OutlinePreviewer(console=Console(file=stream, width=200))
    previewer.show(build_smooth_round_rect(0, 0, 80, 40, 0.3, 8))

    plotter = fake_plotter.instances[-1]
    assert plotter.kwargs["off_screen"] is False
    assert "screenshot" not in plotter.shown
    assert "Saved screenshot" not in stream.getvalue()
