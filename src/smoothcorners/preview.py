from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, List

import numpy as np
from rich.console import Console

from smoothcorners._config import RenderSettings, get_render_settings
from smoothcorners.geometry.path2d import Path2D


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


def _collect_paths(scene: object) -> List[Path2D]:
    paths: List[Path2D] = []

    def visit(item: object) -> None:
        if item is None:
            return
        if isinstance(item, Path2D):
            paths.append(item)
            return
        if isinstance(item, (list, tuple, set)):
            for value in item:
                visit(value)
            return
        raise PreviewBackendError("Preview scenes must be Path2D outlines (or a list of them).")

    visit(scene)
    if not paths:
        raise PreviewBackendError("Scene did not produce any outlines.")
    return paths


class OutlinePreviewer:
    """Render Path2D outlines in the XY plane using PyVista."""

    def __init__(self, console: Console | None, settings: RenderSettings | None = None):
        self.console = console
        self._pv = None
        self._settings = settings or get_render_settings()

    def show(
        self,
        scene: object,
        screenshot_path: Path | None = None,
        line_width: float = 3.0,
        show_points: bool = False,
    ) -> None:
        pv = self._ensure_backend()
        datasets = self.collect_datasets(scene)
        self._log(f"[cyan]Rendering {len(datasets)} outline(s)…[/cyan]")
        off_screen = screenshot_path is not None
        plotter = pv.Plotter(window_size=(1280, 800), off_screen=off_screen)
        plotter.set_background("#090c10", top="#1b2333")
        self._apply_scene(plotter, datasets, line_width=line_width, show_points=show_points)
        self._reset_camera(plotter, datasets)

        try:
            if screenshot_path is not None:
                screenshot_path.parent.mkdir(parents=True, exist_ok=True)
                plotter.show(title="smoothcorners preview", auto_close=False, screenshot=str(screenshot_path))
                self._log(f"Saved screenshot to [green]{screenshot_path}[/green]")
                return
            plotter.show(title="smoothcorners preview")
        finally:
            plotter.close()

    # Internal helpers -----------------------------------------------------

    def _log(self, message: str) -> None:
        if self.console is not None:
            self.console.print(message)

    def _ensure_backend(self):
        if self._pv is None:
            import pyvista as pv

            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def collect_datasets(self, scene: object) -> List[object]:
        """Return (outline, PyVista polyline) pairs for every outline in the scene."""

        self._ensure_backend()
        datasets = []
        for path in _collect_paths(scene):
            poly = path.to_polydata(
                segments_per_circle=self._settings.segments_per_circle,
                bezier_samples=self._settings.bezier_samples,
            )
            datasets.append((path, poly))
        return datasets

    def _apply_scene(self, plotter, datasets: Iterable[object], line_width: float, show_points: bool) -> None:
        color_cycle = ["#6ab0ff", "#f58f7c", "#9cdcfe", "#fadb5f", "#9ae6b4", "#d4b5ff"]
        for index, (path, poly) in enumerate(datasets):
            if path.color is not None:
                color = path.color[:3]
                opacity = path.color[3]
            else:
                color = color_cycle[index % len(color_cycle)]
                opacity = 1.0
            plotter.add_mesh(
                poly,
                name=f"outline-{index}",
                color=color,
                opacity=opacity,
                line_width=line_width,
            )
            if show_points:
                anchors = path.anchor_points()
                plotter.add_points(
                    np.column_stack([anchors, np.zeros(anchors.shape[0])]),
                    name=f"outline-{index}-anchors",
                    color="#fadb5f",
                    point_size=8.0,
                    render_points_as_spheres=True,
                )

    def _reset_camera(self, plotter, datasets: Iterable[object]) -> None:
        bounds = None
        for _, poly in datasets:
            b = poly.bounds
            if bounds is None:
                bounds = [b[0], b[1], b[2], b[3]]
            else:
                bounds[0] = min(bounds[0], b[0])
                bounds[1] = max(bounds[1], b[1])
                bounds[2] = min(bounds[2], b[2])
                bounds[3] = max(bounds[3], b[3])
        if bounds is None:
            return

        x_center = (bounds[0] + bounds[1]) / 2.0
        y_center = (bounds[2] + bounds[3]) / 2.0
        diag = math.hypot(bounds[1] - bounds[0], bounds[3] - bounds[2])
        distance = max(diag, 1.0) * 1.5

        # Screen coordinates: y grows downward.
        camera_pos = (x_center, y_center, distance)
        focal_point = (x_center, y_center, 0.0)
        view_up = (0.0, -1.0, 0.0)
        plotter.camera_position = [camera_pos, focal_point, view_up]
