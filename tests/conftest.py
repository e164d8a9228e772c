from __future__ import annotations

import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def load_example(path: Path) -> ModuleType:
    """Import a docs example module by path."""
    module_name = f"smoothcorners_example_{path.stem}"
    sys.modules.pop(module_name, None)
    spec = importlib.util.spec_from_file_location(module_name, path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_dir = tmp_path / "config"
    monkeypatch.setenv("SMOOTHCORNERS_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def examples_dir(project_root: Path) -> Path:
    return project_root / "docs" / "examples"


class FakePlotter:
    instances: list["FakePlotter"] = []

    def __init__(self, *args, **kwargs):
        self.kwargs = kwargs
        self.meshes = []
        self.points = []
        self.shown = None
        self.closed = False
        self.camera_position = None
        FakePlotter.instances.append(self)

    def set_background(self, *args, **kwargs):
        pass

    def add_mesh(self, mesh, **kwargs):
        self.meshes.append((mesh, kwargs))

    def add_points(self, points, **kwargs):
        self.points.append(np.asarray(points))

    def show(self, **kwargs):
        self.shown = kwargs

    def close(self):
        self.closed = True


@pytest.fixture
def fake_plotter(monkeypatch: pytest.MonkeyPatch):
    import pyvista as pv

    FakePlotter.instances = []
    monkeypatch.setattr(pv, "Plotter", FakePlotter)
    return FakePlotter
