from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_ENV_VAR = "SMOOTHCORNERS_CONFIG_DIR"
CONFIG_FILENAME = "smoothcorners.cfg"
DEFAULT_CONFIG: Dict[str, Any] = {
    "_comment": "Sampling density for previews, styling for SVG export, and the default smoothness (0..1).",
    "segments_per_circle": 64,
    "bezier_samples": 32,
    "smoothness": 0.6,
    "fill": "#5a7bff",
    "stroke": "none",
    "stroke_width": 1.0,
    "margin": 4.0,
}


@dataclass(frozen=True)
class RenderSettings:
    """Resolved settings from smoothcorners.cfg."""

    segments_per_circle: int
    bezier_samples: int
    smoothness: float
    fill: str
    stroke: str
    stroke_width: float
    margin: float


def config_dir() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".smoothcorners"


def config_file() -> Path:
    return config_dir() / CONFIG_FILENAME


def ensure_user_config() -> None:
    """Ensure smoothcorners.cfg exists with sane defaults."""

    directory = config_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    target = directory / CONFIG_FILENAME
    if target.exists():
        return

    try:
        target.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        data = json.loads(config_file().read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        return DEFAULT_CONFIG.copy()
    return data


def _coerce(raw: Dict[str, Any], key: str, kind: type, minimum: float | None = None, maximum: float | None = None):
    default = DEFAULT_CONFIG[key]
    value = raw.get(key, default)
    try:
        value = kind(value)
    except (TypeError, ValueError):
        return default
    if minimum is not None and value < minimum:
        return default
    if maximum is not None and value > maximum:
        return default
    return value


def get_render_settings() -> RenderSettings:
    """Return the configured sampling and styling, falling back to defaults for bad values."""

    raw_config = _load_user_config()
    return RenderSettings(
        segments_per_circle=_coerce(raw_config, "segments_per_circle", int, minimum=3),
        bezier_samples=_coerce(raw_config, "bezier_samples", int, minimum=2),
        smoothness=_coerce(raw_config, "smoothness", float, minimum=0.0, maximum=1.0),
        fill=_coerce(raw_config, "fill", str),
        stroke=_coerce(raw_config, "stroke", str),
        stroke_width=_coerce(raw_config, "stroke_width", float, minimum=0.0),
        margin=_coerce(raw_config, "margin", float, minimum=0.0),
    )
