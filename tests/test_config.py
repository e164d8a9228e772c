from __future__ import annotations

import json

from smoothcorners._config import DEFAULT_CONFIG, config_file, get_render_settings


def test_defaults_written_on_first_use(isolated_config):
    settings = get_render_settings()
    assert (isolated_config / "smoothcorners.cfg").exists()
    assert settings.segments_per_circle == DEFAULT_CONFIG["segments_per_circle"]
    assert settings.smoothness == DEFAULT_CONFIG["smoothness"]
    assert settings.fill == DEFAULT_CONFIG["fill"]


def test_user_values_override_defaults(isolated_config):
    isolated_config.mkdir(parents=True)
    config_file().write_text(json.dumps({"smoothness": 0.25, "bezier_samples": 12, "stroke": "black"}))
    settings = get_render_settings()
    assert settings.smoothness == 0.25
    assert settings.bezier_samples == 12
    assert settings.stroke == "black"
    assert settings.margin == DEFAULT_CONFIG["margin"]


def test_invalid_values_fall_back(isolated_config):
    isolated_config.mkdir(parents=True)
    config_file().write_text(json.dumps({"smoothness": 3, "segments_per_circle": "lots", "margin": -1}))
    settings = get_render_settings()
    assert settings.smoothness == DEFAULT_CONFIG["smoothness"]
    assert settings.segments_per_circle == DEFAULT_CONFIG["segments_per_circle"]
    assert settings.margin == DEFAULT_CONFIG["margin"]


def test_unreadable_config_falls_back(isolated_config):
    isolated_config.mkdir(parents=True)
    config_file().write_text("{not json")
    settings = get_render_settings()
    assert settings.bezier_samples == DEFAULT_CONFIG["bezier_samples"]
