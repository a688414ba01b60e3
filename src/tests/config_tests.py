# src/tests/config_tests.py
from __future__ import annotations
from dataclasses import replace, FrozenInstanceError

import pytest

from src.game.config import ConfigError, EngineConfig


def test_defaults_are_playable():
    cfg = EngineConfig()
    assert cfg.gap_y_min <= cfg.gap_y_max
    assert cfg.ceiling_y < cfg.ground_y
    assert cfg.flyer_h < cfg.gap_h


def test_config_is_frozen():
    cfg = EngineConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.gravity = 1.0


@pytest.mark.parametrize("changes", [
    {"gap_h": 800, "min_gap_margin": 400},     # range would run backwards
    {"gap_h": 1100},
    {"gravity": 0},
    {"field_w": -1},
    {"pillar_w": 0},
    {"frame_ms": 0},
    {"speed_increase_rate": -0.1},
    {"min_gap_margin": -5},
    {"jump_strength": 8.0},
    {"margin_h": 540},
    {"flyer_h": 450},
])
def test_bad_fields_fail_at_construction(changes):
    with pytest.raises(ConfigError):
        replace(EngineConfig(), **changes)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        EngineConfig(gap_h=800, min_gap_margin=400)


def test_zero_width_gap_range_is_allowed():
    cfg = EngineConfig(field_h=1080, gap_h=480, min_gap_margin=300)
    assert cfg.gap_y_min == cfg.gap_y_max == 300
