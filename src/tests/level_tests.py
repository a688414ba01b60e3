# src/tests/level_tests.py
from __future__ import annotations

import pytest

from src.game.config import EngineConfig
from src.game.level import Pillar, PillarGen, aabb_overlap, advance_pillars, first_hit


def make_pair(x: float, pair_id: int, gap_y: float = 300.0, cfg: EngineConfig = EngineConfig()):
    top = Pillar(x=x, y=0.0, w=cfg.pillar_w, h=gap_y, pair_id=pair_id, side="top")
    by = gap_y + cfg.gap_h
    bot = Pillar(x=x, y=by, w=cfg.pillar_w, h=cfg.field_h - by, pair_id=pair_id, side="bottom")
    return [top, bot]


def test_pair_geometry_and_bounds():
    cfg = EngineConfig()
    gen = PillarGen(cfg, seed=42)
    for i in range(500):
        top, bot = gen.spawn_pair()
        assert top.pair_id == bot.pair_id == i
        assert (top.side, bot.side) == ("top", "bottom")
        assert top.x == bot.x == cfg.field_w
        assert top.w == bot.w == cfg.pillar_w
        assert top.y == 0.0
        assert cfg.gap_y_min <= top.h <= cfg.gap_y_max
        assert bot.y == pytest.approx(top.h + cfg.gap_h)
        assert bot.y + bot.h == pytest.approx(cfg.field_h)
        assert not top.passed and not bot.passed


def test_same_seed_same_gaps():
    a = PillarGen(EngineConfig(), seed=7)
    b = PillarGen(EngineConfig(), seed=7)
    assert [a.spawn_pair()[0].h for _ in range(20)] == [b.spawn_pair()[0].h for _ in range(20)]


def test_random_seed_is_recorded():
    gen = PillarGen(EngineConfig(), seed=None)
    assert isinstance(gen.seed, int)


def test_aabb_touching_is_not_overlap():
    assert aabb_overlap((0, 0, 10, 10), (5, 5, 10, 10))
    assert not aabb_overlap((0, 0, 10, 10), (10, 0, 10, 10))
    assert not aabb_overlap((0, 0, 10, 10), (0, 10, 10, 10))
    assert aabb_overlap((0, 0, 10, 10), (2, 2, 1, 1))


def test_pair_scores_once():
    pillars = make_pair(x=50.0, pair_id=0)
    flyer_x = 400.0
    pillars, scored = advance_pillars(pillars, speed=12.0, flyer_x=flyer_x)
    # trailing edge 398 < 400: crossed this tick
    assert scored == 1
    assert all(p.passed for p in pillars)
    pillars, scored = advance_pillars(pillars, speed=12.0, flyer_x=flyer_x)
    assert scored == 0


def test_trailing_edge_on_flyer_x_is_not_a_pass():
    pillars = make_pair(x=52.0, pair_id=0)
    pillars, scored = advance_pillars(pillars, speed=12.0, flyer_x=400.0)
    assert scored == 0 and not any(p.passed for p in pillars)


def test_orphan_bottom_still_scores_once():
    pillars = make_pair(x=50.0, pair_id=3)[1:]   # pair identity, not list position
    pillars, scored = advance_pillars(pillars, speed=12.0, flyer_x=400.0)
    assert scored == 1


def test_removal_does_not_skip_neighbours():
    cfg = EngineConfig()
    pillars = make_pair(-350.0, 0) + make_pair(-355.0, 1) + make_pair(600.0, 2)
    for p in pillars[:4]:
        p.passed = True
    pillars, scored = advance_pillars(pillars, speed=12.0, flyer_x=400.0)
    assert scored == 0
    assert [p.pair_id for p in pillars] == [2, 2]
    assert all(p.trailing_edge >= 0 for p in pillars)
    assert pillars[0].x == 588.0 and pillars[0].w == cfg.pillar_w


def test_pillar_scored_and_removed_in_same_call():
    pillars = make_pair(-355.0, 0)
    pillars, scored = advance_pillars(pillars, speed=12.0, flyer_x=400.0)
    assert scored == 1 and pillars == []


def test_first_hit_short_circuits_in_spawn_order():
    pillars = make_pair(400.0, 0, gap_y=100.0) + make_pair(400.0, 1, gap_y=100.0)
    flyer = (400.0, 50.0, 360.0, 203.0)
    hit = first_hit(flyer, pillars)
    assert hit is pillars[0]
    assert first_hit((400.0, 120.0, 360.0, 203.0), pillars) is None
