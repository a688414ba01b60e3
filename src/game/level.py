# src/game/level.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Tuple

from .config import EngineConfig

Box = Tuple[float, float, float, float]  # (x, y, w, h)


@dataclass
class Pillar:
    """One rectangular barrier. Pillars always come in top/bottom pairs."""
    x: float
    y: float
    w: float
    h: float
    pair_id: int
    side: str               # "top" (open on its bottom edge) or "bottom" (open on its top edge)
    passed: bool = False

    def bounds(self) -> Box:
        return self.x, self.y, self.w, self.h

    @property
    def trailing_edge(self) -> float:
        return self.x + self.w


def aabb_overlap(a: Box, b: Box) -> bool:
    """Strict overlap: touching edges do not count."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


class PillarGen:
    """
    Produces pillar pairs at the right edge of the field with a gap drawn
    uniformly in [min_gap_margin, field_h - gap_h - min_gap_margin].
    Seeded like a level: same seed, same sequence of gaps.
    """
    def __init__(self, cfg: EngineConfig, seed: int | None = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.cfg = cfg
        self.seed = seed
        self.rng = random.Random(seed)
        self._next_pair_id = 0

    def spawn_pair(self) -> Tuple[Pillar, Pillar]:
        cfg = self.cfg
        gap_y = self.rng.uniform(cfg.gap_y_min, cfg.gap_y_max)
        pair_id = self._next_pair_id
        self._next_pair_id += 1

        top = Pillar(x=cfg.field_w, y=0.0, w=cfg.pillar_w, h=gap_y,
                     pair_id=pair_id, side="top")
        bottom_y = gap_y + cfg.gap_h
        bottom = Pillar(x=cfg.field_w, y=bottom_y, w=cfg.pillar_w, h=cfg.field_h - bottom_y,
                        pair_id=pair_id, side="bottom")
        return top, bottom


def advance_pillars(pillars: List[Pillar], speed: float, flyer_x: float) -> Tuple[List[Pillar], int]:
    """
    Scroll every pillar left by `speed`, score pairs whose trailing edge has
    crossed flyer_x, and drop pillars that are fully off the left edge.
    Returns (survivors in spawn order, number of pairs scored this call).
    """
    for p in pillars:
        p.x -= speed

    scored = 0
    for p in pillars:
        if not p.passed and p.trailing_edge < flyer_x:
            # credit the pair once, whichever member is seen first
            for mate in pillars:
                if mate.pair_id == p.pair_id:
                    mate.passed = True
            scored += 1

    survivors = [p for p in pillars if p.trailing_edge >= 0]
    return survivors, scored


def first_hit(flyer_box: Box, pillars: List[Pillar]) -> Pillar | None:
    for p in pillars:
        if aabb_overlap(flyer_box, p.bounds()):
            return p
    return None
