# src/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 1920                # play-field width (world px)
HEIGHT = 1080               # play-field height (world px)
FPS = 60
FRAME_MS = 1000.0 / FPS     # simulated time per tick
WINDOW_SCALE = 0.5          # front-end window = field * scale

# --- World / Physics (per tick, not per second) ---
GRAVITY = 0.5
JUMP_STRENGTH = -8.0        # overwrites vy, never added
BASE_SPEED = 12.0           # pillar scroll speed at score 0 (px/tick)
SPEED_INCREASE_RATE = 0.1   # extra px/tick per point
MARGIN_H = 120              # ceiling / ground band height

# --- Flyer ---
FLYER_X = 400
FLYER_W = 360
FLYER_H = 203               # 16:9 of FLYER_W

# --- Pillars ---
PILLAR_W = 360
GAP_H = 400                 # vertical opening of a pair
MIN_GAP_MARGIN = 200        # gap never starts closer than this to either edge
SEED_DEFAULT = 12345

# --- Spawn cadence (ms) ---
FIRST_SPAWN_DELAY_MS = 2000
SPAWN_BANDS = (             # (score upper bound, interval), first match wins
    (10, 3000),
    (20, 2500),
    (50, 2000),
    (100, 1500),
)
SPAWN_INTERVAL_MIN_MS = 1000

# --- Colors (RGB) ---
COLOR_BG = (9, 14, 28)
COLOR_FG = (220, 232, 255)
COLOR_ACCENT = (120, 200, 255)
COLOR_PLAT = (139, 69, 19)
COLOR_MARGIN = (245, 245, 245)
COLOR_DANGER = (255, 86, 110)


class ConfigError(ValueError):
    """Raised when field constants cannot produce a playable session."""


@dataclass(frozen=True)
class EngineConfig:
    """
    Every tunable the engine reads. Defaults come from the module constants;
    build variants with dataclasses.replace(). Validated on construction so a
    bad field never reaches the gap draw.
    """
    field_w: float = WIDTH
    field_h: float = HEIGHT
    frame_ms: float = FRAME_MS
    gravity: float = GRAVITY
    jump_strength: float = JUMP_STRENGTH
    base_speed: float = BASE_SPEED
    speed_increase_rate: float = SPEED_INCREASE_RATE
    margin_h: float = MARGIN_H
    flyer_x: float = FLYER_X
    flyer_w: float = FLYER_W
    flyer_h: float = FLYER_H
    pillar_w: float = PILLAR_W
    gap_h: float = GAP_H
    min_gap_margin: float = MIN_GAP_MARGIN
    first_spawn_delay_ms: float = FIRST_SPAWN_DELAY_MS

    def __post_init__(self):
        for name in ("field_w", "field_h", "frame_ms", "gravity", "base_speed",
                     "flyer_w", "flyer_h", "pillar_w", "gap_h"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be > 0, got {getattr(self, name)!r}")
        for name in ("speed_increase_rate", "margin_h", "min_gap_margin", "first_spawn_delay_ms"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)!r}")
        if self.jump_strength >= 0:
            raise ConfigError(f"jump_strength must be negative (upward), got {self.jump_strength!r}")
        if self.gap_y_max < self.gap_y_min:
            raise ConfigError(
                f"empty gap range [{self.gap_y_min}, {self.gap_y_max}]: "
                f"field_h={self.field_h} gap_h={self.gap_h} min_gap_margin={self.min_gap_margin}"
            )
        if self.ground_y <= self.ceiling_y:
            raise ConfigError(f"margins of {self.margin_h} leave no room in a field of {self.field_h}")
        if self.flyer_h >= self.gap_h:
            raise ConfigError(f"flyer_h={self.flyer_h} cannot fit through gap_h={self.gap_h}")

    @property
    def gap_y_min(self) -> float:
        return self.min_gap_margin

    @property
    def gap_y_max(self) -> float:
        return self.field_h - self.gap_h - self.min_gap_margin

    @property
    def ground_y(self) -> float:
        return self.field_h - self.margin_h

    @property
    def ceiling_y(self) -> float:
        return self.margin_h
