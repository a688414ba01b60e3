# src/env/skyhop_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import FPS, EngineConfig
from src.game.game import draw_field
from src.game.session import GameSession
from src.env.observations import OBS_SIZE, build_observation

RENDER_SCALE = 0.25


class SkyHopEnv(gym.Env):
    """
    SkyHop Gymnasium environment (vector observations).
    - Simulation at 60 ticks/s (one engine tick per frame).
    - Agent acts every `frame_skip` ticks (default 2) -> 30 decisions/sec.
    - Observation: shape (7,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0,
                 config: Optional[EngineConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode!r}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.config = config if config is not None else EngineConfig()

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = FPS / frame_skip
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)

        # [y, vy, next_dx, gap_top, gap_bottom, speed, has_next]
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.session: Optional[GameSession] = None
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seed given -> exact replay; otherwise PillarGen draws one
        self.session = GameSession(self.config, seed=int(seed) if seed is not None else None)
        self.session.jump()   # Idle -> Running
        self.timestep = 0
        self.current_seed = self.session.seed

        obs = build_observation(self.session)
        info = {"seed": self.current_seed, "score": 0}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None, "Call reset() before step()"
        s = self.session

        if int(action) == 1 and s.running:
            s.jump()

        score_before = s.score
        for _ in range(self.frame_skip):
            s.tick()
            if not s.running:
                break

        if s.game_over:
            reward = -1.0
        else:
            reward = 0.1 + float(s.score - score_before)

        self.timestep += 1
        terminated = s.game_over
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = build_observation(s)
        info = {
            "score": s.score,
            "ticks": s.ticks,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "end_cause": s.end_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return None

        cfg = self.session.cfg
        size = (int(cfg.field_w * RENDER_SCALE), int(cfg.field_h * RENDER_SCALE))
        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(size)
                pygame.display.set_caption("SkyHop - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface(size)

        draw_field(self.screen, self.session, RENDER_SCALE)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
