# stickjump/env/climb_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from stickjump.game.config import WIDTH, HEIGHT, FPS
from stickjump.game.game import render as draw_frame
from stickjump.game.player import InputState
from stickjump.game.simulation import GameState, Simulation
from stickjump.env.observations import build_observation, observation_bounds

ACTIONS = (
    InputState(),                          # 0 = NOOP
    InputState(left=True),                 # 1 = LEFT
    InputState(right=True),                # 2 = RIGHT
)


class ClimbEnv(gym.Env):
    """
    Stick Jump Gymnasium environment (vector observations).
    - Simulation at 60 Hz fixed ticks.
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Reward: score gained during the decision step * score_scale, -1 on game over.
    - Episodes start directly in PLAY (the menu confirm is implied by reset).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 score_scale: float = 0.01):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Invalid render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.score_scale = float(score_scale)

        self.sim_fps = 60
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(len(ACTIONS))
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self._fonts = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - If a seed is provided, use it directly for the PlatformField (strict reproducibility).
        # - If not, let the PlatformField randomize internally (None).
        level_seed = int(seed) if seed is not None else None

        self.sim = Simulation(level_seed)
        self.sim.step(confirm=True)      # MENU -> PLAY
        self.current_seed = self.sim.seed
        self.timestep = 0

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": self.sim.score}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() before step()"

        inp = ACTIONS[int(action)]
        score_before = self.sim.score
        landed = False

        for _ in range(self.frame_skip):
            landings = self.sim.landings
            self.sim.step(inp)
            landed = landed or self.sim.landings > landings
            if self.sim.state is GameState.GAMEOVER:
                break

        terminated = self.sim.state is GameState.GAMEOVER
        reward = -1.0 if terminated else float(self.sim.score - score_before) * self.score_scale

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = self._get_obs()
        info = {
            "score": self.sim.score,
            "ticks": self.sim.ticks,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "landed": landed,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.snapshot(), self.sim.player.vx, self.sim.player.vy)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None
        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Stick Jump - Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self._fonts = (pygame.font.SysFont("system-ui", 18),
                           pygame.font.SysFont("system-ui", 26, bold=True))

        draw_frame(self.screen, self.sim.snapshot(), *self._fonts, tilt_enabled=False)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self._fonts = None
