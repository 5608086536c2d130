# src/env/gg_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS, COIN_REWARD, LEVEL_COMPLETE_BONUS
from src.game.entities import Difficulty, GameState
from src.game.render import draw_frame, make_fonts
from src.game.session import Snapshot
from src.game.world import StepOutcome, World, step
from src.env.observations import build_observation, OBS_SIZE


class GGEnv(gym.Env):
    """
    Gravity flip runner as a Gymnasium environment (vector observations).
    - The simulation advances one frame per internal step, like the game.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec at 60 fps.
    - Observation: shape (15,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 difficulty="medium",
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.render_mode = render_mode
        self.difficulty = Difficulty.parse(difficulty)
        self.frame_skip = int(frame_skip)

        # Optional built-in truncation (you can also use a TimeLimit wrapper)
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLIP
        self.action_space = gym.spaces.Discrete(2)

        # [y_top_norm, vy_norm, grav, (ceil, floor, dangerTop, dangerBot) x 3]
        low = np.array([0.0, -1.0, -1.0] + [0.0, 0.0, 0.0, 0.0] * 3, dtype=np.float32)
        high = np.array([1.0, 1.0, 1.0] + [1.0, 1.0, 1.0, 1.0] * 3, dtype=np.float32)
        assert low.shape == (OBS_SIZE,)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.world: Optional[World] = None
        self.rng: Optional[random.Random] = None
        self.state = GameState.START_SCREEN
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None
        self.last_outcome = StepOutcome.CONTINUE   # sticky once the episode ends

        # Rendering
        self.screen = None
        self.clock = None
        self.fonts = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        if options and "difficulty" in options:
            self.difficulty = Difficulty.parse(options["difficulty"])

        # A given seed drives the layout directly; otherwise draw one from np_random
        if seed is not None:
            level_seed = int(seed)
        else:
            level_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.current_seed = level_seed
        self.rng = random.Random(level_seed)

        self.world = World.fresh(self.difficulty, WIDTH, HEIGHT)
        self.state = GameState.PLAYING
        self.last_outcome = StepOutcome.CONTINUE
        self.timestep = 0

        obs = self._get_obs()
        info = {"seed": self.current_seed, "difficulty": self.difficulty.value, "score": 0}
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.world is not None and self.rng is not None, "Call reset() before step()"

        if action == 1 and self.state is GameState.PLAYING:
            self.world.player.flip()

        score_before = self.world.score

        for _ in range(self.frame_skip):
            if self.state is not GameState.PLAYING:
                break
            outcome, nxt = step(self.world, self.rng)
            self.last_outcome = outcome
            if outcome is StepOutcome.CONTINUE:
                self.world = nxt
                continue
            self.world.score = nxt.score
            self.world.death_cause = nxt.death_cause
            self.state = (GameState.LEVEL_COMPLETE if outcome is StepOutcome.LEVEL_COMPLETE
                          else GameState.GAME_OVER)

        coins = self.world.score - score_before
        reward = COIN_REWARD * coins
        if self.state is GameState.GAME_OVER:
            reward += -1.0
        elif self.state is GameState.LEVEL_COMPLETE:
            reward += 1.0 + LEVEL_COMPLETE_BONUS
        else:
            reward += 1.0

        self.timestep += 1
        terminated = self.state is not GameState.PLAYING
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": self.world.score,
            "distance_px": self.world.distance_px,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "difficulty": self.difficulty.value,
            "outcome": self.last_outcome.value,
            "death_cause": self.world.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.world is not None
        w = self.world
        return build_observation(w.player, w.platforms, w.obstacles, w.height)

    def snapshot(self) -> Snapshot:
        assert self.world is not None
        w = self.world
        return Snapshot(self.state, w.player, tuple(w.platforms), tuple(w.coins),
                        tuple(w.obstacles), w.score, self.difficulty)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.world is None:
            return

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Gravity Flip Runner — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.fonts = make_fonts()

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()

        draw_frame(self.screen, self.snapshot(), self.fonts)

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.fonts = None
