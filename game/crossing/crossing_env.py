"""
CrossingEnv - the crossing game as a gymnasium environment
---------------------------------------------------------
- Wraps GameState; one step() is one frame
- Gymnasium API
- Discrete action space: none, left, up, right, down
- Reward for crossing to the water, picking up treats and advancing
  rows; penalty for getting hit by an enemy
- Vector observation: player tile + level + top-K nearest enemies +
  top-M nearest treats
- Arcade window for "human" and "rgb_array" rendering

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.crossing.crossing_env
"""

from __future__ import annotations

import random
import time
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .utils import clamp
from .constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, COL_WIDTH, ROW_HEIGHT, NUM_COLS, NUM_ROWS,
    CHARACTER_VERT_OFFSET, START_ENEMY_COUNT, START_MAX_SPEED, START_MIN_SPEED,
    START_TREAT_COUNT,
)
from .entities import Direction
from .state import GameState, GameStateController

ACTIONS = (Direction.NONE, Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN)

DEFAULT_REWARDS = {
    "R_LEVEL": 5.0,      # reached the water
    "R_TREAT": 1.0,      # picked up a gem or heart
    "R_ADVANCE": 0.2,    # new best row in the current crossing
    "R_HIT": 1.0,        # penalty for being sent back by an enemy
    "R_TIME": 0.001,     # small time penalty
}


class CrossingEnv(gym.Env):
    """Tile crossing game environment using Arcade"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = 1 / 30,
        max_steps: int = 1800,  # 60s at 30 FPS
        k_enemies: int = 5,
        m_treats: int = 3,
        enemy_count: int = START_ENEMY_COUNT,
        max_speed: float = START_MAX_SPEED,
        min_speed: float = START_MIN_SPEED,
        treat_count: int = START_TREAT_COUNT,
        speed_norm: float = 400.0,  # px/s mapped to 1.0 in observations
        max_level_obs: int = 20,
        reward_config: Optional[Dict[str, float]] = None,
        assets_root: str = ".",
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        self.dt = dt
        self.max_steps = max_steps

        # Observation config
        self.k_enemies = k_enemies
        self.m_treats = m_treats
        self.speed_norm = speed_norm
        self.max_level_obs = max_level_obs

        # Gameplay config
        self.enemy_count = enemy_count
        self.max_speed = max_speed
        self.min_speed = min_speed
        self.treat_count = treat_count

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config is not None:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.assets_root = assets_root

        self.action_space = spaces.Discrete(len(ACTIONS))

        # Player: col(1) row(1) level(1)
        # Each enemy: rel pos(2) speed(1)
        # Each treat: rel pos(2)
        obs_dim = 3 + (self.k_enemies * 3) + (self.m_treats * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # Arcade rendering state
        self._window = None

        # World state
        self.game: GameState = None  # type: ignore

        # Episode state
        self._step_count = 0
        self._best_row = NUM_ROWS - 1
        self._totals: Dict[str, int] = {}
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        # Board randomness comes from the gymnasium generator so seeded
        # resets reproduce the same board
        rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))

        controller = GameStateController(
            enemy_count=self.enemy_count,
            max_speed=self.max_speed,
            min_speed=self.min_speed,
            treat_count=self.treat_count,
            rng=rng,
        )
        self.game = GameState(controller)
        self.game.start()

        if self._window is not None:
            self._window.attach(self.game)

        self._step_count = 0
        self._best_row = self._player_row()
        self._totals = {"treats_collected": 0, "level_ups": 0, "resets": 0}

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        self.game.queue_input(ACTIONS[int(action)])
        frame = self.game.tick(self.dt)

        self._events = {
            "level_up": float(frame["level_up"]),
            "treat": float(frame["treat"]),
            "hit": float(frame["reset"]),
            "advance": 0.0,
        }
        self._totals["treats_collected"] += frame["treat"]
        self._totals["level_ups"] += frame["level_up"]
        self._totals["resets"] += frame["reset"]

        row = self._player_row()
        if frame["level_up"] or frame["reset"]:
            self._best_row = row
        elif row < self._best_row:
            self._events["advance"] += self._best_row - row
            self._best_row = row

        reward = self._compute_reward()

        terminated = False
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _player_row(self) -> int:
        return int(round((self.game.player.y - CHARACTER_VERT_OFFSET) / ROW_HEIGHT))

    def _get_obs(self) -> np.ndarray:
        player = self.game.player
        col = player.x / COL_WIDTH
        row = self._player_row()
        level = min(self.game.controller.level, self.max_level_obs) / self.max_level_obs

        obs_parts: List[float] = [
            col / (NUM_COLS - 1) * 2 - 1,  # map to [-1,1]
            row / (NUM_ROWS - 1) * 2 - 1,
            level * 2 - 1,
        ]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            self.game.enemies,
            key=lambda e: (e.x - player.x) ** 2 + (e.y - player.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                dx = (e.x - player.x) / CANVAS_WIDTH
                dy = (e.y - player.y) / CANVAS_HEIGHT
                speed = e.speed / max(1e-6, self.speed_norm)
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1), clamp(speed, -1, 1)]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        # Treats: top-M nearest
        treats_sorted = sorted(
            self.game.treats,
            key=lambda t: (t.x - player.x) ** 2 + (t.y - player.y) ** 2
        )
        for i in range(self.m_treats):
            if i < len(treats_sorted):
                t = treats_sorted[i]
                dx = (t.x - player.x) / CANVAS_WIDTH
                dy = (t.y - player.y) / CANVAS_HEIGHT
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_LEVEL"] * self._events.get("level_up", 0.0)
        reward += r["R_TREAT"] * self._events.get("treat", 0.0)
        reward += r["R_ADVANCE"] * self._events.get("advance", 0.0)

        reward -= r["R_HIT"] * self._events.get("hit", 0.0)
        reward -= r["R_TIME"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        controller = self.game.controller
        return {
            "level": controller.level,
            "score": controller.score,
            "num_enemies": len(self.game.enemies),
            "num_treats": len(self.game.treats),
            "treats_collected": self._totals.get("treats_collected", 0),
            "level_ups": self._totals.get("level_ups", 0),
            "resets": self._totals.get("resets", 0),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # Imported here so headless use never touches OpenGL
            from .window import CrossingWindow
            self._window = CrossingWindow(
                self.game,
                assets_root=self.assets_root,
                drive=False,
                visible=self.render_mode == "human",
            )

        self._window.switch_to()
        self._window.dispatch_events()
        self._window.on_draw()

        if self.render_mode == "human":
            self._window.flip()
            return None
        return self._window.capture()

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = CrossingEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... Close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render:
            time.sleep(env.dt)

    print(f"Random episode return: {total:.2f}")
    print(f"Level reached: {info['level']}, score: {info['score']}, "
          f"hits: {info['resets']}")

    env.close()
    return total, info


if __name__ == "__main__":
    # Use: python -m game.crossing.crossing_env
    run_random_episode(render=True)
