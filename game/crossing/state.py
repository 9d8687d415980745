"""
Game state: the level/score controller and the per-frame world update.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Dict, List, Optional, Union

from .constants import (
    CANVAS_WIDTH, ENEMY_ROWS, NUM_COLS, TREAT_ROWS, MAX_TREATS,
    START_ENEMY_COUNT, START_MAX_SPEED, START_MIN_SPEED, START_TREAT_COUNT,
    ENEMY_LEVEL_INTERVAL, SPEED_LEVEL_INTERVAL, MAX_SPEED_STEP, MIN_SPEED_STEP,
    PLAYER_START_X, PLAYER_START_Y, col_to_x, row_to_y,
)
from .entities import Direction, Enemy, Player, Treat, TreatKind
from .interfaces import NullDisplay, Renderer, ScoreDisplay


class GameStateController:
    """
    Keeps track of the level and score and owns the enemy and treat
    collections, which it rebuilds on every level up.
    """

    def __init__(
        self,
        enemy_count: int = START_ENEMY_COUNT,
        max_speed: float = START_MAX_SPEED,
        min_speed: float = START_MIN_SPEED,
        treat_count: int = START_TREAT_COUNT,
        display: Optional[ScoreDisplay] = None,
        rng: Optional[random.Random] = None,
        verbose: int = 0,
    ):
        if enemy_count < 0:
            raise ValueError(f"enemy_count must be >= 0, got {enemy_count}")
        if not 0 <= min_speed <= max_speed:
            raise ValueError(f"Need 0 <= min_speed <= max_speed, got {min_speed}, {max_speed}")

        self.level = 1
        self.score = 0
        self.enemy_count = enemy_count
        self.max_speed = max_speed
        self.min_speed = min_speed
        self.treat_count = min(treat_count, MAX_TREATS)

        self.display = display if display is not None else NullDisplay()
        self.rng = rng if rng is not None else random.Random()
        self.verbose = verbose

        self.all_enemies: List[Enemy] = []
        self.all_treats: List[Treat] = []

    # ----------------------------
    # Board generation
    # ----------------------------

    def clear_enemies(self) -> None:
        self.all_enemies = []

    def clear_treats(self) -> None:
        self.all_treats = []

    def generate_enemies(self) -> List[Enemy]:
        """Spawn enemy_count enemies, cycling through the stone rows"""
        enemies = []
        for i in range(self.enemy_count):
            row = ENEMY_ROWS[i % len(ENEMY_ROWS)]
            start_x = self.rng.random() * CANVAS_WIDTH
            speed = self.rng.random() * (self.max_speed - self.min_speed) + self.min_speed
            enemies.append(Enemy(start_x, row_to_y(row), speed))

        self.all_enemies = enemies
        return enemies

    def generate_treats(self) -> List[Treat]:
        """
        Place treat_count treats on distinct tiles, never on the water
        row or the player's start row. Sorted top to bottom so lower
        treats are drawn over the ones above them.
        """
        count = min(self.treat_count, MAX_TREATS)
        cells = set()
        while len(cells) < count:
            cell = (self.rng.randrange(NUM_COLS), self.rng.choice(TREAT_ROWS))
            if cell in cells:
                continue
            cells.add(cell)

        kinds = list(TreatKind)
        treats = []
        for col, row in sorted(cells, key=lambda cell: (cell[1], cell[0])):
            kind = self.rng.choice(kinds)
            treats.append(Treat(col_to_x(col), row_to_y(row), kind))

        self.all_treats = treats
        return treats

    def regenerate(self) -> None:
        self.clear_enemies()
        self.clear_treats()
        self.generate_enemies()
        self.generate_treats()

    # ----------------------------
    # Scoring / leveling
    # ----------------------------

    def update_score(self, points: int = 1) -> None:
        self.score += points
        self.display.show_score(self.score)

    def collect_treat(self, treat: Treat) -> bool:
        """
        Score a point and remove exactly this treat instance. A treat
        that is already gone scores nothing. Returns whether it was removed.
        """
        if not any(t is treat for t in self.all_treats):
            return False
        self.all_treats = [t for t in self.all_treats if t is not treat]
        self.update_score(1)
        return True

    def level_up(self) -> None:
        """Bump the level, ramp up difficulty and rebuild the board"""
        self.level += 1
        if self.verbose > 0:
            print(f"level {self.level}")

        self.update_score(1)
        self.display.show_level(self.level)

        if self.level % ENEMY_LEVEL_INTERVAL == 0:
            self.enemy_count += 1
            if self.verbose > 0:
                print(f"{self.level} increasing enemy count to {self.enemy_count}")

        if self.level % SPEED_LEVEL_INTERVAL == 0:
            self.max_speed += MAX_SPEED_STEP
            self.min_speed += MIN_SPEED_STEP
            if self.treat_count < MAX_TREATS:
                self.treat_count += 1
            if self.verbose > 0:
                print(f"{self.level} increasing speed to "
                      f"[{self.min_speed:.0f}, {self.max_speed:.0f}) px/s")

        self.regenerate()


class GameState:
    """
    Everything one game needs: the controller, the player and queued
    input. A frame driver calls tick(dt) then render() once per frame.
    """

    def __init__(self, controller: Optional[GameStateController] = None,
                 player: Optional[Player] = None):
        self.controller = controller if controller is not None else GameStateController()
        self.player = player if player is not None else Player(PLAYER_START_X, PLAYER_START_Y)
        self._inputs: Deque[Direction] = deque()

    @classmethod
    def new_game(cls, display: Optional[ScoreDisplay] = None,
                 seed: Optional[int] = None, **controller_kwargs) -> "GameState":
        """Build a game at level 1 with its first board generated"""
        controller = GameStateController(
            display=display, rng=random.Random(seed), **controller_kwargs
        )
        state = cls(controller)
        state.start()
        return state

    @property
    def enemies(self) -> List[Enemy]:
        return self.controller.all_enemies

    @property
    def treats(self) -> List[Treat]:
        return self.controller.all_treats

    def start(self) -> None:
        self.controller.regenerate()
        self._refresh_display()

    def set_display(self, display: ScoreDisplay) -> None:
        """Route score and level to a new display, showing the current values"""
        self.controller.display = display
        self._refresh_display()

    def _refresh_display(self) -> None:
        self.controller.display.show_score(self.controller.score)
        self.controller.display.show_level(self.controller.level)

    def queue_input(self, direction: Union[Direction, str, None]) -> None:
        """Buffer a direction until the next tick. None is dropped."""
        if direction is None:
            return
        self._inputs.append(direction)

    def tick(self, dt: float) -> Dict[str, int]:
        """Advance one frame. Returns counts of what happened during it."""
        events = {"reset": 0, "level_up": 0, "treat": 0}

        while self._inputs:
            self.player.handle_input(self._inputs.popleft())

        for enemy in list(self.enemies):
            if enemy.update(dt, self.player):
                events["reset"] += 1

        if self.player.update(self.controller):
            events["level_up"] += 1

        # Level up may have just swapped in a new set of treats
        for treat in list(self.treats):
            if treat.update(self.player, self.controller):
                events["treat"] += 1

        return events

    def render(self, renderer: Renderer, debug: bool = False) -> None:
        for treat in self.treats:
            treat.render(renderer, debug)
        for enemy in self.enemies:
            enemy.render(renderer, debug)
        self.player.render(renderer, debug)
