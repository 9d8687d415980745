"""
Game entity dataclasses: Enemy, Player, Treat
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union, TYPE_CHECKING

from .utils import HitBox, overlaps
from .constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, ASSET_WIDTH, ASSET_HEIGHT,
    COL_WIDTH, ROW_HEIGHT, CHARACTER_VERT_OFFSET,
    PLAYER_HIT_BOX, ENEMY_HIT_BOX, TREAT_HIT_BOX,
    PLAYER_SPRITE, ENEMY_SPRITE,
    BLUE_GEM_SPRITE, GREEN_GEM_SPRITE, ORANGE_GEM_SPRITE, HEART_SPRITE,
)

if TYPE_CHECKING:
    from .interfaces import Renderer
    from .state import GameStateController


DEBUG_ASSET_COLOR = (0, 0, 0)
DEBUG_HIT_COLOR = (255, 0, 0)


class Direction(Enum):
    """Normalized input direction"""
    NONE = "none"
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"


# (dx, dy) goal offset per direction; NONE has no entry
MOVES = {
    Direction.LEFT: (-COL_WIDTH, 0),
    Direction.UP: (0, -ROW_HEIGHT),
    Direction.RIGHT: (COL_WIDTH, 0),
    Direction.DOWN: (0, ROW_HEIGHT),
}

DIRECTION_NAMES = {d.value: d for d in Direction}


def render_sprite(renderer: "Renderer", sprite: str, x: float, y: float,
                  hit_box: HitBox, debug: bool = False) -> None:
    """Draw a sprite and, in debug mode, its asset and hit rectangles"""
    renderer.draw_sprite(sprite, x, y)
    if debug:
        renderer.draw_rect(x, y, ASSET_WIDTH, ASSET_HEIGHT, DEBUG_ASSET_COLOR)
        renderer.draw_rect(x + hit_box.offset_x, y + hit_box.offset_y,
                           hit_box.width, hit_box.height, DEBUG_HIT_COLOR)


@dataclass
class Enemy:
    """Bug that crawls rightward along its row and wraps around"""
    x: float
    y: float
    speed: float  # px/s
    sprite: str = ENEMY_SPRITE
    hit_box: HitBox = ENEMY_HIT_BOX

    def update(self, dt: float, player: Optional["Player"] = None) -> bool:
        """
        Advance by speed * dt. Returns True if the enemy touched the
        player, in which case the player has been sent back to start.
        """
        self.x += self.speed * dt

        if self.is_off_stage():
            # one column to the left of the stage
            self.x = -COL_WIDTH

        if player is not None and self.collided_with(player):
            player.reset()
            return True
        return False

    def is_off_stage(self) -> bool:
        return self.x >= CANVAS_WIDTH

    def collided_with(self, player: "Player") -> bool:
        return overlaps(self.hit_box, (self.x, self.y),
                        player.hit_box, (player.x, player.y))

    def render(self, renderer: "Renderer", debug: bool = False) -> None:
        render_sprite(renderer, self.sprite, self.x, self.y, self.hit_box, debug)


@dataclass
class Player:
    """
    The player character.

    Input only sets the goal tile; update() moves onto it if the goal
    is on the board. Reaching the water row sends the player back to
    start and levels the game up.
    """
    x: float
    y: float
    start_x: float = field(init=False)
    start_y: float = field(init=False)
    goal_x: float = field(init=False)
    goal_y: float = field(init=False)
    sprite: str = PLAYER_SPRITE
    hit_box: HitBox = PLAYER_HIT_BOX

    def __post_init__(self):
        self.start_x = self.x
        self.start_y = self.y
        self.goal_x = self.x
        self.goal_y = self.y

    def handle_input(self, direction: Union[Direction, str, None]) -> None:
        """Aim one tile away from the current position. Unknown input is ignored."""
        if isinstance(direction, str):
            direction = DIRECTION_NAMES.get(direction)
        move = MOVES.get(direction)
        if move is None:
            return
        dx, dy = move
        if dx:
            self.goal_x = self.x + dx
        if dy:
            self.goal_y = self.y + dy

    def update(self, controller: Optional["GameStateController"] = None) -> bool:
        """Move onto valid goals. Returns True when the water row was reached."""
        if self.is_valid_goal_x():
            self.x = self.goal_x
        if self.is_valid_goal_y():
            self.y = self.goal_y

        if self.is_in_the_water():
            # Back to start before the board is regenerated
            self.reset()
            if controller is not None:
                controller.level_up()
            return True
        return False

    def reset(self) -> None:
        self.x = self.start_x
        self.y = self.start_y
        self.goal_x = self.x
        self.goal_y = self.y

    def is_valid_goal_x(self) -> bool:
        return 0 <= self.goal_x < CANVAS_WIDTH

    def is_valid_goal_y(self) -> bool:
        return CHARACTER_VERT_OFFSET <= self.goal_y < CANVAS_HEIGHT - ASSET_HEIGHT

    def is_in_the_water(self) -> bool:
        return self.y == CHARACTER_VERT_OFFSET

    def render(self, renderer: "Renderer", debug: bool = False) -> None:
        render_sprite(renderer, self.sprite, self.x, self.y, self.hit_box, debug)


class TreatKind(Enum):
    """Treat variants. Only the sprite differs between them."""
    BLUE_GEM = "blue_gem"
    GREEN_GEM = "green_gem"
    ORANGE_GEM = "orange_gem"
    HEART = "heart"

    @property
    def is_gem(self) -> bool:
        return self is not TreatKind.HEART

    @property
    def color(self) -> Optional[str]:
        """Gem colour, None for hearts"""
        if not self.is_gem:
            return None
        return self.value.split("_")[0]


TREAT_SPRITES = {
    TreatKind.BLUE_GEM: BLUE_GEM_SPRITE,
    TreatKind.GREEN_GEM: GREEN_GEM_SPRITE,
    TreatKind.ORANGE_GEM: ORANGE_GEM_SPRITE,
    TreatKind.HEART: HEART_SPRITE,
}


def treat_sprite(kind: TreatKind) -> str:
    try:
        return TREAT_SPRITES[kind]
    except KeyError:
        raise ValueError(f"Unknown treat kind: {kind!r}") from None


@dataclass(eq=False)
class Treat:
    """
    Collectible gem or heart. Compared by identity so the controller
    removes exactly the instance that was picked up.
    """
    x: float
    y: float
    kind: TreatKind = TreatKind.BLUE_GEM
    hit_box: HitBox = TREAT_HIT_BOX

    @property
    def sprite(self) -> str:
        return treat_sprite(self.kind)

    def update(self, player: "Player",
               controller: Optional["GameStateController"] = None) -> bool:
        """Returns True if the player picked this treat up."""
        if not self.collided_with(player):
            return False
        if controller is not None:
            return controller.collect_treat(self)
        return True

    def collided_with(self, player: "Player") -> bool:
        return overlaps(self.hit_box, (self.x, self.y),
                        player.hit_box, (player.x, player.y))

    def render(self, renderer: "Renderer", debug: bool = False) -> None:
        render_sprite(renderer, self.sprite, self.x, self.y, self.hit_box, debug)
