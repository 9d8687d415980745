"""
Arcade frontend for the crossing game.

Game code works in canvas coordinates (origin top-left, y down);
ArcadeRenderer flips them into arcade's bottom-left, y-up space.

Controls:
    Arrow keys: Move
    D: Toggle hit box overlay
    Escape: Quit

Usage:
    python -m game.crossing.window [--seed N] [--debug] [--assets DIR]
"""

from __future__ import annotations

import argparse
import warnings
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import arcade

from .utils import HitBox
from .constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, ASSET_WIDTH, ASSET_HEIGHT, COL_WIDTH, ROW_HEIGHT,
    NUM_COLS, ROW_TILES, PLAYER_HIT_BOX, ENEMY_HIT_BOX, TREAT_HIT_BOX,
    PLAYER_SPRITE, ENEMY_SPRITE, BLUE_GEM_SPRITE, GREEN_GEM_SPRITE,
    ORANGE_GEM_SPRITE, HEART_SPRITE, WATER_TILE_SPRITE, STONE_TILE_SPRITE,
    GRASS_TILE_SPRITE,
)
from .entities import Direction
from .state import GameState

# Input collaborator: raw key -> direction. Anything else is ignored.
KEY_DIRECTIONS = {
    arcade.key.LEFT: Direction.LEFT,
    arcade.key.UP: Direction.UP,
    arcade.key.RIGHT: Direction.RIGHT,
    arcade.key.DOWN: Direction.DOWN,
}

ALL_SPRITES = (
    PLAYER_SPRITE, ENEMY_SPRITE, BLUE_GEM_SPRITE, GREEN_GEM_SPRITE,
    ORANGE_GEM_SPRITE, HEART_SPRITE, WATER_TILE_SPRITE, STONE_TILE_SPRITE,
    GRASS_TILE_SPRITE,
)

# Flat-colour stand-ins for sprites whose image file is missing
TILE_FACE = HitBox(0, 50, ASSET_WIDTH, ASSET_HEIGHT - 50)
PLACEHOLDERS: Dict[str, Tuple[HitBox, Tuple[int, int, int]]] = {
    WATER_TILE_SPRITE: (TILE_FACE, (70, 130, 220)),
    STONE_TILE_SPRITE: (TILE_FACE, (150, 150, 150)),
    GRASS_TILE_SPRITE: (TILE_FACE, (90, 180, 80)),
    PLAYER_SPRITE: (PLAYER_HIT_BOX, (240, 240, 240)),
    ENEMY_SPRITE: (ENEMY_HIT_BOX, (220, 80, 80)),
    BLUE_GEM_SPRITE: (TREAT_HIT_BOX, (80, 120, 240)),
    GREEN_GEM_SPRITE: (TREAT_HIT_BOX, (80, 200, 120)),
    ORANGE_GEM_SPRITE: (TREAT_HIT_BOX, (240, 160, 60)),
    HEART_SPRITE: (TREAT_HIT_BOX, (230, 60, 120)),
}

HUD_COLOR = (20, 20, 20)


class AssetResolver:
    """Loads sprite images by id (a path relative to root) and caches them"""

    def __init__(self, root: str = "."):
        self.root = Path(root)
        self._textures: Dict[str, Optional[arcade.Texture]] = {}

    def preload(self, sprite_ids: Iterable[str]) -> None:
        for sprite_id in sprite_ids:
            self.get(sprite_id)

    def get(self, sprite_id: str) -> Optional[arcade.Texture]:
        if sprite_id in self._textures:
            return self._textures[sprite_id]

        path = self.root / sprite_id
        texture = None
        if path.is_file():
            texture = arcade.load_texture(path)
        else:
            warnings.warn(f"Sprite {sprite_id!r} not found under {self.root}, "
                          f"drawing a placeholder")
        self._textures[sprite_id] = texture
        return texture


class ArcadeRenderer:
    """Renderer collaborator backed by arcade draw calls"""

    def __init__(self, assets: AssetResolver, canvas_height: int = CANVAS_HEIGHT):
        self.assets = assets
        self.canvas_height = canvas_height

    def _bottom(self, y: float, height: float) -> float:
        return self.canvas_height - y - height

    def draw_sprite(self, sprite_id: str, x: float, y: float) -> None:
        texture = self.assets.get(sprite_id)
        if texture is None:
            self._draw_placeholder(sprite_id, x, y)
            return
        arcade.draw_texture_rect(
            texture, arcade.LBWH(x, self._bottom(y, ASSET_HEIGHT), ASSET_WIDTH, ASSET_HEIGHT)
        )

    def _draw_placeholder(self, sprite_id: str, x: float, y: float) -> None:
        box, color = PLACEHOLDERS.get(sprite_id, (TILE_FACE, (255, 0, 255)))
        left, top, right, bottom = box.bounds(x, y)
        arcade.draw_lrbt_rectangle_filled(
            left, right, self._bottom(bottom, 0), self._bottom(top, 0), color
        )

    def draw_rect(self, x, y, width, height, color) -> None:
        bottom = self._bottom(y, height)
        arcade.draw_lrbt_rectangle_outline(x, x + width, bottom, bottom + height, color, 1)

    def draw_board(self) -> None:
        """Background tiles, drawn top row first so lower rows overlap"""
        for row, tile in enumerate(ROW_TILES):
            for col in range(NUM_COLS):
                self.draw_sprite(tile, col * COL_WIDTH, row * ROW_HEIGHT)


class HudDisplay:
    """Score display drawn in the top-left corner of the window"""

    def __init__(self, left: float = 12, top_margin: float = 30, font_size: int = 16):
        self.score = 0
        self.level = 1
        self.left = left
        self.top_margin = top_margin
        self.font_size = font_size

    def show_score(self, score: int) -> None:
        self.score = score

    def show_level(self, level: int) -> None:
        self.level = level

    @property
    def label(self) -> str:
        return f"Score: {self.score}   Level: {self.level}"

    def draw(self, window_height: float) -> None:
        arcade.draw_text(self.label, self.left, window_height - self.top_margin,
                         HUD_COLOR, self.font_size)


class CrossingWindow(arcade.Window):
    """
    Arcade window for the crossing game.

    With drive=True the window is the frame loop: it ticks the game in
    on_update and forwards key releases as input. With drive=False
    something else (CrossingEnv) ticks the game and the window only draws.
    """

    def __init__(
        self,
        state: GameState,
        assets_root: str = ".",
        debug: bool = False,
        drive: bool = True,
        visible: bool = True,
    ):
        super().__init__(CANVAS_WIDTH, CANVAS_HEIGHT, "Crossing - Arcade", visible=visible)
        self.hud = HudDisplay()
        self.debug = debug
        self.drive = drive

        self.assets = AssetResolver(assets_root)
        self.assets.preload(ALL_SPRITES)
        self.renderer = ArcadeRenderer(self.assets)

        self.background_color = arcade.color.WHITE
        self.attach(state)

    def attach(self, state: GameState) -> None:
        """Point the window at a game (also used after an env reset)"""
        self.state = state
        state.set_display(self.hud)

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        self.renderer.draw_board()
        self.state.render(self.renderer, debug=self.debug)
        self.hud.draw(self.height)

    def on_update(self, delta_time: float):
        if self.drive:
            self.state.tick(delta_time)

    def on_key_release(self, key: int, modifiers: int):
        if key == arcade.key.ESCAPE:
            self.close()
            return
        if key == arcade.key.D:
            self.debug = not self.debug
            return
        if self.drive:
            self.state.queue_input(KEY_DIRECTIONS.get(key))

    def capture(self) -> np.ndarray:
        """Current frame as an (H, W, 3) uint8 array"""
        image = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)


def main():
    parser = argparse.ArgumentParser(description="Play the crossing game")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for enemy and treat placement",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Draw asset and hit boxes",
    )
    parser.add_argument(
        "--assets",
        type=str,
        default=".",
        help="Directory containing the images/ folder (default: .)",
    )
    parser.add_argument(
        "--verbose",
        type=int,
        default=1,
        help="Print level-up messages when > 0 (default: 1)",
    )

    args = parser.parse_args()

    state = GameState.new_game(seed=args.seed, verbose=args.verbose)

    print(__doc__)
    CrossingWindow(state, assets_root=args.assets, debug=args.debug)
    arcade.run()


if __name__ == "__main__":
    main()
