"""
Board geometry, starting difficulty and sprite ids.
All positions are canvas pixels with y growing downward.
"""

from .utils import HitBox

# Canvas
CANVAS_WIDTH = 505
CANVAS_HEIGHT = 606

# Every sprite (tiles and characters) is drawn from a 101x171 image
ASSET_WIDTH = 101
ASSET_HEIGHT = 171

# Tile images are 171px tall but only 83px of each row shows
COL_WIDTH = ASSET_WIDTH
ROW_HEIGHT = 83

# Character sprites don't line up with the tiles even though they share
# dimensions; this shifts them up so they sit on a tile.
CHARACTER_VERT_OFFSET = -32

NUM_COLS = 5
NUM_ROWS = 6
WATER_ROW = 0
ENEMY_ROWS = (1, 2, 3)
PLAYER_START_COL = 2
PLAYER_START_ROW = 5

# Treats go anywhere except the water row and the player's start row
TREAT_ROWS = (1, 2, 3, 4)
MAX_TREATS = NUM_COLS * len(TREAT_ROWS)

# Starting difficulty
START_ENEMY_COUNT = 3
START_MAX_SPEED = 200.0  # px/s
START_MIN_SPEED = 100.0  # px/s
START_TREAT_COUNT = 1

# Difficulty ramp
ENEMY_LEVEL_INTERVAL = 5
SPEED_LEVEL_INTERVAL = 2
MAX_SPEED_STEP = 10.0
MIN_SPEED_STEP = 5.0

# Hit boxes, relative to the sprite's top-left corner. Sized so that two
# entities on neighbouring tiles never touch.
PLAYER_HIT_BOX = HitBox(17, 63, 67, 76)
ENEMY_HIT_BOX = HitBox(1, 77, 99, 66)
TREAT_HIT_BOX = HitBox(25, 60, 51, 80)

# Sprites
PLAYER_SPRITE = "images/char-boy.png"
ENEMY_SPRITE = "images/enemy-bug.png"
BLUE_GEM_SPRITE = "images/Gem Blue.png"
GREEN_GEM_SPRITE = "images/Gem Green.png"
ORANGE_GEM_SPRITE = "images/Gem Orange.png"
HEART_SPRITE = "images/Heart.png"
WATER_TILE_SPRITE = "images/water-block.png"
STONE_TILE_SPRITE = "images/stone-block.png"
GRASS_TILE_SPRITE = "images/grass-block.png"

# Top to bottom: water, three rows of stone, two rows of grass
ROW_TILES = (
    WATER_TILE_SPRITE,
    STONE_TILE_SPRITE,
    STONE_TILE_SPRITE,
    STONE_TILE_SPRITE,
    GRASS_TILE_SPRITE,
    GRASS_TILE_SPRITE,
)


def row_to_y(row: int) -> float:
    """y of a character sprite standing on the given row"""
    return row * ROW_HEIGHT + CHARACTER_VERT_OFFSET


def col_to_x(col: int) -> float:
    """x of a sprite standing on the given column"""
    return col * COL_WIDTH


PLAYER_START_X = col_to_x(PLAYER_START_COL)
PLAYER_START_Y = row_to_y(PLAYER_START_ROW)
