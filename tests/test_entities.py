"""
Tests for game entities: Enemy, Player, Treat.
"""
import random

import pytest
from game.crossing.constants import (
    CANVAS_WIDTH, COL_WIDTH, ROW_HEIGHT, CHARACTER_VERT_OFFSET,
    PLAYER_START_X, PLAYER_START_Y, NUM_COLS, NUM_ROWS, HEART_SPRITE,
    BLUE_GEM_SPRITE, col_to_x, row_to_y,
)
from game.crossing.entities import (
    Direction, Enemy, Player, Treat, TreatKind, treat_sprite,
)
from game.crossing.interfaces import RecordingRenderer
from game.crossing.state import GameStateController


def make_player() -> Player:
    return Player(PLAYER_START_X, PLAYER_START_Y)


class TestEnemy:
    """Tests for Enemy movement and collision."""

    def test_moves_right_by_speed_times_dt(self):
        enemy = Enemy(0, row_to_y(1), speed=100)
        enemy.update(0.5)
        assert enemy.x == pytest.approx(50)

    def test_wraps_to_left_of_stage(self):
        """Crossing the right edge puts the enemy one column off the left edge."""
        enemy = Enemy(500, row_to_y(2), speed=100)
        enemy.update(0.1)
        assert enemy.x == -COL_WIDTH
        assert enemy.y == row_to_y(2)
        assert enemy.speed == 100

    def test_wraps_once_per_crossing(self):
        """x drops below zero exactly once each time it passes the canvas width."""
        enemy = Enemy(0, row_to_y(1), speed=150)
        wraps = 0
        previous = enemy.x
        for _ in range(600):
            enemy.update(1 / 30)
            if enemy.x < previous:
                wraps += 1
                assert enemy.x == -COL_WIDTH
            previous = enemy.x
        # 3000 px travelled: 505 to the first wrap, then 606 per lap
        assert wraps == 5

    def test_collision_resets_player(self):
        player = make_player()
        player.handle_input(Direction.UP)
        player.update()
        enemy = Enemy(player.x, player.y, speed=100)

        assert enemy.update(0.0, player)
        assert (player.x, player.y) == (PLAYER_START_X, PLAYER_START_Y)

    def test_no_collision_from_adjacent_row(self):
        """An enemy one row above the player never touches it."""
        player = make_player()
        enemy = Enemy(player.x, player.y - ROW_HEIGHT, speed=0)
        assert not enemy.update(0.0, player)

    def test_no_collision_from_adjacent_column(self):
        player = make_player()
        enemy = Enemy(player.x + COL_WIDTH, player.y, speed=0)
        assert not enemy.update(0.0, player)

    def test_render_delegates_to_renderer(self):
        renderer = RecordingRenderer()
        enemy = Enemy(10, row_to_y(1), speed=100)
        enemy.render(renderer)
        assert renderer.sprites == [(enemy.sprite, 10, row_to_y(1))]
        assert renderer.rects == []

    def test_debug_render_draws_asset_and_hit_boxes(self):
        renderer = RecordingRenderer()
        Enemy(10, row_to_y(1), speed=100).render(renderer, debug=True)
        assert len(renderer.rects) == 2


class TestPlayerInput:
    """Tests for goal selection from input."""

    @pytest.mark.parametrize("direction,dx,dy", [
        (Direction.LEFT, -COL_WIDTH, 0),
        (Direction.RIGHT, COL_WIDTH, 0),
        (Direction.UP, 0, -ROW_HEIGHT),
        (Direction.DOWN, 0, ROW_HEIGHT),
    ])
    def test_direction_sets_goal_one_tile_away(self, direction, dx, dy):
        player = make_player()
        player.handle_input(direction)
        assert player.goal_x == player.x + dx
        assert player.goal_y == player.y + dy

    def test_input_does_not_move_until_update(self):
        player = make_player()
        player.handle_input(Direction.UP)
        assert player.y == PLAYER_START_Y

    @pytest.mark.parametrize("direction", [Direction.NONE, None, "jump", 42])
    def test_unrecognized_input_is_ignored(self, direction):
        player = make_player()
        player.handle_input(direction)
        assert (player.goal_x, player.goal_y) == (player.x, player.y)

    def test_direction_names_are_accepted(self):
        player = make_player()
        player.handle_input("left")
        assert player.goal_x == PLAYER_START_X - COL_WIDTH


class TestPlayerUpdate:
    """Tests for goal validation and reaching the water."""

    def test_valid_goal_is_adopted(self):
        player = make_player()
        player.handle_input(Direction.UP)
        player.update()
        assert player.y == PLAYER_START_Y - ROW_HEIGHT

    def test_cannot_leave_bottom_of_board(self):
        """Start row is the bottom row; moving down is discarded."""
        player = make_player()
        player.handle_input(Direction.DOWN)
        player.update()
        assert player.y == PLAYER_START_Y
        # stale goal stays around
        assert player.goal_y == PLAYER_START_Y + ROW_HEIGHT

    def test_cannot_leave_left_edge(self):
        player = Player(0, PLAYER_START_Y)
        player.handle_input(Direction.LEFT)
        player.update()
        assert player.x == 0

    def test_cannot_leave_right_edge(self):
        player = Player(col_to_x(NUM_COLS - 1), PLAYER_START_Y)
        player.handle_input(Direction.RIGHT)
        player.update()
        assert player.x == col_to_x(NUM_COLS - 1)

    def test_stale_goal_replaced_by_new_input(self):
        player = make_player()
        player.handle_input(Direction.DOWN)
        player.update()
        player.handle_input(Direction.UP)
        player.update()
        assert player.y == PLAYER_START_Y - ROW_HEIGHT

    def test_reaching_water_resets_and_levels_up(self):
        controller = GameStateController(rng=random.Random(0))
        player = Player(col_to_x(2), row_to_y(1))
        player.handle_input(Direction.UP)

        assert player.update(controller)
        assert (player.x, player.y) == (player.start_x, player.start_y)
        assert controller.level == 2

    def test_update_away_from_water_does_not_level_up(self):
        controller = GameStateController(rng=random.Random(0))
        player = make_player()
        player.handle_input(Direction.UP)
        assert not player.update(controller)
        assert controller.level == 1

    def test_reset_is_idempotent(self):
        player = make_player()
        player.handle_input(Direction.UP)
        player.update()
        player.reset()
        player.reset()
        assert (player.x, player.y) == (PLAYER_START_X, PLAYER_START_Y)
        assert (player.goal_x, player.goal_y) == (PLAYER_START_X, PLAYER_START_Y)

    def test_movement_stays_on_the_grid(self):
        """Any input sequence leaves the player on a tile of the board."""
        rng = random.Random(99)
        player = make_player()
        directions = list(Direction)
        for _ in range(2000):
            player.handle_input(rng.choice(directions))
            player.update()
            col = (player.x - PLAYER_START_X) / COL_WIDTH
            row = (player.y - PLAYER_START_Y) / ROW_HEIGHT
            assert col == int(col)
            assert row == int(row)
            assert 0 <= player.x < CANVAS_WIDTH
            assert CHARACTER_VERT_OFFSET < player.y <= row_to_y(NUM_ROWS - 1)


class TestTreat:
    """Tests for Treat variants and pickup."""

    def test_kind_selects_sprite(self):
        assert Treat(0, 0, TreatKind.HEART).sprite == HEART_SPRITE
        assert Treat(0, 0, TreatKind.BLUE_GEM).sprite == BLUE_GEM_SPRITE

    def test_gem_colors(self):
        assert TreatKind.BLUE_GEM.color == "blue"
        assert TreatKind.GREEN_GEM.color == "green"
        assert TreatKind.ORANGE_GEM.color == "orange"
        assert TreatKind.HEART.color is None
        assert not TreatKind.HEART.is_gem

    def test_every_kind_has_a_sprite(self):
        for kind in TreatKind:
            assert treat_sprite(kind)

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            treat_sprite("ruby")

    def test_treats_compare_by_identity(self):
        assert Treat(0, 51) != Treat(0, 51)

    def test_pickup_on_same_tile(self):
        player = Player(col_to_x(1), row_to_y(3))
        treat = Treat(col_to_x(1), row_to_y(3), TreatKind.GREEN_GEM)
        assert treat.update(player)

    def test_no_pickup_from_neighbouring_tiles(self):
        player = Player(col_to_x(1), row_to_y(3))
        for col, row in [(0, 3), (2, 3), (1, 2), (1, 4)]:
            treat = Treat(col_to_x(col), row_to_y(row))
            assert not treat.update(player)

    def test_pickup_notifies_controller(self):
        controller = GameStateController(rng=random.Random(0))
        player = Player(col_to_x(1), row_to_y(3))
        treat = Treat(col_to_x(1), row_to_y(3))
        controller.all_treats = [treat]

        assert treat.update(player, controller)
        assert controller.all_treats == []
        assert controller.score == 1
