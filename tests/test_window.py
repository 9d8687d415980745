"""
Tests for the arcade frontend pieces that don't need an open window.
"""
import pytest

try:
    from game.crossing import window
except Exception as exc:  # no usable GL/X backend on this machine
    pytest.skip(f"arcade unavailable: {exc}", allow_module_level=True)

from game.crossing.entities import Direction
from game.crossing.state import GameState


class TestHudDisplay:
    """Tests for the window's score display."""

    def test_starts_at_level_one(self):
        assert window.HudDisplay().label == "Score: 0   Level: 1"

    def test_follows_game_after_attach(self):
        hud = window.HudDisplay()
        state = GameState.new_game(seed=4)
        state.controller.level_up()

        state.set_display(hud)
        assert (hud.score, hud.level) == (1, 2)
        assert hud.label == "Score: 1   Level: 2"

    def test_text_colour_named_like_debug_colours(self):
        assert window.HUD_COLOR == (20, 20, 20)


def test_arrow_keys_map_to_directions():
    assert set(window.KEY_DIRECTIONS.values()) == set(Direction) - {Direction.NONE}
