"""
Collaborators the game core calls out to: something that draws sprites
and something that shows the score and level. The arcade frontend in
window.py implements both; the stand-ins below keep the core headless.
"""

from typing import List, Protocol, Tuple


class Renderer(Protocol):
    """Draws sprites at canvas positions (y grows downward)"""

    def draw_sprite(self, sprite_id: str, x: float, y: float) -> None:
        ...

    def draw_rect(self, x: float, y: float, width: float, height: float,
                  color: Tuple[int, int, int]) -> None:
        """Outline a rectangle; only used by the debug overlay"""
        ...


class ScoreDisplay(Protocol):
    """Write-only score and level readouts"""

    def show_score(self, score: int) -> None:
        ...

    def show_level(self, level: int) -> None:
        ...


class NullDisplay:
    """Display that discards everything"""

    def show_score(self, score: int) -> None:
        pass

    def show_level(self, level: int) -> None:
        pass


class RecordingDisplay:
    """Display that remembers what it was shown"""

    def __init__(self):
        self.score = None
        self.level = None
        self.history: List[Tuple[str, int]] = []

    def show_score(self, score: int) -> None:
        self.score = score
        self.history.append(("score", score))

    def show_level(self, level: int) -> None:
        self.level = level
        self.history.append(("level", level))


class RecordingRenderer:
    """Renderer that records draw calls instead of drawing"""

    def __init__(self):
        self.sprites: List[Tuple[str, float, float]] = []
        self.rects: List[Tuple[float, float, float, float, Tuple[int, int, int]]] = []

    def draw_sprite(self, sprite_id: str, x: float, y: float) -> None:
        self.sprites.append((sprite_id, x, y))

    def draw_rect(self, x, y, width, height, color) -> None:
        self.rects.append((x, y, width, height, color))
