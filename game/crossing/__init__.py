"""2D crossing game - player vs. wrapping enemies, with collectible treats"""

from .entities import Direction, Enemy, Player, Treat, TreatKind
from .state import GameState, GameStateController
from .crossing_env import CrossingEnv, run_random_episode

__all__ = [
    'Direction', 'Enemy', 'Player', 'Treat', 'TreatKind',
    'GameState', 'GameStateController',
    'CrossingEnv', 'run_random_episode',
]
