"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Tuple, Optional
import numpy as np


@dataclass(frozen=True)
class HitBox:
    """Axis-aligned collision rectangle, offset from an entity's x, y"""
    offset_x: float
    offset_y: float
    width: float
    height: float

    def bounds(self, x: float, y: float) -> Tuple[float, float, float, float]:
        """World-space (left, top, right, bottom) when placed at (x, y)"""
        left = x + self.offset_x
        top = y + self.offset_y
        return left, top, left + self.width, top + self.height


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def overlaps(box_a: HitBox, pos_a: Tuple[float, float],
             box_b: HitBox, pos_b: Tuple[float, float]) -> bool:
    """Check if two hit boxes intersect. Touching edges count."""
    a_left, a_top, a_right, a_bottom = box_a.bounds(*pos_a)
    b_left, b_top, b_right, b_bottom = box_b.bounds(*pos_b)
    return (max(a_left, b_left) <= min(a_right, b_right)
            and max(a_top, b_top) <= min(a_bottom, b_bottom))


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
