"""
Tests for hit boxes and rectangle overlap.
"""
import random

import pytest
from game.crossing.utils import HitBox, overlaps, clamp


class TestHitBox:
    """Tests for HitBox placement."""

    def test_bounds_are_offset_from_position(self):
        """Bounds translate the box by the entity position."""
        box = HitBox(10, 20, 30, 40)
        assert box.bounds(100, 200) == (110, 220, 140, 260)


class TestOverlaps:
    """Tests for axis-aligned overlap."""

    def test_overlapping_boxes(self):
        box = HitBox(0, 0, 10, 10)
        assert overlaps(box, (0, 0), box, (5, 5))

    def test_separated_on_x(self):
        box = HitBox(0, 0, 10, 10)
        assert not overlaps(box, (0, 0), box, (11, 0))

    def test_separated_on_y(self):
        box = HitBox(0, 0, 10, 10)
        assert not overlaps(box, (0, 0), box, (0, 11))

    def test_touching_edges_count(self):
        """Boundaries are inclusive."""
        box = HitBox(0, 0, 10, 10)
        assert overlaps(box, (0, 0), box, (10, 0))
        assert overlaps(box, (0, 0), box, (10, 10))

    def test_overlap_on_one_axis_only_is_not_a_hit(self):
        box = HitBox(0, 0, 10, 10)
        assert not overlaps(box, (0, 0), box, (5, 50))

    def test_containment(self):
        """A box entirely inside another overlaps it."""
        outer = HitBox(0, 0, 100, 100)
        inner = HitBox(40, 40, 5, 5)
        assert overlaps(outer, (0, 0), inner, (0, 0))

    def test_symmetric(self):
        """overlaps(A, B) == overlaps(B, A) for arbitrary boxes."""
        rng = random.Random(1234)
        for _ in range(500):
            a = HitBox(rng.uniform(-20, 20), rng.uniform(-20, 20),
                       rng.uniform(0, 60), rng.uniform(0, 60))
            b = HitBox(rng.uniform(-20, 20), rng.uniform(-20, 20),
                       rng.uniform(0, 60), rng.uniform(0, 60))
            pa = (rng.uniform(-100, 100), rng.uniform(-100, 100))
            pb = (rng.uniform(-100, 100), rng.uniform(-100, 100))
            assert overlaps(a, pa, b, pb) == overlaps(b, pb, a, pa)


class TestClamp:
    @pytest.mark.parametrize("value,expected", [(-5, 0), (5, 5), (15, 10)])
    def test_clamp(self, value, expected):
        assert clamp(value, 0, 10) == expected
