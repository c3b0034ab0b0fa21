"""Tests for nearest-candidate selection."""

from __future__ import annotations

from screen_text_finder.models import Point
from screen_text_finder.selector import closest, squared_distance


def _identity(p: Point) -> Point:
    return p


class TestSquaredDistance:
    """Tests for squared_distance function."""

    def test_distance(self) -> None:
        """Test squared distance of a 3-4-5 triangle."""
        assert squared_distance(Point(0, 0), Point(3, 4)) == 25

    def test_same_point(self) -> None:
        """Test distance to itself is zero."""
        assert squared_distance(Point(7, 7), Point(7, 7)) == 0


class TestClosest:
    """Tests for closest function."""

    def test_picks_nearest(self) -> None:
        """Test the nearest candidate wins."""
        points = [Point(100, 100), Point(12, 9), Point(50, 50)]
        assert closest(points, Point(10, 10), _identity) == Point(12, 9)

    def test_empty_returns_none(self) -> None:
        """Test no candidates gives None."""
        assert closest([], Point(0, 0), _identity) is None

    def test_tie_keeps_first(self) -> None:
        """Test the earliest candidate wins an exact tie."""
        left = ("left", Point(-5, 0))
        right = ("right", Point(5, 0))
        chosen = closest([left, right], Point(0, 0), lambda c: c[1])
        assert chosen is left

    def test_tie_after_better_candidate(self) -> None:
        """Test a later equal candidate never replaces the current best."""
        candidates = [("far", Point(50, 0)), ("a", Point(0, 3)), ("b", Point(3, 0))]
        chosen = closest(candidates, Point(0, 0), lambda c: c[1])
        assert chosen[0] == "a"

    def test_accepts_iterators(self) -> None:
        """Test candidates may be a one-shot iterator."""
        chosen = closest(iter([Point(1, 1), Point(0, 0)]), Point(0, 0), _identity)
        assert chosen == Point(0, 0)
