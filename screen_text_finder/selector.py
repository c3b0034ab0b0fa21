"""Pick the candidate nearest to a reference point."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from screen_text_finder.models import Point

T = TypeVar("T")


def squared_distance(a: Point, b: Point) -> float:
    """Return the squared Euclidean distance between two points."""
    return (a.x - b.x) ** 2 + (a.y - b.y) ** 2


def closest(
    candidates: Iterable[T],
    reference: Point,
    position: Callable[[T], Point],
) -> T | None:
    """Return the candidate whose position is nearest to ``reference``.

    Candidates are scanned in order and only a strictly smaller distance
    replaces the current best, so the earliest candidate wins exact ties.

    Args:
        candidates: Candidates in encounter order.
        reference: Point to measure from.
        position: Returns the point of a candidate.

    Returns:
        The nearest candidate, or None if there are no candidates.
    """
    nearest: T | None = None
    smallest = float("inf")

    for candidate in candidates:
        distance = squared_distance(position(candidate), reference)
        if distance < smallest:
            smallest = distance
            nearest = candidate

    return nearest
