"""Synchronous action functions for screen text finding."""

from __future__ import annotations

import asyncio
from pathlib import Path

from screen_text_finder.finder import CaptureFn, RecognizeFn, ScreenTextFinder
from screen_text_finder.models import FinderConfig, Point, Region, TextLocation, Word


def sanitize_image_path(image_path: str | Path) -> Path:
    """Validate and resolve image path.

    Args:
        image_path: Path to image file (string or Path).

    Returns:
        Resolved Path object.

    Raises:
        FileNotFoundError: If image does not exist.
        ValueError: If path is not a file.
    """
    path = Path(image_path).expanduser().resolve()

    if not path.exists():
        msg = f"Image not found: {path}"
        raise FileNotFoundError(msg)

    if not path.is_file():
        msg = f"Path is not a file: {path}"
        raise ValueError(msg)

    return path


def _finder(
    config: FinderConfig | None,
    capture: CaptureFn | None,
    recognize: RecognizeFn | None,
) -> ScreenTextFinder:
    return ScreenTextFinder(capture=capture, recognize=recognize, config=config)


def locate_all(
    query: str,
    region: Region,
    config: FinderConfig | None = None,
    capture: CaptureFn | None = None,
    recognize: RecognizeFn | None = None,
) -> tuple[TextLocation, ...]:
    """Locate every word in a screen region matching the query.

    Args:
        query: Text to search for.
        region: Screen-global region to search.
        config: Finder configuration (default: FinderConfig()).
        capture: Capture collaborator (default: screen grab).
        recognize: OCR collaborator (default: EasyOCR).

    Returns:
        Tuple of TextLocation objects, possibly empty.
    """
    finder = _finder(config, capture, recognize)
    return asyncio.run(finder.locate_all(query, region))


def locate_closest(
    query: str,
    region: Region,
    reference_point: Point | None = None,
    config: FinderConfig | None = None,
    capture: CaptureFn | None = None,
    recognize: RecognizeFn | None = None,
) -> TextLocation | None:
    """Locate the matching word nearest to a reference point.

    Args:
        query: Text to search for.
        region: Screen-global region to search.
        reference_point: Screen-global point (default: center of region).
        config: Finder configuration (default: FinderConfig()).
        capture: Capture collaborator (default: screen grab).
        recognize: OCR collaborator (default: EasyOCR).

    Returns:
        TextLocation of the chosen word, or None if nothing matched.
    """
    finder = _finder(config, capture, recognize)
    return asyncio.run(finder.locate_closest(query, region, reference_point))


def find_all(
    query: str,
    region: Region,
    config: FinderConfig | None = None,
    capture: CaptureFn | None = None,
    recognize: RecognizeFn | None = None,
) -> tuple[Region, ...]:
    """Return screen rectangles of every word matching the query."""
    return tuple(loc.region for loc in locate_all(query, region, config, capture, recognize))


def find_closest(
    query: str,
    region: Region,
    reference_point: Point | None = None,
    config: FinderConfig | None = None,
    capture: CaptureFn | None = None,
    recognize: RecognizeFn | None = None,
) -> Region | None:
    """Return the screen rectangle of the match nearest the reference point."""
    location = locate_closest(query, region, reference_point, config, capture, recognize)
    return None if location is None else location.region


def find_all_near(
    query: str,
    x: float,
    y: float,
    size: int,
    config: FinderConfig | None = None,
    capture: CaptureFn | None = None,
    recognize: RecognizeFn | None = None,
) -> tuple[Region, ...]:
    """Search a square of side ``size`` centred on (x, y) for every match."""
    return find_all(query, Region.around(x, y, size), config, capture, recognize)


def find_closest_near(
    query: str,
    x: float,
    y: float,
    size: int,
    config: FinderConfig | None = None,
    capture: CaptureFn | None = None,
    recognize: RecognizeFn | None = None,
) -> Region | None:
    """Search a square of side ``size`` centred on (x, y) for the nearest match.

    The reference point is the square's center.
    """
    return find_closest(query, Region.around(x, y, size), None, config, capture, recognize)


def list_words(
    region: Region,
    config: FinderConfig | None = None,
    capture: CaptureFn | None = None,
    recognize: RecognizeFn | None = None,
) -> tuple[Word, ...]:
    """List every candidate word recognized in a screen region."""
    finder = _finder(config, capture, recognize)
    return asyncio.run(finder.read_words(region))
