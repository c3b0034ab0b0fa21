"""Approximate word geometry inside a recognized run.

OCR engines report one bounding box per run, not per glyph, so a word's
rectangle is estimated by treating the run as monospaced: every character
gets ``run width / run length`` pixels. The estimate drifts with
proportional fonts (``iii`` and ``WWW`` get the same width) and with scripts
where the character count does not track visual width, such as combining
marks or mixed full-width and half-width text.

Projected geometry is in the run's coordinate space (image-local). Use
``to_screen`` with the captured region to move it to screen-global pixels.
"""

from __future__ import annotations

from typing import TypeVar

from screen_text_finder.models import GeometryError, Point, RecognizedRun, Region, Word

_Located = TypeVar("_Located", Point, Region)


def char_width(run: RecognizedRun) -> float:
    """Return the average character width of a run.

    Raises:
        GeometryError: If the run has no text or no width.
    """
    if not run.text:
        msg = "Cannot measure characters of an empty run"
        raise GeometryError(msg)

    if run.bounding_box.width <= 0:
        msg = f"Run '{run.text}' has non-positive width {run.bounding_box.width}"
        raise GeometryError(msg)

    return run.bounding_box.width / len(run.text)


def project(word: Word) -> Region:
    """Estimate the rectangle of a word within its run.

    Args:
        word: Word produced by segmentation.

    Returns:
        Region in the coordinate space of the run's bounding box.
    """
    box = word.source.bounding_box
    width = char_width(word.source)

    return Region(
        x=box.x + width * word.offset,
        y=box.y,
        width=width * len(word.text),
        height=box.height,
    )


def project_point(word: Word) -> Point:
    """Estimate the center of a word within its run."""
    rect = project(word)
    box = word.source.bounding_box
    return Point(rect.x + rect.width / 2, box.y + box.height / 2)


def to_screen(located: _Located, origin: Region) -> _Located:
    """Translate image-local geometry by the capture region's screen origin."""
    return located.translate(origin.x, origin.y)
