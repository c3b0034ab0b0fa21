"""Find text on screen: capture, recognize, segment, match and locate.

Capture and recognition are the only slow steps and the only ones that can
fail; both are collaborators passed to ScreenTextFinder. Either may be a
coroutine function, which is awaited, or a plain callable, which runs in a
worker thread. Everything after recognition is synchronous and keeps no
state between calls, so one finder can serve concurrent searches of
different regions as long as its collaborators allow it.

Search regions are truncated to whole pixels once, on entry, and that region
is used both to capture and to translate results back to the screen.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any

from screen_text_finder.geometry import project, project_point, to_screen
from screen_text_finder.matcher import match_all, match_top_k
from screen_text_finder.models import (
    FinderConfig,
    Point,
    RecognizedRun,
    Region,
    ScoredMatch,
    TextLocation,
    Word,
)
from screen_text_finder.segmenter import segment_runs
from screen_text_finder.selector import closest

logger = logging.getLogger(__name__)

CaptureFn = Callable[[Region], Any]
RecognizeFn = Callable[[Any], Sequence[RecognizedRun]]


async def _call(fn: Callable[[Any], Any], arg: Any) -> Any:
    # Callable objects count as async when their __call__ is
    if inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(type(fn).__call__):
        return await fn(arg)
    return await asyncio.to_thread(fn, arg)


def _locate(match: ScoredMatch, origin: Region) -> TextLocation:
    word = match.word
    return TextLocation(
        text=word.text,
        score=match.score,
        region=to_screen(project(word), origin),
        point=to_screen(project_point(word), origin),
    )


class ScreenTextFinder:
    """Locate words on screen that fuzzily match a query.

    Args:
        capture: ``capture(region) -> image`` for a screen-global region.
            Defaults to a Pillow screen grab.
        recognize: ``recognize(image) -> sequence of RecognizedRun``.
            Defaults to EasyOCR with ``config.languages``.
        config: Matching, segmentation and recognition settings.
    """

    def __init__(
        self,
        capture: CaptureFn | None = None,
        recognize: RecognizeFn | None = None,
        config: FinderConfig | None = None,
    ):
        self.config = config or FinderConfig()

        if capture is None:
            from screen_text_finder.capture import capture_screen

            capture = capture_screen
        if recognize is None:
            from screen_text_finder.core import EasyOcrRecognizer

            recognize = EasyOcrRecognizer(self.config.languages, self.config.gpu)

        self.capture = capture
        self.recognize = recognize

    async def read_words(self, region: Region) -> tuple[Word, ...]:
        """Capture a region and split its recognized text into words."""
        region = region.truncated()
        image = await _call(self.capture, region)
        runs = tuple(await _call(self.recognize, image))

        kept = [run for run in runs if run.confidence >= self.config.min_confidence]
        words = segment_runs(kept, self.config.min_word_size)
        logger.debug(
            "Region %s: %d runs (%d kept), %d words",
            region.as_bbox(),
            len(runs),
            len(kept),
            len(words),
        )
        return words

    async def locate_all(self, query: str, region: Region) -> tuple[TextLocation, ...]:
        """Locate every word in the region matching the query.

        Args:
            query: Text to search for.
            region: Screen-global region to search.

        Returns:
            Tuple of TextLocation objects in screen-global pixels, possibly empty.
        """
        region = region.truncated()
        words = await self.read_words(region)
        matches = match_all(query, words, self.config.threshold, self.config.scorer)
        logger.debug("'%s': %d matches at threshold %d", query, len(matches), self.config.threshold)
        return tuple(_locate(match, region) for match in matches)

    async def locate_closest(
        self,
        query: str,
        region: Region,
        reference_point: Point | None = None,
    ) -> TextLocation | None:
        """Locate the best matching word nearest to a reference point.

        The ``config.top_k`` highest scoring words are considered and the one
        whose center is nearest to ``reference_point`` wins.

        Args:
            query: Text to search for.
            region: Screen-global region to search.
            reference_point: Screen-global point (default: center of region).

        Returns:
            TextLocation of the chosen word, or None if nothing matched.
        """
        region = region.truncated()
        if reference_point is None:
            reference_point = region.center

        words = await self.read_words(region)
        matches = match_top_k(
            query, words, self.config.top_k, self.config.threshold, self.config.scorer
        )
        candidates = [_locate(match, region) for match in matches]
        chosen = closest(candidates, reference_point, lambda loc: loc.point)

        if chosen is None:
            logger.debug("'%s': no match in %s", query, region.as_bbox())
        else:
            logger.debug("'%s': chose '%s' (score %d)", query, chosen.text, chosen.score)
        return chosen

    async def find_all(self, query: str, region: Region) -> tuple[Region, ...]:
        """Return screen rectangles of every word matching the query."""
        return tuple(loc.region for loc in await self.locate_all(query, region))

    async def find_closest(
        self,
        query: str,
        region: Region,
        reference_point: Point | None = None,
    ) -> Region | None:
        """Return the screen rectangle of the match nearest the reference point."""
        location = await self.locate_closest(query, region, reference_point)
        return None if location is None else location.region
