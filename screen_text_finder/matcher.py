"""Fuzzy matching of a query against segmented words."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from rapidfuzz import fuzz, process, utils

from screen_text_finder.models import (
    DEFAULT_THRESHOLD,
    DEFAULT_TOP_K,
    ScoredMatch,
    Scorer,
    Word,
)

_SCORERS: dict[Scorer, Callable[..., float]] = {
    Scorer.WRATIO: fuzz.WRatio,
    Scorer.RATIO: fuzz.ratio,
    Scorer.PARTIAL_RATIO: fuzz.partial_ratio,
    Scorer.TOKEN_SORT_RATIO: fuzz.token_sort_ratio,
    Scorer.TOKEN_SET_RATIO: fuzz.token_set_ratio,
}


def score(query: str, text: str, scorer: Scorer = Scorer.WRATIO) -> int:
    """Score a single candidate against the query.

    Both strings are case-folded before scoring.

    Args:
        query: Text to search for.
        text: Candidate text.
        scorer: Similarity scorer.

    Returns:
        Integer similarity in [0, 100], 100 for a case-insensitive exact match.
    """
    return round(_SCORERS[scorer](query, text, processor=utils.default_process))


def _score_words(query: str, words: Sequence[Word], scorer: Scorer) -> list[ScoredMatch]:
    # Words are scored in sequence order; index keeps ties stable
    results = process.extract_iter(
        query,
        [word.text for word in words],
        scorer=_SCORERS[scorer],
        processor=utils.default_process,
    )
    return [
        ScoredMatch(word=words[index], score=round(similarity), index=index)
        for _text, similarity, index in results
    ]


def match_all(
    query: str,
    words: Sequence[Word],
    threshold: int = DEFAULT_THRESHOLD,
    scorer: Scorer = Scorer.WRATIO,
) -> tuple[ScoredMatch, ...]:
    """Return every word scoring at least ``threshold`` against the query.

    Args:
        query: Text to search for.
        words: Candidate words.
        threshold: Minimum score (0-100).
        scorer: Similarity scorer.

    Returns:
        Tuple of ScoredMatch objects in candidate order.
    """
    if not words:
        return ()

    return tuple(m for m in _score_words(query, words, scorer) if m.score >= threshold)


def match_top_k(
    query: str,
    words: Sequence[Word],
    k: int = DEFAULT_TOP_K,
    threshold: int = DEFAULT_THRESHOLD,
    scorer: Scorer = Scorer.WRATIO,
) -> tuple[ScoredMatch, ...]:
    """Return the ``k`` best words scoring at least ``threshold``.

    Args:
        query: Text to search for.
        words: Candidate words.
        k: Maximum number of matches.
        threshold: Minimum score (0-100).
        scorer: Similarity scorer.

    Returns:
        Tuple of at most ``k`` ScoredMatch objects, best first. Equal scores
        keep candidate order.
    """
    if k <= 0:
        return ()

    qualifying = match_all(query, words, threshold, scorer)
    # sorted() is stable, so equal scores stay in candidate order
    return tuple(sorted(qualifying, key=lambda m: -m.score)[:k])
