"""Split recognized OCR runs into candidate words.

OCR engines often merge neighbouring words into one run or misread the
spaces between them, so runs are not split on whitespace alone. A word is a
run of lowercase letters and decimal digits, optionally led by one uppercase letter,
which also splits CamelCase identifiers (``GetWordPosition`` gives ``Get``,
``Word`` and ``Position``).
"""

from __future__ import annotations

from collections.abc import Iterable

from screen_text_finder.models import DEFAULT_MIN_WORD_SIZE, RecognizedRun, Word


def _extends(char: str, buffer_empty: bool) -> bool:
    return char.islower() or char.isdecimal() or (char.isupper() and buffer_empty)


def segment(run: RecognizedRun, min_word_size: int = DEFAULT_MIN_WORD_SIZE) -> tuple[Word, ...]:
    """Split a recognized run into words.

    Args:
        run: OCR run to split.
        min_word_size: Shortest word to keep.

    Returns:
        Tuple of Word objects in the order they appear in the run.
    """
    text = run.text
    words: list[Word] = []
    start = 0
    length = 0

    for i, char in enumerate(text):
        if _extends(char, length == 0):
            length += 1
            continue

        if length >= min_word_size:
            words.append(Word(text=text[start : start + length], offset=start, source=run))

        # An uppercase letter closes the previous word and opens the next one
        if char.isupper():
            start, length = i, 1
        else:
            start, length = i + 1, 0

    if length >= min_word_size:
        words.append(Word(text=text[start : start + length], offset=start, source=run))

    return tuple(words)


def segment_runs(
    runs: Iterable[RecognizedRun],
    min_word_size: int = DEFAULT_MIN_WORD_SIZE,
) -> tuple[Word, ...]:
    """Segment every run and concatenate the words in run order."""
    return tuple(word for run in runs for word in segment(run, min_word_size))
