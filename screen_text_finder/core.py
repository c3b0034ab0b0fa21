"""EasyOCR wrapper for text recognition."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from screen_text_finder.models import (
    DEFAULT_LANGUAGES,
    RecognizedRun,
    RecognizerUnavailableError,
    Region,
)

if TYPE_CHECKING:
    import easyocr
    from PIL import Image

logger = logging.getLogger(__name__)

_reader_cache: dict[tuple[tuple[str, ...], bool], easyocr.Reader] = {}
_reader_lock = threading.Lock()
_readtext_locks: dict[tuple[tuple[str, ...], bool], threading.Lock] = {}


def get_reader(languages: tuple[str, ...] = DEFAULT_LANGUAGES, gpu: bool = False) -> easyocr.Reader:
    """Get or create cached EasyOCR reader.

    Args:
        languages: Tuple of language codes (default: English only).
        gpu: Run the reader on GPU.

    Returns:
        Cached EasyOCR Reader instance.

    Raises:
        RecognizerUnavailableError: If EasyOCR is missing or rejects the languages.
    """
    key = (languages, gpu)
    # Recognizers run in worker threads; build each reader once
    with _reader_lock:
        if key in _reader_cache:
            return _reader_cache[key]

        try:
            import easyocr
        except ImportError as e:
            msg = "EasyOCR is not installed"
            raise RecognizerUnavailableError(msg) from e

        logger.debug("Creating EasyOCR reader for %s (gpu=%s)", ",".join(languages), gpu)
        try:
            reader = easyocr.Reader(list(languages), gpu=gpu)
        except (ValueError, RuntimeError, OSError) as e:
            msg = f"Could not create OCR engine for languages {list(languages)}: {e}"
            raise RecognizerUnavailableError(msg) from e

        _reader_cache[key] = reader
        return reader


def _poly_to_region(poly: Any) -> Region:
    # EasyOCR boxes are [[x1,y1], [x2,y1], [x2,y2], [x1,y2]], possibly skewed
    xs = [float(p[0]) for p in poly]
    ys = [float(p[1]) for p in poly]
    return Region(x=min(xs), y=min(ys), width=max(xs) - min(xs), height=max(ys) - min(ys))


def parse_results(results: Any) -> tuple[RecognizedRun, ...]:
    """Convert raw EasyOCR ``readtext`` output into recognized runs."""
    return tuple(
        RecognizedRun(
            text=str(text),
            bounding_box=_poly_to_region(poly),
            confidence=float(confidence),
        )
        for poly, text, confidence in results
    )


class EasyOcrRecognizer:
    """Recognize text in images with EasyOCR.

    Instances are callables usable as the ``recognize`` collaborator of
    ScreenTextFinder. The reader is created on first use and shared with
    every recognizer using the same languages. Calls sharing a reader run
    one at a time; readers for different languages run in parallel.
    """

    def __init__(self, languages: tuple[str, ...] = DEFAULT_LANGUAGES, gpu: bool = False):
        self.languages = languages
        self.gpu = gpu

    def __call__(self, image: Image.Image) -> tuple[RecognizedRun, ...]:
        import numpy as np

        reader = get_reader(self.languages, self.gpu)
        lock = _readtext_locks.setdefault((self.languages, self.gpu), threading.Lock())
        with lock:
            results = reader.readtext(np.asarray(image.convert("RGB")))
        runs = parse_results(results)
        logger.debug("Recognized %d text runs", len(runs))
        return runs


def extract_text(
    image: Image.Image,
    languages: tuple[str, ...] = DEFAULT_LANGUAGES,
    gpu: bool = False,
) -> str:
    """Recognize all text in an image.

    Args:
        image: Image to read.
        languages: Tuple of language codes for OCR.
        gpu: Run the reader on GPU.

    Returns:
        Recognized runs joined by single spaces.
    """
    runs = EasyOcrRecognizer(languages, gpu)(image)
    return " ".join(run.text for run in runs if run.text)
