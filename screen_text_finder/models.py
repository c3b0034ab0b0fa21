"""Data models and exceptions for screen text finding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Default settings
DEFAULT_THRESHOLD = 80
DEFAULT_TOP_K = 5
DEFAULT_MIN_WORD_SIZE = 3
DEFAULT_LANGUAGES = ("en",)


class ScreenTextFinderError(Exception):
    """Base exception for screen text finder errors."""


class CaptureError(ScreenTextFinderError):
    """Failed to capture a screen region."""


class RecognizerUnavailableError(ScreenTextFinderError):
    """OCR engine is missing or could not be created."""


class GeometryError(ScreenTextFinderError):
    """Word or run geometry violates its bounds."""


class Scorer(Enum):
    """Similarity scorers available for fuzzy matching."""

    WRATIO = "wratio"  # Weighted ratio (default)
    RATIO = "ratio"
    PARTIAL_RATIO = "partial_ratio"
    TOKEN_SORT_RATIO = "token_sort_ratio"
    TOKEN_SET_RATIO = "token_set_ratio"


@dataclass(frozen=True)
class Point:
    """A pixel coordinate."""

    x: float
    y: float

    def translate(self, dx: float, dy: float) -> Point:
        """Return the point shifted by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary representation."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle in image-local or screen-global pixels."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def around(cls, x: float, y: float, size: float) -> Region:
        """Square region of side ``size`` centred on (x, y)."""
        return cls(x=int(x - size / 2), y=int(y - size / 2), width=size, height=size)

    @property
    def right(self) -> float:
        """Return right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Return bottom edge."""
        return self.y + self.height

    @property
    def center(self) -> Point:
        """Return center point of the region."""
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def translate(self, dx: float, dy: float) -> Region:
        """Return the region shifted by (dx, dy)."""
        return Region(self.x + dx, self.y + dy, self.width, self.height)

    def truncated(self) -> Region:
        """Return the region with every field truncated to whole pixels."""
        return Region(int(self.x), int(self.y), int(self.width), int(self.height))

    def as_bbox(self) -> tuple[int, int, int, int]:
        """Return (left, top, right, bottom) in whole pixels."""
        r = self.truncated()
        return int(r.x), int(r.y), int(r.x + r.width), int(r.y + r.height)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary representation."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "center_x": self.center.x,
            "center_y": self.center.y,
        }


@dataclass(frozen=True)
class RecognizedRun:
    """One text span reported by the OCR engine, in image-local pixels."""

    text: str
    bounding_box: Region
    confidence: float = 1.0


@dataclass(frozen=True)
class Word:
    """A sub-span of a RecognizedRun produced by segmentation."""

    text: str
    offset: int
    source: RecognizedRun

    def __post_init__(self) -> None:
        if self.offset < 0 or self.offset + len(self.text) > len(self.source.text):
            msg = (
                f"Word '{self.text}' at offset {self.offset} does not fit "
                f"in run '{self.source.text}'"
            )
            raise GeometryError(msg)


@dataclass(frozen=True)
class ScoredMatch:
    """A word paired with its similarity score against a query."""

    word: Word
    score: int
    index: int


@dataclass(frozen=True)
class TextLocation:
    """A matched word located on screen."""

    text: str
    score: int
    region: Region
    point: Point

    def to_dict(self) -> dict[str, str | int | dict[str, float]]:
        """Convert to dictionary representation."""
        return {
            "text": self.text,
            "score": self.score,
            "region": self.region.to_dict(),
            "point": self.point.to_dict(),
        }


@dataclass(frozen=True)
class FinderConfig:
    """Configuration for a find operation."""

    # Matching
    threshold: int = DEFAULT_THRESHOLD
    top_k: int = DEFAULT_TOP_K
    scorer: Scorer = Scorer.WRATIO

    # Segmentation
    min_word_size: int = DEFAULT_MIN_WORD_SIZE

    # Recognition
    languages: tuple[str, ...] = DEFAULT_LANGUAGES
    min_confidence: float = 0.0
    gpu: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "threshold": self.threshold,
            "top_k": self.top_k,
            "scorer": self.scorer.value,
            "min_word_size": self.min_word_size,
            "languages": list(self.languages),
            "min_confidence": self.min_confidence,
            "gpu": self.gpu,
        }
