"""Find on-screen text with OCR and fuzzy word matching."""

from screen_text_finder.actions import (
    find_all,
    find_all_near,
    find_closest,
    find_closest_near,
    list_words,
    locate_all,
    locate_closest,
)
from screen_text_finder.finder import ScreenTextFinder
from screen_text_finder.geometry import project, project_point, to_screen
from screen_text_finder.matcher import match_all, match_top_k, score
from screen_text_finder.models import (
    CaptureError,
    FinderConfig,
    GeometryError,
    Point,
    RecognizedRun,
    RecognizerUnavailableError,
    Region,
    ScoredMatch,
    Scorer,
    ScreenTextFinderError,
    TextLocation,
    Word,
)
from screen_text_finder.segmenter import segment, segment_runs

__all__ = [
    # Errors
    "CaptureError",
    # Models
    "FinderConfig",
    "GeometryError",
    "Point",
    "RecognizedRun",
    "RecognizerUnavailableError",
    "Region",
    "ScoredMatch",
    "Scorer",
    # Pipeline
    "ScreenTextFinder",
    "ScreenTextFinderError",
    "TextLocation",
    "Word",
    # Actions
    "find_all",
    "find_all_near",
    "find_closest",
    "find_closest_near",
    "list_words",
    "locate_all",
    "locate_closest",
    # Stages
    "match_all",
    "match_top_k",
    "project",
    "project_point",
    "score",
    "segment",
    "segment_runs",
    "to_screen",
]
