"""Command-line interface for Screen Text Finder."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from .actions import list_words, locate_all, locate_closest
from .capture import (
    ImageCapture,
    RecordingCapture,
    annotate_regions,
    capture_screen,
    load_image,
)
from .finder import CaptureFn
from .models import (
    DEFAULT_LANGUAGES,
    DEFAULT_THRESHOLD,
    DEFAULT_TOP_K,
    FinderConfig,
    Point,
    Region,
    Scorer,
    ScreenTextFinderError,
    TextLocation,
)

app = typer.Typer(
    name="screen-text-finder",
    help="Find on-screen text with OCR and fuzzy word matching.",
)


# =============================================================================
# Option dataclasses for grouping related CLI options
# =============================================================================


@dataclass(frozen=True)
class SearchAreaOptions:
    """Where to search: a region, a point with a size, or a stored image."""

    region: str | None = None
    at: str | None = None
    size: int = 400
    image: Path | None = None


@dataclass(frozen=True)
class MatchOptions:
    """Fuzzy matching and recognition settings."""

    threshold: int = DEFAULT_THRESHOLD
    top_k: int = DEFAULT_TOP_K
    scorer: str = "wratio"
    languages: list[str] | None = None
    min_confidence: float = 0.0


# =============================================================================
# Common type aliases for Typer options
# =============================================================================

QueryArg = Annotated[str, typer.Argument(help="Text to search for")]

# Search area options
RegionOpt = Annotated[
    str | None, typer.Option("--region", "-r", help="Search region as x,y,width,height")
]
AtOpt = Annotated[str | None, typer.Option("--at", help="Search around point x,y")]
SizeOpt = Annotated[int, typer.Option("--size", help="Side of the square used with --at")]
ImageOpt = Annotated[
    Path | None,
    typer.Option(
        "--image",
        "-i",
        help="Search a stored screenshot instead of the live screen",
        exists=True,
        dir_okay=False,
    ),
]

# Match options
ThresholdOpt = Annotated[
    int, typer.Option("--threshold", "-t", min=0, max=100, help="Minimum match score (0-100)")
]
TopKOpt = Annotated[
    int, typer.Option("--top-k", "-k", min=1, help="Best matches considered for closest")
]
ScorerOpt = Annotated[
    str,
    typer.Option(
        "--scorer",
        help="Scorer: wratio, ratio, partial_ratio, token_sort_ratio, token_set_ratio",
    ),
]
LangOpt = Annotated[
    list[str] | None, typer.Option("--lang", "-l", help="OCR language code (repeatable)")
]
MinConfidenceOpt = Annotated[
    float, typer.Option("--min-confidence", help="Skip OCR runs below this confidence")
]
RefOpt = Annotated[
    str | None, typer.Option("--ref", help="Reference point x,y (default: region center)")
]

# Output options
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]
AnnotateOpt = Annotated[
    Path | None, typer.Option("--annotate", help="Save the searched area with matches outlined")
]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


# =============================================================================
# Parsing functions
# =============================================================================

REGION_PARTS_COUNT = 4  # x, y, width, height
POINT_PARTS_COUNT = 2  # x, y


def parse_region(region_str: str | None) -> Region | None:
    """Parse region string to Region.

    Args:
        region_str: Region in format "x,y,width,height".

    Returns:
        Region or None if not provided.

    Raises:
        typer.BadParameter: If format is invalid.
    """
    if not region_str:
        return None

    parts = region_str.split(",")
    if len(parts) != REGION_PARTS_COUNT:
        raise typer.BadParameter(f"Region must be x,y,width,height: {region_str}")

    try:
        x, y, w, h = (float(p.strip()) for p in parts)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid region values: {region_str}") from e

    if w <= 0 or h <= 0:
        raise typer.BadParameter(f"Region width and height must be positive: {region_str}")

    return Region(x=x, y=y, width=w, height=h)


def parse_point(point_str: str | None) -> Point | None:
    """Parse point string "x,y" to Point.

    Raises:
        typer.BadParameter: If format is invalid.
    """
    if not point_str:
        return None

    parts = point_str.split(",")
    if len(parts) != POINT_PARTS_COUNT:
        raise typer.BadParameter(f"Point must be x,y: {point_str}")

    try:
        x, y = (float(p.strip()) for p in parts)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid point values: {point_str}") from e

    return Point(x=x, y=y)


def parse_scorer(scorer: str) -> Scorer:
    """Parse scorer string to enum value."""
    try:
        return Scorer(scorer.lower())
    except ValueError as e:
        raise typer.BadParameter(f"Unknown scorer: {scorer}") from e


def build_config(match_opts: MatchOptions) -> FinderConfig:
    """Build FinderConfig from match options."""
    return FinderConfig(
        threshold=match_opts.threshold,
        top_k=match_opts.top_k,
        scorer=parse_scorer(match_opts.scorer),
        languages=tuple(match_opts.languages) if match_opts.languages else DEFAULT_LANGUAGES,
        min_confidence=match_opts.min_confidence,
    )


def resolve_search_area(area: SearchAreaOptions) -> tuple[Region, CaptureFn]:
    """Pick the search region and the capture collaborator.

    With --image the stored screenshot stands in for the screen and the
    whole image is searched unless --region or --at narrows it down.

    Raises:
        typer.BadParameter: If no search area is given.
    """
    region = parse_region(area.region)
    if region is None and area.at:
        center = parse_point(area.at)
        region = Region.around(center.x, center.y, area.size)

    if area.image is not None:
        capture = ImageCapture(load_image(area.image))
        return region or capture.bounds, capture

    if region is None:
        msg = "Specify --region, --at or --image"
        raise typer.BadParameter(msg)

    return region, capture_screen


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _annotate(capture: RecordingCapture, region: Region, locations, output: Path) -> None:
    path = annotate_regions(
        capture.last_image, (loc.region for loc in locations), region, output
    )
    print(f"Annotated image saved: {path}")


def _print_locations(locations: tuple[TextLocation, ...]) -> None:
    print(f"{'Text':<30} {'Score':>5}  {'X':>7} {'Y':>7} {'W':>6} {'H':>6}")
    print("-" * 68)
    for loc in locations:
        r = loc.region.truncated()
        print(
            f"{loc.text[:30]:<30} {loc.score:>5}  "
            f"{int(r.x):>7} {int(r.y):>7} {int(r.width):>6} {int(r.height):>6}"
        )


def _exit_with_error(e: Exception, json_output: bool) -> typer.Exit:
    if json_output:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
    else:
        print(f"Error: {e}", file=sys.stderr)
    return typer.Exit(1)


# =============================================================================
# Command handlers
# =============================================================================


def _handle_find(
    query: str,
    area: SearchAreaOptions,
    config: FinderConfig,
    *,
    json_output: bool = False,
    annotate: Path | None = None,
) -> int:
    """Handle find action."""
    region, capture = resolve_search_area(area)
    capture = RecordingCapture(capture)
    locations = locate_all(query, region, config, capture=capture)

    if json_output:
        print(json.dumps([loc.to_dict() for loc in locations], indent=2))
    elif locations:
        suffix = "es" if len(locations) != 1 else ""
        print(f"Found {len(locations)} match{suffix} for '{query}':")
        _print_locations(locations)
    else:
        print(f"No matches found for '{query}'")

    if annotate is not None:
        _annotate(capture, region, locations, annotate)

    return 0 if locations else 1


def _handle_closest(
    query: str,
    area: SearchAreaOptions,
    config: FinderConfig,
    reference: Point | None,
    *,
    json_output: bool = False,
    annotate: Path | None = None,
) -> int:
    """Handle closest action."""
    region, capture = resolve_search_area(area)
    capture = RecordingCapture(capture)
    location = locate_closest(query, region, reference, config, capture=capture)

    if json_output:
        print(json.dumps(location.to_dict() if location else None, indent=2))
    elif location:
        r = location.region.truncated()
        c = location.region.center
        print(f"Closest match: '{location.text}' (score {location.score})")
        print(f"  Region: {int(r.x)},{int(r.y)},{int(r.width)},{int(r.height)}")
        print(f"  Center: {int(c.x)},{int(c.y)}")
    else:
        print(f"No matches found for '{query}'")

    if annotate is not None:
        _annotate(capture, region, (location,) if location else (), annotate)

    return 0 if location else 1


def _handle_list(
    area: SearchAreaOptions,
    config: FinderConfig,
    *,
    json_output: bool = False,
) -> int:
    """Handle list action."""
    region, capture = resolve_search_area(area)
    words = list_words(region, config, capture=capture)

    if json_output:
        data = [
            {
                "text": word.text,
                "offset": word.offset,
                "run": word.source.text,
                "confidence": word.source.confidence,
            }
            for word in words
        ]
        print(json.dumps(data, indent=2))
        return 0

    if not words:
        print("No text found")
        return 0

    print(f"{'Word':<24} {'Offset':>6}  {'Confidence':>10}  Run")
    print("-" * 72)
    for word in words:
        print(
            f"{word.text[:24]:<24} {word.offset:>6}  "
            f"{word.source.confidence:>10.2f}  {word.source.text[:40]}"
        )
    return 0


# =============================================================================
# Commands
# =============================================================================


@app.command("find")
def find_cmd(  # noqa: PLR0913 - Typer CLI requires many options
    query: QueryArg,
    region: RegionOpt = None,
    at: AtOpt = None,
    size: SizeOpt = 400,
    image: ImageOpt = None,
    threshold: ThresholdOpt = DEFAULT_THRESHOLD,
    scorer: ScorerOpt = "wratio",
    lang: LangOpt = None,
    min_confidence: MinConfidenceOpt = 0.0,
    json_output: JsonOpt = False,
    annotate: AnnotateOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Find every word matching QUERY."""
    _setup_logging(verbose)
    try:
        area = SearchAreaOptions(region=region, at=at, size=size, image=image)
        match_opts = MatchOptions(
            threshold=threshold, scorer=scorer, languages=lang, min_confidence=min_confidence
        )
        result = _handle_find(
            query, area, build_config(match_opts), json_output=json_output, annotate=annotate
        )
        if result != 0:
            raise typer.Exit(result)

    except ScreenTextFinderError as e:
        raise _exit_with_error(e, json_output) from e


@app.command("closest")
def closest_cmd(  # noqa: PLR0913 - Typer CLI requires many options
    query: QueryArg,
    region: RegionOpt = None,
    at: AtOpt = None,
    size: SizeOpt = 400,
    image: ImageOpt = None,
    ref: RefOpt = None,
    threshold: ThresholdOpt = DEFAULT_THRESHOLD,
    top_k: TopKOpt = DEFAULT_TOP_K,
    scorer: ScorerOpt = "wratio",
    lang: LangOpt = None,
    min_confidence: MinConfidenceOpt = 0.0,
    json_output: JsonOpt = False,
    annotate: AnnotateOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Find the match for QUERY nearest to a reference point."""
    _setup_logging(verbose)
    try:
        area = SearchAreaOptions(region=region, at=at, size=size, image=image)
        match_opts = MatchOptions(
            threshold=threshold,
            top_k=top_k,
            scorer=scorer,
            languages=lang,
            min_confidence=min_confidence,
        )
        result = _handle_closest(
            query,
            area,
            build_config(match_opts),
            parse_point(ref),
            json_output=json_output,
            annotate=annotate,
        )
        if result != 0:
            raise typer.Exit(result)

    except ScreenTextFinderError as e:
        raise _exit_with_error(e, json_output) from e


@app.command("list")
def list_cmd(  # noqa: PLR0913 - Typer CLI requires many options
    region: RegionOpt = None,
    at: AtOpt = None,
    size: SizeOpt = 400,
    image: ImageOpt = None,
    lang: LangOpt = None,
    min_confidence: MinConfidenceOpt = 0.0,
    json_output: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """List every candidate word recognized in the search area."""
    _setup_logging(verbose)
    try:
        area = SearchAreaOptions(region=region, at=at, size=size, image=image)
        config = build_config(MatchOptions(languages=lang, min_confidence=min_confidence))
        result = _handle_list(area, config, json_output=json_output)
        if result != 0:
            raise typer.Exit(result)

    except ScreenTextFinderError as e:
        raise _exit_with_error(e, json_output) from e


def main(argv: list[str] | None = None) -> int:
    """Main entry point for screen-text-finder CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    if argv is not None:
        sys.argv = ["screen-text-finder", *list(argv)]
    try:
        app(prog_name="screen-text-finder")
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
