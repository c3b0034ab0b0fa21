"""Shared fixtures for screen text finder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from screen_text_finder.models import RecognizedRun, Region


def make_run(
    text: str,
    x: float = 0,
    y: float = 0,
    width: float | None = None,
    height: float = 20,
    confidence: float = 1.0,
) -> RecognizedRun:
    """Build a run 10 pixels per character wide unless a width is given."""
    if width is None:
        width = 10 * len(text)
    return RecognizedRun(
        text=text,
        bounding_box=Region(x=x, y=y, width=width, height=height),
        confidence=confidence,
    )


class FakeRecognizer:
    """Recognizer returning fixed runs and recording the images it saw."""

    def __init__(self, runs):
        self.runs = tuple(runs)
        self.images = []

    def __call__(self, image):
        self.images.append(image)
        return self.runs


class FakeCapture:
    """Capture returning a placeholder image and recording requested regions."""

    def __init__(self):
        self.regions = []

    def __call__(self, region):
        self.regions.append(region)
        return f"image-of-{region.as_bbox()}"


@pytest.fixture
def run_factory():
    """Expose make_run as a fixture."""
    return make_run


@pytest.fixture
def recognizer_factory():
    """Expose FakeRecognizer as a fixture."""
    return FakeRecognizer


@pytest.fixture
def fake_capture() -> FakeCapture:
    """Capture collaborator that never touches the screen."""
    return FakeCapture()


@pytest.fixture
def mock_easyocr_results() -> list[tuple[list[list[int]], str, float]]:
    """Mock EasyOCR readtext results."""
    return [
        ([[10, 20], [160, 20], [160, 40], [10, 40]], "GetWordPosition", 0.95),
        ([[10, 60], [70, 60], [70, 80], [10, 80]], "Submit", 0.90),
        ([[200, 60], [260, 60], [260, 80], [200, 80]], "Cancel", 0.85),
        ([[10, 100], [90, 100], [90, 120], [10, 120]], "Low Conf", 0.30),
    ]


@pytest.fixture
def temp_image(tmp_path: Path) -> Path:
    """Create a temporary valid PNG image for testing."""
    from PIL import Image, ImageDraw

    img = Image.new("RGB", (300, 200), color="white")
    draw = ImageDraw.Draw(img)
    draw.text((10, 20), "GetWordPosition", fill="black")
    draw.text((10, 60), "Submit", fill="black")
    draw.text((200, 60), "Cancel", fill="black")
    img_path = tmp_path / "test_image.png"
    img.save(img_path)
    return img_path
