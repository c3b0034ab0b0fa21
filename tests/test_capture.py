"""Tests for capture collaborators and result highlighting."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image
from screen_text_finder.capture import (
    ImageCapture,
    RecordingCapture,
    annotate_regions,
    capture_screen,
    load_image,
)
from screen_text_finder.models import CaptureError, Region


@pytest.fixture
def screen_image() -> Image.Image:
    """Stand-in screen with a black square at (40, 30)."""
    img = Image.new("RGB", (200, 100), color="white")
    img.paste((0, 0, 0), (40, 30, 60, 50))
    return img


class TestCaptureScreen:
    """Tests for capture_screen function."""

    def test_grabs_region_bbox(self) -> None:
        """Test the region is passed to Pillow as a pixel bbox."""
        with patch("PIL.ImageGrab.grab") as mock_grab:
            mock_grab.return_value = "image"
            result = capture_screen(Region(10.5, 20, 100, 50))

        assert result == "image"
        mock_grab.assert_called_once_with(bbox=(10, 20, 110, 70), all_screens=True)

    def test_grab_failure(self) -> None:
        """Test Pillow failures become CaptureError."""
        with (
            patch("PIL.ImageGrab.grab", side_effect=OSError("X get_image failed")),
            pytest.raises(CaptureError, match="X get_image failed"),
        ):
            capture_screen(Region(0, 0, 10, 10))

    def test_empty_region(self) -> None:
        """Test zero-sized regions are rejected before grabbing."""
        with pytest.raises(CaptureError, match="empty region"):
            capture_screen(Region(0, 0, 0, 10))


class TestImageCapture:
    """Tests for ImageCapture."""

    def test_bounds(self, screen_image: Image.Image) -> None:
        """Test bounds cover the whole image."""
        assert ImageCapture(screen_image).bounds == Region(0, 0, 200, 100)

    def test_crops_region(self, screen_image: Image.Image) -> None:
        """Test the requested region is cropped out."""
        crop = ImageCapture(screen_image)(Region(40, 30, 20, 20))
        assert crop.size == (20, 20)
        assert crop.getpixel((0, 0)) == (0, 0, 0)

    def test_region_outside_image(self, screen_image: Image.Image) -> None:
        """Test regions past the image edge are rejected."""
        with pytest.raises(CaptureError, match="outside"):
            ImageCapture(screen_image)(Region(150, 50, 100, 100))


class TestRecordingCapture:
    """Tests for RecordingCapture."""

    def test_keeps_last_image(self, screen_image: Image.Image) -> None:
        """Test the image handed out is kept for later use."""
        recorder = RecordingCapture(ImageCapture(screen_image))
        assert recorder.last_image is None

        crop = recorder(Region(40, 30, 20, 20))

        assert recorder.last_image is crop

    def test_errors_propagate(self, screen_image: Image.Image) -> None:
        """Test capture failures pass through and record nothing."""
        recorder = RecordingCapture(ImageCapture(screen_image))
        with pytest.raises(CaptureError):
            recorder(Region(150, 50, 100, 100))
        assert recorder.last_image is None


class TestLoadImage:
    """Tests for load_image function."""

    def test_load(self, temp_image: Path) -> None:
        """Test a PNG loads with its size."""
        assert load_image(temp_image).size == (300, 200)

    def test_not_an_image(self, tmp_path: Path) -> None:
        """Test unreadable files raise CaptureError."""
        path = tmp_path / "notes.png"
        path.write_text("not an image")
        with pytest.raises(CaptureError, match="Cannot read image"):
            load_image(path)


class TestAnnotateRegions:
    """Tests for annotate_regions function."""

    def test_draws_local_rectangles(self, tmp_path: Path) -> None:
        """Test screen regions are drawn at their image-local position."""
        image = Image.new("RGB", (100, 100), color="white")
        origin = Region(500, 300, 100, 100)
        output = tmp_path / "out" / "annotated.png"

        path = annotate_regions(image, [Region(510, 320, 30, 10)], origin, output)

        assert path == output.resolve()
        saved = Image.open(path).convert("RGB")
        assert saved.getpixel((10, 20)) == (255, 0, 0)
        assert saved.getpixel((50, 50)) == (255, 255, 255)

    def test_fractional_origin_truncated(self, tmp_path: Path) -> None:
        """Test a fractional origin lines up with the whole-pixel capture."""
        image = Image.new("RGB", (100, 100), color="white")
        origin = Region(500.7, 300.9, 100, 100)

        path = annotate_regions(image, [Region(510, 320, 30, 10)], origin, tmp_path / "a.png")

        saved = Image.open(path).convert("RGB")
        assert saved.getpixel((10, 20)) == (255, 0, 0)

    def test_no_regions(self, tmp_path: Path) -> None:
        """Test an empty result still saves the image."""
        image = Image.new("RGB", (10, 10), color="white")
        path = annotate_regions(image, [], Region(0, 0, 10, 10), tmp_path / "plain.png")
        assert path.exists()
