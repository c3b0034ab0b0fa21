"""Screen capture collaborators and result highlighting."""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable
from pathlib import Path

from screen_text_finder.models import CaptureError, Region

logger = logging.getLogger(__name__)


@functools.cache
def _get_pil():
    """Lazy load PIL image modules (cached)."""
    from PIL import Image, ImageDraw, ImageGrab

    return Image, ImageDraw, ImageGrab


def capture_screen(region: Region):
    """Capture a region of the screen.

    Args:
        region: Screen-global region to grab.

    Returns:
        PIL image of the region.

    Raises:
        CaptureError: If the region is empty or the screen cannot be grabbed.
    """
    if region.width <= 0 or region.height <= 0:
        msg = f"Cannot capture empty region {region}"
        raise CaptureError(msg)

    _, _, image_grab = _get_pil()
    logger.debug("Capturing screen region %s", region.as_bbox())
    try:
        return image_grab.grab(bbox=region.as_bbox(), all_screens=True)
    except OSError as e:
        msg = f"Screen capture failed for {region.as_bbox()}: {e}"
        raise CaptureError(msg) from e


def load_image(image_path: Path | str):
    """Open an image file, loading it fully into memory.

    Raises:
        CaptureError: If the file cannot be read as an image.
    """
    image_module, _, _ = _get_pil()
    try:
        with image_module.open(image_path) as img:
            img.load()
            return img.copy()
    except OSError as e:
        msg = f"Cannot read image {image_path}: {e}"
        raise CaptureError(msg) from e


class ImageCapture:
    """Capture collaborator that treats a stored image as the whole screen."""

    def __init__(self, image):
        self.image = image

    @property
    def bounds(self) -> Region:
        """Region covering the whole image."""
        return Region(0, 0, self.image.width, self.image.height)

    def __call__(self, region: Region):
        left, top, right, bottom = region.as_bbox()
        if left < 0 or top < 0 or right > self.image.width or bottom > self.image.height:
            msg = f"Region {region.as_bbox()} lies outside the {self.image.size} image"
            raise CaptureError(msg)
        return self.image.crop((left, top, right, bottom))


class RecordingCapture:
    """Capture collaborator that keeps the last image it handed out.

    Lets callers draw on exactly the frame the recognizer read instead of
    grabbing the screen again.
    """

    def __init__(self, capture):
        self.capture = capture
        self.last_image = None

    def __call__(self, region: Region):
        self.last_image = self.capture(region)
        return self.last_image


def annotate_regions(
    image,
    regions: Iterable[Region],
    origin: Region,
    output_path: Path | str,
    color: str = "red",
) -> Path:
    """Draw screen-global regions onto a captured image and save it.

    Args:
        image: Image captured at ``origin``.
        regions: Screen-global rectangles to outline.
        origin: Region the image was captured from. Fractional edges are
            truncated the way captures truncate them.
        output_path: Where to save the annotated image.
        color: Outline color.

    Returns:
        Resolved path of the saved image.
    """
    _, image_draw, _ = _get_pil()
    annotated = image.convert("RGB")
    draw = image_draw.Draw(annotated)
    origin = origin.truncated()

    for region in regions:
        local = region.translate(-origin.x, -origin.y)
        draw.rectangle(local.as_bbox(), outline=color)

    path = Path(output_path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    annotated.save(path)
    return path
