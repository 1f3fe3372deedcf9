"""
Image processing utilities for Vibe Check.

Full-page captures at 1.5x can get very tall; these helpers let the copy
sent to the model be downscaled without touching the screenshot returned
to the client.
"""

import base64
import io
from typing import Tuple

from PIL import Image


def image_dimensions(png_bytes: bytes) -> Tuple[int, int]:
    """Return (width, height) of an encoded image"""
    with Image.open(io.BytesIO(png_bytes)) as image:
        return image.size


def resize_screenshot_if_needed(png_bytes: bytes, max_dimension: int = 0) -> bytes:
    """
    Downscale a screenshot so neither side exceeds max_dimension.

    Args:
        png_bytes: Original PNG screenshot bytes
        max_dimension: Maximum width/height in pixels (0 or less disables resizing)

    Returns:
        PNG bytes, unchanged when no resize was needed
    """
    if max_dimension <= 0:
        return png_bytes

    with Image.open(io.BytesIO(png_bytes)) as image:
        width, height = image.size
        if width <= max_dimension and height <= max_dimension:
            return png_bytes

        # Calculate new dimensions maintaining aspect ratio
        if width > height:
            new_width = max_dimension
            new_height = max(1, int(height * (max_dimension / width)))
        else:
            new_height = max_dimension
            new_width = max(1, int(width * (max_dimension / height)))

        resized = image.resize((new_width, new_height), Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    resized.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


def to_base64(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("utf-8")


def to_data_url(image_bytes: bytes, media_type: str = "image/png") -> str:
    """Encode bytes as a data: URL, e.g. ``data:image/png;base64,...``"""
    return f"data:{media_type};base64,{to_base64(image_bytes)}"
