# Images subpackage - screenshot encoding and resizing
from .processor import image_dimensions, resize_screenshot_if_needed, to_base64, to_data_url

__all__ = [
    "image_dimensions",
    "resize_screenshot_if_needed",
    "to_base64",
    "to_data_url",
]
