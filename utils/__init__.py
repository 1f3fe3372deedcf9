# Utils package - Utility modules organized by domain
# Import from subpackages for convenience

from .clients.openrouter import OpenRouterClient
from .parsing.json import extract_json_object, repair_and_parse_json
from .images.processor import resize_screenshot_if_needed
from .url import normalize_url

__all__ = [
    "OpenRouterClient",
    "extract_json_object",
    "repair_and_parse_json",
    "resize_screenshot_if_needed",
    "normalize_url",
]
