# Core package - Infrastructure components
from .browser import browser_session, capture_full_page_screenshot, scroll_through_page

__all__ = [
    "browser_session",
    "capture_full_page_screenshot",
    "scroll_through_page",
]
