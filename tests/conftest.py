"""
Shared fixtures: settings, a tiny PNG, and in-memory stand-ins for
Playwright and the critique API so no browser or network is needed.
"""

import io
import json

import pytest
from PIL import Image

from config import Settings

VALID_CRITIQUE = {
    "verdict": "A beige fever dream with good bones.",
    "scores": {
        "palette": 6,
        "typography": 7.6,
        "layout": 5,
        "originality": 3,
        "overallVibe": 6,
    },
    "aiSlopDetected": True,
    "aiSlopSignals": ["purple gradient hero", "three-card feature grid"],
    "categoryRoasts": {
        "palette": "Beige on beige.",
        "typography": "Inter, again.",
        "layout": "Centered everything.",
        "originality": "Seen it 400 times.",
        "overallVibe": "Fine. Just fine.",
    },
    "overallAssessment": "Competent template work that never takes a risk.",
}


def make_png(width: int = 40, height: int = 30) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (240, 230, 210)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        OPENROUTER_API_KEY="test-key",
        SETTLE_DELAY_MS=0,
        SCROLL_PAUSE_MS=0,
        FINAL_SETTLE_MS=0,
    )


@pytest.fixture
def valid_critique_text() -> str:
    return "Here you go:\n```json\n" + json.dumps(VALID_CRITIQUE) + "\n```"


# ======================
# Playwright stand-ins
# ======================


class FakePage:
    def __init__(self, png: bytes, scroll_height: int = 2000, goto_error: Exception = None):
        self.png = png
        self.scroll_height = scroll_height
        self.goto_error = goto_error
        self.screenshot_error = None
        self.calls = []
        self.closed = False

    async def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(("goto", url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error

    async def wait_for_timeout(self, ms):
        self.calls.append(("wait", ms))

    async def evaluate(self, expression):
        self.calls.append(("evaluate", expression))
        if expression == "document.body.scrollHeight":
            return self.scroll_height
        return None

    async def screenshot(self, type=None, full_page=False):
        self.calls.append(("screenshot", type, full_page))
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return self.png

    async def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, page: FakePage):
        self.page = page
        self.closed = False
        self.page_error = None

    async def new_page(self):
        if self.page_error is not None:
            raise self.page_error
        return self.page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.context = FakeContext(page)
        self.context_kwargs = None
        self.closed = False
        self.context_error = None

    async def new_context(self, **kwargs):
        self.context_kwargs = kwargs
        if self.context_error is not None:
            raise self.context_error
        return self.context

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, page: FakePage, launch_error: Exception = None):
        self.browser = FakeBrowser(page)
        self.launch_error = launch_error
        self.launch_count = 0
        self.launch_kwargs = None

    async def launch(self, **kwargs):
        self.launch_count += 1
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    """Behaves like ``async_playwright()``: an async context manager"""

    def __init__(self, page: FakePage, launch_error: Exception = None):
        self.chromium = FakeChromium(page, launch_error)
        self.stopped = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.stopped = True
        return False

    def __call__(self):
        return self


@pytest.fixture
def fake_page(png_bytes) -> FakePage:
    return FakePage(png_bytes)


@pytest.fixture
def fake_playwright(fake_page) -> FakePlaywright:
    return FakePlaywright(fake_page)


class FakeCritiqueClient:
    def __init__(self, text: str = "", error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    async def critique(self, url, image_base64):
        self.calls.append((url, image_base64))
        if self.error is not None:
            raise self.error
        return self.text
