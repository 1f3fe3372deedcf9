"""
Headless browser capture for Vibe Check.

Every capture launches its own isolated Chromium and tears it down again,
so a crashed or hung page in one request cannot affect another. There is
deliberately no pool.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from analyzer.errors import BrowserLaunchError, NavigationFailed
from config import Settings

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",  # Prevents memory issues in Docker
    "--no-sandbox",  # Required in some containerized environments
    "--disable-setuid-sandbox",
    "--disable-gpu",
]


async def _close_quietly(resource, name: str):
    """Close a Playwright resource, logging instead of raising on failure"""
    if resource is None:
        return
    try:
        await resource.close()
    except Exception as e:
        logger.warning(f"⚠️  Error closing {name}: {str(e)}")


@asynccontextmanager
async def browser_session(
    settings: Settings,
    playwright_factory: Callable = async_playwright,
) -> AsyncIterator[Page]:
    """
    Launch a headless browser and yield a fresh page.

    Page, context and browser are closed on every exit path, including
    exceptions raised inside the ``async with`` body. Playwright itself is
    stopped by its own context manager.

    Args:
        settings: Viewport and device scale settings
        playwright_factory: Returns a Playwright async context manager

    Raises:
        BrowserLaunchError: If Chromium could not be started
    """
    async with playwright_factory() as p:
        try:
            browser = await p.chromium.launch(headless=True, args=LAUNCH_ARGS)
        except Exception as e:
            logger.error(f"❌ Browser launch failed: {str(e)}")
            raise BrowserLaunchError(f"Failed to launch browser: {str(e)}") from e

        context = None
        page = None
        try:
            context = await browser.new_context(
                viewport={
                    "width": settings.VIEWPORT_WIDTH,
                    "height": settings.VIEWPORT_HEIGHT,
                },
                device_scale_factor=settings.DEVICE_SCALE_FACTOR,
            )
            page = await context.new_page()
            yield page
        finally:
            await _close_quietly(page, "page")
            await _close_quietly(context, "browser context")
            await _close_quietly(browser, "browser")
            logger.debug("🧹 Browser torn down")


async def scroll_through_page(page: Page, settings: Settings):
    """
    Sweep the page top to bottom so lazy-loaded sections mount.

    Scrolls in fixed steps up to the body's scroll height, pausing after
    each jump, then returns to the top and waits for final paints.
    """
    scroll_height = await page.evaluate("document.body.scrollHeight")
    scroll_height = int(scroll_height or 0)
    step = max(1, settings.SCROLL_STEP_PX)

    for y in range(0, scroll_height, step):
        await page.evaluate(f"window.scrollTo(0, {y})")
        await page.wait_for_timeout(settings.SCROLL_PAUSE_MS)

    # Scroll back to top and wait for final paints
    await page.evaluate("window.scrollTo(0, 0)")
    await page.wait_for_timeout(settings.FINAL_SETTLE_MS)


async def capture_full_page_screenshot(
    url: str,
    settings: Settings,
    playwright_factory: Callable = async_playwright,
) -> bytes:
    """
    Capture a full-page PNG of a live web page.

    Args:
        url: Normalized absolute URL
        settings: Capture timings and viewport settings
        playwright_factory: Injected in tests; defaults to Playwright

    Returns:
        Raw PNG bytes

    Raises:
        BrowserLaunchError: Chromium could not be started
        NavigationFailed: DNS, TLS, connection or timeout failure while loading
    """
    async with browser_session(settings, playwright_factory) as page:
        logger.info(f"📡 Navigating to {url}")
        nav_start = time.time()
        try:
            # Non-2xx documents still render and are captured
            await page.goto(
                url,
                wait_until="networkidle",
                timeout=settings.NAVIGATION_TIMEOUT_MS,
            )
        except PlaywrightError as e:
            logger.warning(f"⚠️  Navigation to {url} failed: {str(e)}")
            raise NavigationFailed(f"Failed to load {url}: {str(e)}") from e
        logger.info(f"⏱️  Page navigation completed in {time.time() - nav_start:.2f}s")

        await page.wait_for_timeout(settings.SETTLE_DELAY_MS)
        await scroll_through_page(page, settings)

        screenshot = await page.screenshot(type="png", full_page=True)
        logger.info(f"📸 Captured full-page screenshot ({len(screenshot)} bytes)")
        return screenshot
