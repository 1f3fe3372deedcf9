"""
Request orchestration for Vibe Check.

One analysis runs strictly in sequence:
validate -> check credential -> capture -> critique -> sanitize -> respond.
Any failure aborts the whole request; there are no retries and no partial
results.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from analyzer.errors import ConfigurationError
from analyzer.sanitizer import parse_critique
from config import Settings
from core.browser import capture_full_page_screenshot
from models import AnalysisResponse
from utils.clients.openrouter import OpenRouterClient
from utils.images.processor import (
    image_dimensions,
    resize_screenshot_if_needed,
    to_base64,
    to_data_url,
)
from utils.url import normalize_url

logger = logging.getLogger(__name__)

CaptureFn = Callable[[str, Settings], Awaitable[bytes]]


class Stage(str, Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    CAPTURING = "capturing"
    CRITIQUING = "critiquing"
    SANITIZING = "sanitizing"
    RESPONDING = "responding"
    ERROR = "error"


class VibeCheckAnalyzer:
    """
    Composes normalizer, capturer, critique client and sanitizer.

    Args:
        settings: Explicit configuration (no ambient globals)
        capture: Screenshot function, ``(url, settings) -> png bytes``
        critique_client: Object with ``async critique(url, image_base64) -> str``
    """

    def __init__(
        self,
        settings: Settings,
        capture: Optional[CaptureFn] = None,
        critique_client=None,
    ):
        self.settings = settings
        self.capture = capture or capture_full_page_screenshot
        self.critique_client = critique_client or OpenRouterClient(settings)
        self.stage = Stage.RECEIVED

    def _enter(self, stage: Stage, url=None):
        self.stage = stage
        logger.debug(f"➡️  {stage.value} ({url})")

    async def analyze(self, raw_url) -> AnalysisResponse:
        """
        Run one full analysis.

        Args:
            raw_url: The unvalidated ``url`` field from the request body

        Returns:
            AnalysisResponse with the normalized URL, PNG data URL and critique

        Raises:
            VibeCheckError subclasses; the route maps them to status + body
        """
        url = raw_url
        try:
            self._enter(Stage.VALIDATING, raw_url)
            url = normalize_url(raw_url)

            # Checked before capture so a misconfigured server never launches a browser
            if not self.settings.has_api_key:
                raise ConfigurationError()

            self._enter(Stage.CAPTURING, url)
            screenshot = await self.capture(url, self.settings)

            self._enter(Stage.CRITIQUING, url)
            model_image = resize_screenshot_if_needed(
                screenshot, self.settings.CRITIQUE_MAX_IMAGE_DIMENSION
            )
            if model_image is not screenshot:
                logger.info(
                    f"🖼️  Downscaled model image to {image_dimensions(model_image)}"
                )
            response_text = await self.critique_client.critique(url, to_base64(model_image))

            self._enter(Stage.SANITIZING, url)
            analysis = parse_critique(response_text)

            self._enter(Stage.RESPONDING, url)
            logger.info(f"✅ Analysis complete for {url}: {analysis.verdict[:80]}")
            logger.info(f"📊 Scores for {url}: {analysis.score_summary()}")
            return AnalysisResponse(
                url=url,
                screenshot_base64=to_data_url(screenshot),
                analysis=analysis,
            )
        except Exception as e:
            failed_stage = self.stage
            self.stage = Stage.ERROR
            logger.warning(f"❌ Analysis failed during {failed_stage.value} for {url}: {str(e)}")
            raise
