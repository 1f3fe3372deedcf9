"""
OpenRouter API client for Vibe Check.

Sends the screenshot and the critique prompt to a vision model through
OpenRouter's OpenAI-compatible chat completions endpoint. There is no retry
logic: a failed call fails the whole request.
"""

import logging
from typing import Optional

import httpx

from analyzer.errors import CritiqueBackendError
from analyzer.prompts import PROMPT_VERSION, get_critique_prompt, get_user_instruction
from config import Settings

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """
    Thin async wrapper around ``POST /chat/completions``.

    Args:
        settings: Application settings (key, model, base URL, headers)
        http_client: Optional shared httpx client; tests pass one built on
            ``httpx.MockTransport``. When omitted a client is opened per call.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self.settings.OPENROUTER_BASE_URL.rstrip('/')}/chat/completions"

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.settings.OPENROUTER_API_KEY}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.APP_REFERER,
            "X-Title": self.settings.APP_TITLE,
        }

    def build_payload(self, url: str, image_base64: str) -> dict:
        """Build the chat completion body: system prompt + text/image user message"""
        return {
            "model": self.settings.OPENROUTER_MODEL,
            "max_tokens": self.settings.MAX_TOKENS,
            "messages": [
                {"role": "system", "content": get_critique_prompt()},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": get_user_instruction(url)},
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:image/png;base64,{image_base64}"},
                        },
                    ],
                },
            ],
        }

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        return await client.post(
            self.endpoint,
            headers=self._headers(),
            json=payload,
            timeout=self.settings.CRITIQUE_TIMEOUT,
        )

    async def critique(self, url: str, image_base64: str) -> str:
        """
        Ask the model for a design critique of the screenshot.

        Args:
            url: Normalized URL of the captured page
            image_base64: Base64-encoded PNG (no data: prefix)

        Returns:
            The model's raw text, expected to contain one JSON object

        Raises:
            CritiqueBackendError: Non-2xx status or transport failure
        """
        payload = self.build_payload(url, image_base64)
        logger.info(
            f"🤖 Requesting critique from {self.settings.OPENROUTER_MODEL} "
            f"(prompt {PROMPT_VERSION}) for {url}"
        )

        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, payload)
        except httpx.HTTPError as e:
            logger.error(f"❌ OpenRouter request failed: {str(e)}")
            raise CritiqueBackendError(f"OpenRouter request failed: {str(e)}") from e

        if not response.is_success:
            logger.error(f"❌ OpenRouter returned {response.status_code}")
            raise CritiqueBackendError.from_response(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise CritiqueBackendError(
                f"OpenRouter returned a non-JSON body: {response.text[:200]}",
                status=response.status_code,
                body=response.text,
            ) from e

        return extract_message_text(data)


def extract_message_text(data) -> str:
    """Return ``choices[0].message.content`` as text, or "" when absent"""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""

    if isinstance(content, list):
        # Some providers return content as a list of typed parts
        return "".join(
            part.get("text", "")
            for part in content
            if isinstance(part, dict) and part.get("type") == "text"
        )
    return content if isinstance(content, str) else ""
