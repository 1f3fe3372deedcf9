"""
Centralized configuration for Vibe Check
All environment variables and settings are defined here
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Passed explicitly into the analyzer so tests can inject their own.
    """

    # ======================
    # OpenRouter Configuration
    # ======================
    OPENROUTER_API_KEY: str = Field(default="", description="OpenRouter API key")
    OPENROUTER_BASE_URL: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenRouter API base URL"
    )
    OPENROUTER_MODEL: str = Field(
        default="google/gemini-3-flash-preview",
        description="Vision model used for the critique"
    )
    MAX_TOKENS: int = Field(default=1600, description="Max tokens for the model response")
    APP_REFERER: str = Field(
        default="https://vibe-check.spaceynyc.dev",
        description="HTTP-Referer header sent to OpenRouter"
    )
    APP_TITLE: str = Field(default="Vibe Check", description="X-Title header sent to OpenRouter")
    CRITIQUE_TIMEOUT: Optional[float] = Field(
        default=None,
        description="Timeout in seconds for the critique call (unset = wait indefinitely)"
    )
    CRITIQUE_MAX_IMAGE_DIMENSION: int = Field(
        default=0,
        description="Downscale the image sent to the model past this size (0 = send as captured)"
    )

    # ======================
    # Screenshot Configuration
    # ======================
    VIEWPORT_WIDTH: int = Field(default=1600, description="Browser viewport width")
    VIEWPORT_HEIGHT: int = Field(default=1000, description="Browser viewport height")
    DEVICE_SCALE_FACTOR: float = Field(default=1.5, description="Device pixel ratio")
    NAVIGATION_TIMEOUT_MS: int = Field(
        default=30000,
        description="Hard timeout for page navigation in milliseconds"
    )
    SETTLE_DELAY_MS: int = Field(
        default=600,
        description="Wait after navigation for late paints"
    )
    SCROLL_STEP_PX: int = Field(default=800, description="Scroll sweep step size")
    SCROLL_PAUSE_MS: int = Field(
        default=200,
        description="Pause after each scroll step for lazy content"
    )
    FINAL_SETTLE_MS: int = Field(
        default=800,
        description="Wait after scrolling back to the top before capture"
    )

    # ======================
    # Server Configuration
    # ======================
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=3342, description="Bind port")
    MAX_BODY_BYTES: int = Field(
        default=1_048_576,  # 1 MB
        description="Maximum accepted request body size"
    )

    # ======================
    # Logging Configuration
    # ======================
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    @property
    def has_api_key(self) -> bool:
        """True when a non-blank OpenRouter key is configured"""
        return bool(self.OPENROUTER_API_KEY.strip())

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars in .env file


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance (FastAPI dependency)"""
    return Settings()
