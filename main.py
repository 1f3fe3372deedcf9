"""
Vibe Check Service - Main Application

A FastAPI backend that captures full-page website screenshots using
Playwright and asks a vision model (via OpenRouter) for an aesthetic
critique: scores, category roasts, an AI slop check and a verdict.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from config import get_settings
from routes import router

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging(get_settings().LOG_LEVEL)

    # Initialize FastAPI app
    app = FastAPI(title="Vibe Check API")

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include all routes from routes.py
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"🚀 Vibe Check API running on http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, timeout_keep_alive=60)
