import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from analyzer.errors import RequestTooLarge, VibeCheckError
from analyzer.pipeline import VibeCheckAnalyzer
from config import Settings, get_settings
from models import AnalysisRequest, ErrorResponse

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api")


def get_analyzer(settings: Settings = Depends(get_settings)) -> VibeCheckAnalyzer:
    """One analyzer per request; overridden in tests to inject fakes"""
    return VibeCheckAnalyzer(settings)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def read_limited_body(request: Request, limit: int) -> bytes:
    """
    Read the request body, refusing anything over limit bytes.

    A declared Content-Length over the limit is rejected before any of the
    body is read; otherwise the stream is counted as it arrives.

    Raises:
        RequestTooLarge: Declared or received size exceeds limit
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise RequestTooLarge()

    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise RequestTooLarge()
        chunks.append(chunk)
    return b"".join(chunks)


def parse_analysis_request(body: bytes) -> AnalysisRequest:
    """Anything that is not a JSON object is treated as a request without url"""
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        return AnalysisRequest()
    return AnalysisRequest(url=payload.get("url"))


@router.get("/health")
async def health_check():
    return {"ok": True}


@router.post("/analyze")
async def analyze_website(
    request: Request,
    analyzer: VibeCheckAnalyzer = Depends(get_analyzer),
    settings: Settings = Depends(get_settings),
):
    """
    Screenshots the submitted URL and returns an aesthetic critique.

    Body: {"url": "example.com"}

    Errors come back as {"error": "..."}:
    - 400 for a missing or unparseable url
    - 413 for oversized bodies
    - 500 for missing credentials, navigation, critique or parsing failures
    """
    try:
        body = await read_limited_body(request, settings.MAX_BODY_BYTES)
    except RequestTooLarge as e:
        logger.warning(f"⚠️  Rejected oversized request body (limit {settings.MAX_BODY_BYTES} bytes)")
        return error_response(e.status_code, e.message)

    analysis_request = parse_analysis_request(body)

    try:
        result = await analyzer.analyze(analysis_request.url)
    except VibeCheckError as e:
        logger.error(f"ERROR: {type(e).__name__} for {analysis_request.url}: {e.message}")
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"ERROR: Unexpected failure for {analysis_request.url}")
        return error_response(500, str(e) or "Unexpected error")

    return result.model_dump(by_alias=True)
