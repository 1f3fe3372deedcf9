"""
Defensive conversion of model output into a CritiqueResult.

The model is asked for pure JSON but nothing guarantees shape or range,
so every field is coerced here and never trusted as-is.
"""

import logging
import math
from typing import Any, Mapping

from models import CategoryRoasts, CritiqueResult, ScoreCategory, Scores
from utils.parsing.json import extract_json_object, repair_and_parse_json

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 10
MAX_SLOP_SIGNALS = 6

# Field names on the pydantic models, keyed by category
_FIELD_NAMES = {
    ScoreCategory.PALETTE: "palette",
    ScoreCategory.TYPOGRAPHY: "typography",
    ScoreCategory.LAYOUT: "layout",
    ScoreCategory.ORIGINALITY: "originality",
    ScoreCategory.OVERALL_VIBE: "overall_vibe",
}


def clamp_score(value: Any) -> int:
    """
    Coerce a model-provided score into an integer in [1, 10].

    Only real numbers count; strings, booleans, None, NaN and infinities
    fall back to 1. Halves round up (7.5 -> 8, -0.5 -> 0 -> clamped to 1).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return MIN_SCORE
    if isinstance(value, float):
        if not math.isfinite(value):
            return MIN_SCORE
        value = math.floor(value + 0.5)
    return min(MAX_SCORE, max(MIN_SCORE, int(value)))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _sanitize_signals(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [_as_text(signal) for signal in value[:MAX_SLOP_SIGNALS]]


def _sanitize_roasts(value: Any) -> CategoryRoasts:
    if not isinstance(value, Mapping):
        return CategoryRoasts()
    return CategoryRoasts(
        **{
            _FIELD_NAMES[category]: _as_text(value.get(category.value))
            for category in ScoreCategory
        }
    )


def sanitize_result(raw: Mapping) -> CritiqueResult:
    """
    Build a CritiqueResult from a parsed (but untrusted) model object.

    Idempotent: feeding ``sanitize_result(x).to_payload()`` back in yields
    the same result.
    """
    scores = raw.get("scores")
    if not isinstance(scores, Mapping):
        scores = {}

    return CritiqueResult(
        verdict=_as_text(raw.get("verdict")),
        scores=Scores(
            **{
                _FIELD_NAMES[category]: clamp_score(scores.get(category.value))
                for category in ScoreCategory
            }
        ),
        ai_slop_detected=bool(raw.get("aiSlopDetected")),
        ai_slop_signals=_sanitize_signals(raw.get("aiSlopSignals")),
        category_roasts=_sanitize_roasts(raw.get("categoryRoasts")),
        overall_assessment=_as_text(raw.get("overallAssessment")),
    )


def parse_critique(response_text: str) -> CritiqueResult:
    """
    Turn raw model text into a sanitized CritiqueResult.

    Raises:
        MalformedCritique: No JSON object in the text, or it cannot be parsed
    """
    json_text = extract_json_object(response_text)
    raw = repair_and_parse_json(json_text)
    result = sanitize_result(raw)
    logger.debug(f"🧼 Sanitized critique scores: {result.scores.model_dump(by_alias=True)}")
    return result
