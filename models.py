from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ScoreCategory(str, Enum):
    """The five fixed critique categories, in display order."""

    PALETTE = "palette"
    TYPOGRAPHY = "typography"
    LAYOUT = "layout"
    ORIGINALITY = "originality"
    OVERALL_VIBE = "overallVibe"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    ScoreCategory.PALETTE: "Palette",
    ScoreCategory.TYPOGRAPHY: "Typography",
    ScoreCategory.LAYOUT: "Layout",
    ScoreCategory.ORIGINALITY: "Originality",
    ScoreCategory.OVERALL_VIBE: "Overall Vibe",
}


def score_tier(score: int) -> str:
    """1-3 = rough, 4-6 = mid, 7-10 = strong"""
    if score <= 3:
        return "rough"
    if score <= 6:
        return "mid"
    return "strong"


# Models
class AnalysisRequest(BaseModel):
    # Left untyped: the analyzer owns validation so error bodies match the contract
    url: Optional[Any] = None


class Scores(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    palette: int = Field(ge=1, le=10)
    typography: int = Field(ge=1, le=10)
    layout: int = Field(ge=1, le=10)
    originality: int = Field(ge=1, le=10)
    overall_vibe: int = Field(ge=1, le=10, alias="overallVibe")


class CategoryRoasts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    palette: str = ""
    typography: str = ""
    layout: str = ""
    originality: str = ""
    overall_vibe: str = Field(default="", alias="overallVibe")


class CritiqueResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    verdict: str = ""
    scores: Scores
    ai_slop_detected: bool = Field(default=False, alias="aiSlopDetected")
    ai_slop_signals: List[str] = Field(
        default_factory=list, max_length=6, alias="aiSlopSignals"
    )
    category_roasts: CategoryRoasts = Field(
        default_factory=CategoryRoasts, alias="categoryRoasts"
    )
    overall_assessment: str = Field(default="", alias="overallAssessment")

    def score_summary(self) -> str:
        """One line per-category summary, e.g. "Palette 6/10 (mid), ..." """
        scores = self.scores.model_dump(by_alias=True)
        return ", ".join(
            f"{category.label} {scores[category.value]}/10 ({score_tier(scores[category.value])})"
            for category in ScoreCategory
        )

    def to_payload(self) -> dict:
        """Serialize with the camelCase keys the frontend reads"""
        return self.model_dump(by_alias=True)


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    screenshot_base64: str = Field(alias="screenshotBase64")
    analysis: CritiqueResult


class ErrorResponse(BaseModel):
    error: str
