import json
import math

import pytest

from analyzer.errors import MalformedCritique
from analyzer.sanitizer import clamp_score, parse_critique, sanitize_result
from models import ScoreCategory, score_tier

from conftest import VALID_CRITIQUE


@pytest.mark.parametrize(
    "value, expected",
    [
        (math.nan, 1),
        (0, 1),
        (11, 10),
        (7.6, 8),
        (7.5, 8),
        (7.4, 7),
        (-3, 1),
        (10, 10),
        (1, 1),
        (math.inf, 1),
        (-math.inf, 1),
        (None, 1),
        ("bad", 1),
        ("7", 1),
        (True, 1),
        (10**400, 10),
    ],
)
def test_clamp_score(value, expected):
    result = clamp_score(value)
    assert result == expected
    assert isinstance(result, int)


def test_clamp_score_always_in_range():
    for value in [x / 4 for x in range(-80, 80)]:
        assert 1 <= clamp_score(value) <= 10


def test_sanitize_passes_valid_critique_through():
    result = sanitize_result(VALID_CRITIQUE)

    assert result.verdict == VALID_CRITIQUE["verdict"]
    assert result.scores.typography == 8
    assert result.scores.overall_vibe == 6
    assert result.ai_slop_detected is True
    assert result.ai_slop_signals == VALID_CRITIQUE["aiSlopSignals"]
    assert result.category_roasts.overall_vibe == "Fine. Just fine."
    assert result.overall_assessment == VALID_CRITIQUE["overallAssessment"]


def test_sanitize_out_of_range_and_garbage_scores():
    raw = dict(VALID_CRITIQUE, scores={"palette": 99, "typography": "bad"})
    scores = sanitize_result(raw).scores

    assert scores.palette == 10
    assert scores.typography == 1
    assert scores.layout == 1
    assert scores.originality == 1
    assert scores.overall_vibe == 1


def test_sanitize_truncates_slop_signals():
    raw = dict(VALID_CRITIQUE, aiSlopSignals=[f"signal {i}" for i in range(20)])
    signals = sanitize_result(raw).ai_slop_signals

    assert len(signals) == 6
    assert signals[0] == "signal 0"
    assert signals[-1] == "signal 5"


@pytest.mark.parametrize("value", [None, "gradient", {"a": 1}, 3])
def test_sanitize_non_list_signals_become_empty(value):
    raw = dict(VALID_CRITIQUE, aiSlopSignals=value)
    assert sanitize_result(raw).ai_slop_signals == []


def test_sanitize_empty_object_uses_defaults():
    result = sanitize_result({})

    assert result.verdict == ""
    assert all(
        getattr(result.scores, name) == 1
        for name in ("palette", "typography", "layout", "originality", "overall_vibe")
    )
    assert result.ai_slop_detected is False
    assert result.ai_slop_signals == []
    assert result.category_roasts.palette == ""


def test_sanitize_truthy_slop_flag():
    assert sanitize_result({"aiSlopDetected": 1}).ai_slop_detected is True
    assert sanitize_result({"aiSlopDetected": "yes"}).ai_slop_detected is True
    assert sanitize_result({"aiSlopDetected": 0}).ai_slop_detected is False


def test_sanitize_is_idempotent():
    raw = dict(
        VALID_CRITIQUE,
        scores={"palette": 99, "typography": "bad", "layout": 4.5},
        aiSlopSignals=list("abcdefghij"),
    )
    once = sanitize_result(raw)
    twice = sanitize_result(once.to_payload())

    assert once == twice
    assert once.to_payload() == twice.to_payload()


def test_payload_uses_camel_case_keys():
    payload = sanitize_result(VALID_CRITIQUE).to_payload()

    assert set(payload) == {
        "verdict",
        "scores",
        "aiSlopDetected",
        "aiSlopSignals",
        "categoryRoasts",
        "overallAssessment",
    }
    assert list(payload["scores"]) == [c.value for c in ScoreCategory]
    assert list(payload["categoryRoasts"]) == [c.value for c in ScoreCategory]


def test_parse_critique_strips_commentary(valid_critique_text):
    result = parse_critique(valid_critique_text)
    assert result.scores.palette == 6


def test_parse_critique_without_json():
    with pytest.raises(MalformedCritique) as exc_info:
        parse_critique("I'm sorry, I can't look at images today.")
    assert exc_info.value.message == "Model did not return JSON"


def test_parse_critique_with_broken_json():
    with pytest.raises(MalformedCritique):
        parse_critique("{ this is not json at all }")


def test_parse_critique_repairs_trailing_comma():
    text = json.dumps(VALID_CRITIQUE)[:-1] + ",}"
    assert parse_critique(text).verdict == VALID_CRITIQUE["verdict"]


@pytest.mark.parametrize("score, tier", [(1, "rough"), (3, "rough"), (4, "mid"), (6, "mid"), (7, "strong"), (10, "strong")])
def test_score_tier(score, tier):
    assert score_tier(score) == tier


def test_category_labels():
    assert ScoreCategory.OVERALL_VIBE.label == "Overall Vibe"
    assert [c.value for c in ScoreCategory] == [
        "palette",
        "typography",
        "layout",
        "originality",
        "overallVibe",
    ]


def test_score_summary_uses_labels_and_tiers():
    result = sanitize_result(VALID_CRITIQUE)
    assert result.score_summary() == (
        "Palette 6/10 (mid), Typography 8/10 (strong), Layout 5/10 (mid), "
        "Originality 3/10 (rough), Overall Vibe 6/10 (mid)"
    )
