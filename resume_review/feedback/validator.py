"""Validates parsed feedback JSON and builds the Feedback value."""

from typing import Any

from resume_review.feedback.exceptions import FeedbackFormatError
from resume_review.feedback.models import CATEGORY_KEYS, TIP_TYPES, Category, Feedback, Tip

_MIN_SCORE = 0.0
_MAX_SCORE = 100.0
_MAX_TIPS = 50


def validate_and_build(data: dict[str, Any]) -> Feedback:
    """Validate raw parsed JSON and build a Feedback.

    Raises:
        FeedbackFormatError: on any validation failure.
    """
    _require_top_level_fields(data)
    overall = _build_score(data["overallScore"], "overallScore")
    categories = {
        attr: _build_category(data[key], key) for attr, key in CATEGORY_KEYS.items()
    }
    return Feedback(overall_score=overall, **categories)


def _require_top_level_fields(data: dict[str, Any]) -> None:
    for field in ("overallScore", *CATEGORY_KEYS.values()):
        if field not in data:
            raise FeedbackFormatError(f"Missing required top-level field: {field}")


def _build_score(raw: Any, where: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise FeedbackFormatError(f"'{where}' must be a number")
    if not _MIN_SCORE <= raw <= _MAX_SCORE:
        raise FeedbackFormatError(
            f"'{where}' must be between {_MIN_SCORE:g} and {_MAX_SCORE:g}, got {raw}"
        )
    return float(raw)


def _build_category(raw: Any, key: str) -> Category:
    if not isinstance(raw, dict):
        raise FeedbackFormatError(f"'{key}' must be an object")
    score = _build_score(raw.get("score"), f"{key}.score")
    tips_raw = raw.get("tips", [])
    if not isinstance(tips_raw, list):
        raise FeedbackFormatError(f"'{key}.tips' must be a list")
    if len(tips_raw) > _MAX_TIPS:
        raise FeedbackFormatError(f"Too many tips in '{key}': {len(tips_raw)} (max {_MAX_TIPS})")
    tips = [_build_tip(item, key, i) for i, item in enumerate(tips_raw)]
    return Category(score=score, tips=tips)


def _build_tip(raw: Any, key: str, index: int) -> Tip:
    if not isinstance(raw, dict):
        raise FeedbackFormatError(f"Tip {index} in '{key}' must be an object")
    tip_type = raw.get("type")
    if tip_type not in TIP_TYPES:
        raise FeedbackFormatError(
            f"Tip {index} in '{key}': 'type' must be one of {list(TIP_TYPES)}, got {tip_type!r}"
        )
    text = raw.get("tip")
    if not text or not isinstance(text, str):
        raise FeedbackFormatError(f"Tip {index} in '{key}': 'tip' must be a non-empty string")
    explanation = raw.get("explanation", "")
    if not isinstance(explanation, str):
        raise FeedbackFormatError(f"Tip {index} in '{key}': 'explanation' must be a string")
    return Tip(type=tip_type, tip=text, explanation=explanation)
