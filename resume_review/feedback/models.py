from dataclasses import dataclass, field
from typing import Any

TIP_TYPES = ("good", "improve")


@dataclass(frozen=True)
class Tip:
    """A single evaluation remark."""

    type: str
    tip: str
    explanation: str = ""


@dataclass(frozen=True)
class Category:
    """Score and remarks for one evaluated aspect of a résumé."""

    score: float
    tips: list[Tip] = field(default_factory=list)


@dataclass(frozen=True)
class Feedback:
    """Structured evaluation returned by the inference provider."""

    overall_score: float
    ats: Category
    tone_and_style: Category
    content: Category
    structure: Category
    skills: Category


# Python attribute -> key in the stored JSON document.
CATEGORY_KEYS: dict[str, str] = {
    "ats": "ATS",
    "tone_and_style": "toneAndStyle",
    "content": "content",
    "structure": "structure",
    "skills": "skills",
}


def feedback_to_dict(feedback: Feedback) -> dict[str, Any]:
    """Return the camelCase JSON shape used in stored records."""
    payload: dict[str, Any] = {"overallScore": feedback.overall_score}
    for attr, key in CATEGORY_KEYS.items():
        category: Category = getattr(feedback, attr)
        payload[key] = {
            "score": category.score,
            "tips": [_tip_to_dict(tip) for tip in category.tips],
        }
    return payload


def _tip_to_dict(tip: Tip) -> dict[str, str]:
    data = {"type": tip.type, "tip": tip.tip}
    if tip.explanation:
        data["explanation"] = tip.explanation
    return data
