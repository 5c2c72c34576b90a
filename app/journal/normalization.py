"""Shapes an AnalysisResult into the payload stored on a journal entry."""

import json
import math
from typing import Any

from app.analysis.models import AnalysisResult

DEFAULT_MOOD_SCORE = 50
SERIALIZATION_ERROR = {"error": "Could not serialize API response"}


def normalize_analysis(analysis: AnalysisResult) -> dict[str, Any]:
    """Coerce the analysis into {mood_score, emotions, themes, summary}."""
    return {
        "mood_score": coerce_mood_score(analysis.mood_score),
        "emotions": label_names(analysis.emotions),
        "themes": label_names(analysis.themes),
        "summary": analysis.summary if isinstance(analysis.summary, str) else "",
    }


def coerce_mood_score(value: Any) -> int | float:
    """Return the score as a number; zero or non-numeric values become 50."""
    if isinstance(value, bool):
        return DEFAULT_MOOD_SCORE
    try:
        score = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_MOOD_SCORE
    if not math.isfinite(score) or score == 0:
        return DEFAULT_MOOD_SCORE
    return int(score) if score.is_integer() else score


def serialize_api_response(raw: Any) -> Any:
    """Round-trip the provider payload through JSON so it can be stored as jsonb."""
    if raw is None:
        return None
    try:
        return json.loads(json.dumps(raw, allow_nan=False))
    except (TypeError, ValueError):
        return dict(SERIALIZATION_ERROR)


def label_names(value: Any) -> list[str]:
    """Keep the non-blank string labels of a list; anything else is dropped."""
    if not isinstance(value, (list, tuple)):
        return []
    return [name for name in value if isinstance(name, str) and name.strip()]
