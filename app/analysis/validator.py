"""Checks the provider's parsed JSON for the four required analysis fields."""

from typing import Any

from app.analysis.exceptions import AnalysisValidationError
from app.analysis.models import AnalysisResult

REQUIRED_FIELDS = ("mood_score", "emotions", "themes", "summary")


def validate_and_build(
    data: dict[str, Any],
    api_response: dict[str, Any] | None = None,
) -> AnalysisResult:
    """Build an AnalysisResult from parsed provider JSON.

    Every required field must be present and truthy. Labels are not checked
    against the prompt vocabularies and values are passed through unchanged.

    Raises:
        AnalysisValidationError: if a required field is missing or empty.
    """
    missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
    if missing:
        raise AnalysisValidationError(
            f"Invalid response format, missing: {', '.join(missing)}"
        )
    return AnalysisResult(
        mood_score=data["mood_score"],
        emotions=data["emotions"],
        themes=data["themes"],
        summary=data["summary"],
        api_response=api_response,
    )
