from dataclasses import dataclass, field
from typing import Any

EMOTION_VOCABULARY: tuple[str, ...] = (
    "Happy",
    "Excited",
    "Calm",
    "Hopeful",
    "Anxious",
    "Stressed",
    "Grateful",
    "Motivated",
    "Tired",
    "Confused",
    "Angry",
    "Sad",
    "Frustrated",
    "Content",
    "Overwhelmed",
)

THEME_VOCABULARY: tuple[str, ...] = (
    "Work",
    "Relationships",
    "Personal growth",
    "Health",
    "Family",
    "Finances",
    "Education",
    "Creativity",
    "Spirituality",
    "Social life",
)


@dataclass(frozen=True)
class ChatCompletion:
    """Message content of a chat completion plus the full provider payload."""

    content: str
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AnalysisResult:
    """Output of the mood analysis step.

    Values are kept as the provider returned them; coercion happens when the
    result is persisted.
    """

    mood_score: Any
    emotions: list[str]
    themes: list[str]
    summary: str
    api_response: dict[str, Any] | None = None
    is_fallback: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "mood_score": self.mood_score,
            "emotions": list(self.emotions),
            "themes": list(self.themes),
            "summary": self.summary,
        }


def fallback_result() -> AnalysisResult:
    """The fixed neutral result substituted when analysis cannot be obtained."""
    return AnalysisResult(
        mood_score=50,
        emotions=["Neutral", "Calm", "Thoughtful"],
        themes=["Personal reflection", "Daily life"],
        summary=(
            "The mood appears neutral. Unable to perform detailed analysis "
            "due to technical issues."
        ),
        is_fallback=True,
    )
