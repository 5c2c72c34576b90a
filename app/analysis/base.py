from abc import ABC, abstractmethod

from app.analysis.models import AnalysisResult


class BaseMoodAnalyzer(ABC):
    """Contract for all mood analysis adapters."""

    @abstractmethod
    def analyze(self, text: str) -> AnalysisResult:
        """Score the mood of a journal entry.

        Args:
            text: Journal text, typed or confirmed from an uploaded document.

        Returns:
            A complete AnalysisResult. Implementations never raise; they
            substitute the neutral fallback result on any failure.
        """
