from app.analysis.analyzer import MoodAnalyzer
from app.analysis.base import BaseMoodAnalyzer
from app.analysis.factory import MoodAnalyzerFactory

__all__ = ["BaseMoodAnalyzer", "MoodAnalyzer", "MoodAnalyzerFactory"]
