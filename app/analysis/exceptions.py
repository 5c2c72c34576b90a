class AnalysisError(Exception):
    """Raised when mood analysis fails."""


class AnalysisValidationError(AnalysisError):
    """Raised when the provider's JSON lacks a required field."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
