from app.analysis.analyzer import MoodAnalyzer
from app.analysis.base import BaseMoodAnalyzer
from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.openai_client_adapter import OpenAIClientAdapter
from app.config.settings import Settings
from app.retry import RetryPolicy


class MoodAnalyzerFactory:
    """Creates the configured mood analyzer."""

    PROVIDERS = ("example", "upstage")

    @classmethod
    def create(cls, settings: Settings) -> BaseMoodAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return MoodAnalyzer(client=ExampleClientAdapter(), model="example")
        if provider == "upstage":
            if not settings.upstage_api_key:
                raise ValueError(
                    "upstage_api_key is required for analysis_provider=upstage"
                )
            client = OpenAIClientAdapter(
                api_key=settings.upstage_api_key,
                timeout_seconds=settings.provider_timeout_seconds,
                base_url=settings.upstage_base_url,
            )
            return MoodAnalyzer(
                client=client,
                model=settings.analysis_model_name,
                retry_policy=RetryPolicy.from_settings(settings),
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
