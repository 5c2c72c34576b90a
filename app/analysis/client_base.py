from abc import ABC, abstractmethod

from app.analysis.models import ChatCompletion


class BaseChatClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(self, *, model: str, user_prompt: str) -> ChatCompletion:
        """Send a single-turn user prompt and return the reply.

        Raises:
            AnalysisNetworkError: on transport or non-success HTTP failures.
            AnalysisError: when the reply carries no message content.
        """
