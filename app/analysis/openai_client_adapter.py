import httpx
import openai

from app.analysis.client_base import BaseChatClient
from app.analysis.exceptions import AnalysisError, AnalysisNetworkError
from app.analysis.models import ChatCompletion


class OpenAIClientAdapter(BaseChatClient):
    """Chat client built on the OpenAI-compatible API (Upstage Solar serves it)."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        # Retries are owned by RetryPolicy in MoodAnalyzer.
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(self, *, model: str, user_prompt: str) -> ChatCompletion:
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": user_prompt}],
                stream=False,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AnalysisError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise AnalysisError("AI returned empty response")
        return ChatCompletion(content=content, raw=response.model_dump(mode="json"))
