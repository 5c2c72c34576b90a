"""AI-powered journal mood analyzer."""

import json
import re
from pathlib import Path
from typing import Any

from app.analysis.base import BaseMoodAnalyzer
from app.analysis.client_base import BaseChatClient
from app.analysis.exceptions import AnalysisError, AnalysisNetworkError
from app.analysis.models import (
    EMOTION_VOCABULARY,
    THEME_VOCABULARY,
    AnalysisResult,
    ChatCompletion,
    fallback_result,
)
from app.analysis.prompt_loader import load_prompt_template
from app.analysis.validator import validate_and_build
from app.logging.logger import Log
from app.retry import RetryPolicy

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class MoodAnalyzer(BaseMoodAnalyzer):
    """Scores journal text with a chat model, falling back to a neutral result.

    The fallback keeps the journaling flow unblocked: network, parse and
    validation failures are logged and replaced, never raised.
    """

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        retry_policy: RetryPolicy | None = None,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._retry_policy = retry_policy or RetryPolicy()
        self._prompt_template = load_prompt_template(prompt_template_path)

    def analyze(self, text: str) -> AnalysisResult:
        try:
            return self._analyze(text)
        except Exception as exc:
            Log.warning(f"Mood analysis failed, using neutral fallback: {exc}")
            return fallback_result()

    def _analyze(self, text: str) -> AnalysisResult:
        prompt = self._build_prompt(text)
        Log.debug(f"Mood analysis prompt:\n{prompt}")

        completion = self._call_ai(prompt)
        Log.debug(f"AI raw response:\n{completion.content}")

        parsed = self._parse_json(completion.content)
        result = validate_and_build(parsed, api_response=completion.raw)

        Log.info(
            f"Mood analysis complete: score {result.mood_score}, "
            f"{len(result.emotions)} emotions, {len(result.themes)} themes"
        )
        return result

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            emotions=", ".join(EMOTION_VOCABULARY),
            themes=", ".join(THEME_VOCABULARY),
            journal_text=text,
        )

    def _call_ai(self, prompt: str) -> ChatCompletion:
        return self._retry_policy.call(
            lambda: self._client.create_chat_completion(model=self._model, user_prompt=prompt),
            retry_on=(AnalysisNetworkError,),
            description="Mood analysis request",
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        try:
            parsed = json.loads(raw.strip())
        except json.JSONDecodeError:
            Log.debug("Direct JSON parse failed, extracting embedded object")
            match = _JSON_OBJECT_RE.search(raw)
            if match is None:
                raise AnalysisError("Failed to parse JSON response") from None
            try:
                parsed = json.loads(match.group(0))
            except json.JSONDecodeError as exc:
                raise AnalysisError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise AnalysisError("JSON response must be an object")
        return parsed
