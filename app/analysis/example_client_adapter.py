"""Example chat client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseChatClient and register the provider in MoodAnalyzerFactory.
"""

import json
from typing import Any, ClassVar

from app.analysis.client_base import BaseChatClient
from app.analysis.models import ChatCompletion


class ExampleClientAdapter(BaseChatClient):
    """Example adapter that returns a fixed valid mood analysis JSON.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, Any]] = {
        "mood_score": 65,
        "emotions": ["Calm", "Content", "Hopeful"],
        "themes": ["Personal growth"],
        "summary": "A steady, reflective entry with a hopeful outlook.",
    }

    def create_chat_completion(self, *, model: str, user_prompt: str) -> ChatCompletion:
        _ = user_prompt
        content = json.dumps(self.DEFAULT_RESPONSE)
        raw = {
            "model": model,
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        }
        return ChatCompletion(content=content, raw=raw)
