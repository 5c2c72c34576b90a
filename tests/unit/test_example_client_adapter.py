"""Tests for ExampleClientAdapter (offline reference adapter)."""

import json

from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.validator import validate_and_build


class TestExampleClientAdapter:
    def test_returns_valid_analysis_json(self) -> None:
        completion = ExampleClientAdapter().create_chat_completion(model="any", user_prompt="u")
        data = json.loads(completion.content)
        result = validate_and_build(data)
        assert result.mood_score == 65
        assert result.emotions == ["Calm", "Content", "Hopeful"]

    def test_raw_payload_carries_model_and_content(self) -> None:
        completion = ExampleClientAdapter().create_chat_completion(model="m1", user_prompt="u")
        assert completion.raw["model"] == "m1"
        assert completion.raw["choices"][0]["message"]["content"] == completion.content

    def test_ignores_prompt(self) -> None:
        adapter = ExampleClientAdapter()
        r1 = adapter.create_chat_completion(model="a", user_prompt="u1")
        r2 = adapter.create_chat_completion(model="a", user_prompt="u2")
        assert r1 == r2
