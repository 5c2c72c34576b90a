"""Tests for mood analysis prompt loading."""

from pathlib import Path

import pytest

from app.analysis.exceptions import AnalysisError
from app.analysis.prompt_loader import load_prompt_template


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        assert "{journal_text}" in template
        assert "{emotions}" in template
        assert "{themes}" in template

    def test_default_template_formats_cleanly(self) -> None:
        prompt = load_prompt_template().format(
            emotions="Happy", themes="Work", journal_text="entry body"
        )
        assert "entry body" in prompt
        assert '"mood_score"' in prompt

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Hello {journal_text}")
        result = load_prompt_template(custom)
        assert result == "Hello {journal_text}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(AnalysisError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))
