import logging

import pytest

from app.logging.logger import Log, _ContextFormatter


def _make_record(message: str, context: dict[str, object] | None = None) -> logging.LogRecord:
    record = logging.LogRecord("moodbuilder", logging.INFO, __file__, 1, message, None, None)
    if context is not None:
        record.context = context
    return record


class TestContextFormatter:
    def test_appends_context_pairs(self) -> None:
        formatter = _ContextFormatter("%(message)s")
        record = _make_record("Saved entry", {"entry_id": "e1", "mood_score": 72})
        assert formatter.format(record) == "Saved entry | entry_id=e1 mood_score=72"

    def test_plain_message_without_context(self) -> None:
        formatter = _ContextFormatter("%(message)s")
        assert formatter.format(_make_record("Started", {})) == "Started"
        assert formatter.format(_make_record("Started")) == "Started"


class TestLog:
    def test_context_is_passed_to_record(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="moodbuilder"):
            Log.info("Stored blob", filename="day.pdf")
        record = caplog.records[-1]
        assert record.getMessage() == "Stored blob"
        assert record.context == {"filename": "day.pdf"}  # type: ignore[attr-defined]

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="moodbuilder"):
            Log.debug("d")
            Log.warning("w")
            Log.error("e")
        assert [r.levelname for r in caplog.records[-3:]] == ["DEBUG", "WARNING", "ERROR"]
