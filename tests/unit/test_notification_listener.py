from unittest.mock import MagicMock, patch

import pytest

from app.database.notifications import DocumentNotificationListener


def _notify(payload: str) -> MagicMock:
    notify = MagicMock()
    notify.payload = payload
    return notify


class TestDocumentNotificationListener:
    def test_open_connects_in_autocommit_and_listens(self) -> None:
        conn = MagicMock()
        with patch("app.database.notifications.psycopg.connect", return_value=conn) as connect:
            listener = DocumentNotificationListener("dbname=test")
            listener.open()
        connect.assert_called_once_with("dbname=test", autocommit=True)
        conn.execute.assert_called_once()

    def test_poll_returns_decoded_payloads(self) -> None:
        conn = MagicMock()
        conn.notifies.return_value = [_notify('{"id": "doc-1", "status": "completed"}')]
        with patch("app.database.notifications.psycopg.connect", return_value=conn):
            listener = DocumentNotificationListener("dbname=test")
            listener.open()
            payloads = listener.poll(1.5)
        assert payloads == [{"id": "doc-1", "status": "completed"}]
        conn.notifies.assert_called_once_with(timeout=1.5, stop_after=1)

    def test_poll_skips_malformed_payloads(self) -> None:
        conn = MagicMock()
        conn.notifies.return_value = [_notify("not json"), _notify('"just a string"')]
        with patch("app.database.notifications.psycopg.connect", return_value=conn):
            listener = DocumentNotificationListener("dbname=test")
            listener.open()
            assert listener.poll(0.1) == []

    def test_poll_before_open_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not open"):
            DocumentNotificationListener("dbname=test").poll(0.1)

    def test_context_manager_closes_connection(self) -> None:
        conn = MagicMock()
        with patch("app.database.notifications.psycopg.connect", return_value=conn):
            with DocumentNotificationListener("dbname=test"):
                pass
        conn.close.assert_called_once()
