import itertools
from unittest.mock import MagicMock, patch

import pytest

from app.database.models import DocumentRecord
from app.database.notifications import DocumentNotificationListener
from app.database.repositories.documents_repository import DocumentsRepository
from app.watcher.exceptions import WatchTimeoutError
from app.watcher.status_watcher import StatusWatcher


def _make_record(status: str, parsed_content: str | None = None) -> DocumentRecord:
    return DocumentRecord(
        id="doc-1",
        owner_id="user-1",
        file_name="day.pdf",
        file_type="application/pdf",
        file_size=10,
        file_path="user-1/x-day.pdf",
        public_url="http://files.test/user-1/x-day.pdf",
        status=status,
        parsed_content=parsed_content,
    )


def _make_watcher(
    records: list[DocumentRecord],
    payloads: list[list[dict[str, object]]] | None = None,
    poll_interval_seconds: float = 100.0,
    timeout_seconds: float | None = None,
) -> tuple[StatusWatcher, MagicMock, MagicMock, MagicMock, MagicMock]:
    doc_repo = MagicMock(spec=DocumentsRepository)
    listener = MagicMock(spec=DocumentNotificationListener)
    on_complete = MagicMock()
    on_failed = MagicMock()

    doc_repo.find_by_id.side_effect = records
    if payloads is None:
        listener.poll.return_value = []
    else:
        listener.poll.side_effect = payloads

    watcher = StatusWatcher(
        "doc-1",
        doc_repo=doc_repo,
        listener=listener,
        on_complete=on_complete,
        on_failed=on_failed,
        poll_interval_seconds=poll_interval_seconds,
        timeout_seconds=timeout_seconds,
    )
    return watcher, doc_repo, listener, on_complete, on_failed


class TestStatusWatcherCompletion:
    def test_already_completed_fires_from_initial_read(self) -> None:
        watcher, _, listener, on_complete, _ = _make_watcher(
            [_make_record("completed", "Today was great")]
        )
        with watcher:
            assert watcher.wait() == "completed"
        on_complete.assert_called_once_with("Today was great")
        listener.poll.assert_not_called()

    def test_notification_triggers_reread(self) -> None:
        watcher, doc_repo, _, on_complete, _ = _make_watcher(
            [_make_record("processing"), _make_record("completed", "done")],
            payloads=[[{"id": "doc-1", "status": "completed"}]],
        )
        with watcher:
            watcher.wait()
        assert doc_repo.find_by_id.call_count == 2
        on_complete.assert_called_once_with("done")

    def test_notification_for_other_document_is_ignored(self) -> None:
        watcher, doc_repo, _, on_complete, _ = _make_watcher(
            [_make_record("processing"), _make_record("completed", "done")],
            payloads=[[{"id": "doc-2", "status": "completed"}], [{"id": "doc-1"}]],
        )
        with watcher:
            watcher.wait()
        assert doc_repo.find_by_id.call_count == 2
        on_complete.assert_called_once()

    def test_periodic_reread_without_notification(self) -> None:
        watcher, doc_repo, _, on_complete, _ = _make_watcher(
            [
                _make_record("processing"),
                _make_record("processing"),
                _make_record("completed", "polled"),
            ],
            poll_interval_seconds=0.0,
        )
        with watcher:
            watcher.wait()
        assert doc_repo.find_by_id.call_count == 3
        on_complete.assert_called_once_with("polled")

    def test_notification_and_poll_both_seeing_completion_fire_once(self) -> None:
        watcher, _, _, on_complete, _ = _make_watcher(
            [_make_record("processing"), _make_record("completed", "x")],
            payloads=[[{"id": "doc-1"}, {"id": "doc-1"}]],
            poll_interval_seconds=0.0,
        )
        with watcher:
            watcher.wait()
            watcher.wait()
        on_complete.assert_called_once_with("x")


class TestStatusWatcherFailure:
    def test_failed_document_reports_failure_only(self) -> None:
        watcher, _, _, on_complete, on_failed = _make_watcher(
            [_make_record("processing"), _make_record("failed")],
            payloads=[[{"id": "doc-1", "status": "failed"}]],
        )
        with watcher:
            assert watcher.wait() == "failed"
        on_complete.assert_not_called()
        on_failed.assert_called_once()

    def test_timeout_raises_and_releases_listener(self) -> None:
        watcher, _, listener, on_complete, _ = _make_watcher(
            [_make_record("processing")], timeout_seconds=2.5
        )
        with patch(
            "app.watcher.status_watcher.time.monotonic",
            side_effect=itertools.count(0.0, 1.0),
        ):
            with pytest.raises(WatchTimeoutError, match="still processing"):
                with watcher:
                    watcher.wait()
        listener.close.assert_called_once()
        on_complete.assert_not_called()


class TestStatusWatcherLifecycle:
    def test_subscribes_before_initial_read(self) -> None:
        order: list[str] = []
        watcher, doc_repo, listener, _, _ = _make_watcher([_make_record("completed", "x")])
        listener.open.side_effect = lambda: order.append("listen")
        doc_repo.find_by_id.side_effect = lambda _id: order.append("read") or _make_record(
            "completed", "x"
        )
        watcher.start()
        assert order == ["listen", "read"]

    def test_failed_initial_read_closes_listener(self) -> None:
        watcher, doc_repo, listener, _, _ = _make_watcher([])
        doc_repo.find_by_id.side_effect = RuntimeError("db down")
        with pytest.raises(RuntimeError):
            watcher.start()
        listener.close.assert_called_once()

    def test_close_releases_listener_once(self) -> None:
        watcher, _, listener, _, _ = _make_watcher([_make_record("completed", "x")])
        with watcher:
            watcher.wait()
        watcher.close()
        listener.close.assert_called_once()
