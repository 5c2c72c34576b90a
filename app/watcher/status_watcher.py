import time
from collections.abc import Callable
from types import TracebackType

from app.database.notifications import DocumentNotificationListener
from app.database.repositories.documents_repository import DocumentsRepository
from app.logging.logger import Log
from app.watcher.exceptions import WatchTimeoutError
from app.watcher.state import DocumentStatusTracker


class StatusWatcher:
    """Observes one document until it reaches a terminal status.

    Two sources feed the same tracker: change notifications on the document
    channel and a periodic re-read of the row. The subscription is opened
    before the first read so that no transition can slip between them.

    Use as a context manager so the listening connection is always released:

        with StatusWatcher(doc_id, doc_repo=repo, listener=listener,
                           on_complete=handle_text) as watcher:
            watcher.wait()
    """

    def __init__(
        self,
        document_id: str,
        *,
        doc_repo: DocumentsRepository,
        listener: DocumentNotificationListener,
        on_complete: Callable[[str], None],
        on_failed: Callable[[str], None] | None = None,
        poll_interval_seconds: float = 2.0,
        timeout_seconds: float | None = None,
    ) -> None:
        self._document_id = document_id
        self._doc_repo = doc_repo
        self._listener = listener
        self._tracker = DocumentStatusTracker(on_complete, on_failed)
        self._poll_interval = poll_interval_seconds
        self._timeout = timeout_seconds
        self._last_read = 0.0
        self._started = False

    @property
    def status(self) -> str:
        return self._tracker.status

    def start(self) -> None:
        if self._started:
            return
        self._listener.open()
        self._started = True
        Log.info(f"Watching document {self._document_id}")
        try:
            self._refresh()
        except Exception:
            self.close()
            raise

    def wait(self) -> str:
        """Block until the document is terminal and return its final status.

        Raises:
            WatchTimeoutError: if the timeout elapses first.
        """
        self.start()
        deadline = None if self._timeout is None else time.monotonic() + self._timeout
        while not self._tracker.is_terminal:
            wait_for = self._poll_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise WatchTimeoutError(
                        f"Document {self._document_id} still processing after "
                        f"{self._timeout}s"
                    )
                wait_for = min(wait_for, remaining)

            payloads = self._listener.poll(wait_for)
            if self._concerns_document(payloads) or self._poll_due():
                self._refresh()
        return self._tracker.status

    def close(self) -> None:
        if self._started:
            self._listener.close()
            self._started = False
            Log.debug(f"Stopped watching document {self._document_id}")

    def __enter__(self) -> "StatusWatcher":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _concerns_document(self, payloads: list[dict[str, object]]) -> bool:
        return any(str(p.get("id")) == self._document_id for p in payloads)

    def _poll_due(self) -> bool:
        return time.monotonic() - self._last_read >= self._poll_interval

    def _refresh(self) -> None:
        record = self._doc_repo.find_by_id(self._document_id)
        self._last_read = time.monotonic()
        Log.debug(f"Document {self._document_id} status: {record.status}")
        self._tracker.observe(record)
