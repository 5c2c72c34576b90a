import json
from types import TracebackType
from typing import Any

import psycopg
from psycopg import sql

from app.database.repositories.documents_repository import DOCUMENT_CHANNEL
from app.logging.logger import Log


class DocumentNotificationListener:
    """LISTEN on the document status channel over a dedicated connection.

    Pooled connections are never used here: a listening session must stay
    open and in autocommit mode for as long as the subscription lives.
    """

    def __init__(self, conninfo: str, channel: str = DOCUMENT_CHANNEL) -> None:
        self._conninfo = conninfo
        self._channel = channel
        self._conn: psycopg.Connection[Any] | None = None

    def open(self) -> None:
        if self._conn is not None:
            return
        self._conn = psycopg.connect(self._conninfo, autocommit=True)
        self._conn.execute(sql.SQL("LISTEN {}").format(sql.Identifier(self._channel)))
        Log.debug(f"Listening on channel {self._channel}")

    def poll(self, timeout: float) -> list[dict[str, Any]]:
        """Wait up to `timeout` seconds for the next notification.

        Returns the decoded payloads received (possibly empty).
        """
        if self._conn is None:
            raise RuntimeError("Listener is not open. Call open() first.")
        payloads: list[dict[str, Any]] = []
        for notify in self._conn.notifies(timeout=timeout, stop_after=1):
            try:
                payload = json.loads(notify.payload)
            except json.JSONDecodeError:
                Log.warning(f"Ignoring malformed notification payload: {notify.payload!r}")
                continue
            if isinstance(payload, dict):
                payloads.append(payload)
        return payloads

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            Log.debug(f"Stopped listening on channel {self._channel}")

    def __enter__(self) -> "DocumentNotificationListener":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
