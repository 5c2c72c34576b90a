import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from app.auth.principal import Principal
from app.config.settings import Settings
from app.database.connection import (
    apply_schema,
    build_conninfo,
    close_pool,
    get_connection,
    init_pool,
)


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "moodbuilder_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        psycopg.connect(build_conninfo(test_settings), connect_timeout=3).close()
    except psycopg.Error as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* or DATABASE_URL to point at a scratch database"
        )
    init_pool(test_settings)
    try:
        apply_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def principal(integration_pool: None) -> Generator[Principal, None, None]:
    """A fresh owner whose rows are removed after the test."""
    owner = Principal(id=str(uuid.uuid4()), email="it@example.com", name="Integration")
    yield owner
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM journal_entries WHERE user_id = %s", (owner.id,))
            cur.execute("DELETE FROM journal_documents WHERE user_id = %s", (owner.id,))
            cur.execute("DELETE FROM profiles WHERE id = %s", (owner.id,))
        conn.commit()


@pytest.fixture
def label_names() -> tuple[str, str]:
    """Unique emotion and theme names so runs never collide on the vocabularies."""
    suffix = uuid.uuid4().hex[:8]
    return f"Excited-{suffix}", f"Creativity-{suffix}"
