from datetime import datetime, timedelta, timezone

import pytest

from app.analysis.models import AnalysisResult
from app.auth.principal import Principal
from app.database.repositories.journal_entries_repository import (
    JournalEntriesRepository,
    LabelKind,
)
from app.database.repositories.profiles_repository import ProfilesRepository
from app.journal.persistence import EntryPersister
from app.journal.resolution import SOURCE_COLUMNS, SOURCE_EMBEDDED, resolve_entry


@pytest.mark.integration
@pytest.mark.usefixtures("integration_pool")
class TestLabels:
    def test_create_label_is_idempotent(self, label_names: tuple[str, str]) -> None:
        repo = JournalEntriesRepository()
        emotion, _ = label_names
        first = repo.create_label(LabelKind.EMOTION, emotion)
        second = repo.create_label(LabelKind.EMOTION, emotion)
        assert first == second
        assert repo.find_label_id(LabelKind.EMOTION, emotion) == first

    def test_lookup_is_case_sensitive(self, label_names: tuple[str, str]) -> None:
        repo = JournalEntriesRepository()
        _, theme = label_names
        repo.create_label(LabelKind.THEME, theme)
        assert repo.find_label_id(LabelKind.THEME, theme.lower()) is None


@pytest.mark.integration
class TestEntryRoundTrip:
    def test_saved_entry_resolves_the_same_from_both_sources(
        self, principal: Principal, label_names: tuple[str, str], db_conn
    ) -> None:
        emotion, theme = label_names
        entries_repo = JournalEntriesRepository()
        persister = EntryPersister(entries_repo, ProfilesRepository())
        analysis = AnalysisResult(
            mood_score=85, emotions=[emotion], themes=[theme], summary="S"
        )
        saved = persister.save(principal, "Painted all afternoon", analysis)
        assert saved.success is True
        assert saved.entry is not None

        record = entries_repo.find_by_id(principal.id, saved.entry.id)
        assert record is not None
        embedded = resolve_entry(record)
        assert embedded.source == SOURCE_EMBEDDED

        with db_conn.cursor() as cur:
            cur.execute(
                "UPDATE journal_entries SET analysis_data = NULL WHERE id = %s",
                (saved.entry.id,),
            )
        db_conn.commit()
        stripped = entries_repo.find_by_id(principal.id, saved.entry.id)
        assert stripped is not None
        from_columns = resolve_entry(stripped)
        assert from_columns.source == SOURCE_COLUMNS

        for resolved in (embedded, from_columns):
            assert resolved.mood_score == 85
            assert resolved.emotions == [emotion]
            assert resolved.themes == [theme]

    def test_profile_is_provisioned(self, principal: Principal) -> None:
        persister = EntryPersister(JournalEntriesRepository(), ProfilesRepository())
        analysis = AnalysisResult(mood_score=60, emotions=[], themes=[], summary="S")
        persister.save(principal, "text", analysis)
        assert ProfilesRepository().exists(principal.id) is True

    def test_entries_are_scoped_to_owner(self, principal: Principal) -> None:
        repo = JournalEntriesRepository()
        entry = repo.insert_entry(
            owner_id=principal.id, content="mine", mood_score=70, analysis_data={}
        )
        other = "00000000-0000-0000-0000-00000000beef"
        assert repo.find_by_id(other, entry.id) is None
        assert repo.find_by_id(principal.id, entry.id) is not None

    def test_list_for_owner_filters_by_since(self, principal: Principal, db_conn) -> None:
        repo = JournalEntriesRepository()
        old = repo.insert_entry(owner_id=principal.id, content="old", mood_score=40, analysis_data={})
        new = repo.insert_entry(owner_id=principal.id, content="new", mood_score=80, analysis_data={})
        with db_conn.cursor() as cur:
            cur.execute(
                "UPDATE journal_entries SET created_at = NOW() - interval '120 days' WHERE id = %s",
                (old.id,),
            )
        db_conn.commit()

        since = datetime.now(timezone.utc) - timedelta(days=90)
        recent = repo.list_for_owner(principal.id, since=since)
        assert [e.id for e in recent] == [new.id]
        assert [e.id for e in repo.list_for_owner(principal.id)] == [new.id, old.id]
        assert len(repo.list_for_owner(principal.id, limit=1)) == 1
