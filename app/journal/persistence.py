from dataclasses import dataclass

import psycopg

from app.analysis.models import AnalysisResult
from app.auth.principal import Principal
from app.database.models import JournalEntryRecord
from app.database.repositories.journal_entries_repository import (
    JournalEntriesRepository,
    LabelKind,
)
from app.database.repositories.profiles_repository import ProfilesRepository
from app.journal.normalization import normalize_analysis, serialize_api_response
from app.logging.logger import Log


@dataclass(frozen=True)
class SaveResult:
    """Outcome of saving a journal entry, returned instead of raising."""

    success: bool
    entry: JournalEntryRecord | None = None
    error: str | None = None


class EntryPersister:
    """Stores an analysed journal entry and links its emotions and themes.

    Only the entry insert is fatal. Owner provisioning is best-effort and each
    label is looked up, created and linked on its own; a failing label is
    logged and skipped so the entry is kept with fewer tags.
    """

    def __init__(
        self,
        entries_repo: JournalEntriesRepository,
        profiles_repo: ProfilesRepository,
    ) -> None:
        self._entries_repo = entries_repo
        self._profiles_repo = profiles_repo

    def save(self, principal: Principal, content: str, analysis: AnalysisResult) -> SaveResult:
        normalized = normalize_analysis(analysis)
        Log.info(f"Saving journal entry for user {principal.id}", mood_score=normalized["mood_score"])

        self._ensure_profile(principal)

        try:
            entry = self._entries_repo.insert_entry(
                owner_id=principal.id,
                content=content,
                mood_score=normalized["mood_score"],
                analysis_data={
                    "analysis": normalized,
                    "api_response": serialize_api_response(analysis.api_response),
                },
            )
        except psycopg.Error as exc:
            Log.error(f"Error inserting journal entry: {exc}")
            return SaveResult(success=False, error=str(exc))
        Log.info(f"Journal entry {entry.id} saved")

        entry.emotions = self._link_labels(LabelKind.EMOTION, entry.id, normalized["emotions"])
        entry.themes = self._link_labels(LabelKind.THEME, entry.id, normalized["themes"])
        return SaveResult(success=True, entry=entry)

    def _ensure_profile(self, principal: Principal) -> None:
        try:
            if self._profiles_repo.exists(principal.id):
                return
            Log.info(f"Profile {principal.id} not found, creating it")
            self._profiles_repo.create(principal)
        except psycopg.Error as exc:
            Log.warning(f"Could not ensure profile {principal.id}, continuing: {exc}")

    def _link_labels(self, kind: LabelKind, entry_id: str, names: list[str]) -> list[str]:
        linked: list[str] = []
        for name in names:
            if self._link_label(kind, entry_id, name):
                linked.append(name)
        return linked

    def _link_label(self, kind: LabelKind, entry_id: str, name: str) -> bool:
        label = kind.name.lower()
        try:
            label_id = self._entries_repo.find_label_id(kind, name)
            if label_id is None:
                label_id = self._entries_repo.create_label(kind, name)
                Log.debug(f"Created {label} '{name}' with id {label_id}")
            self._entries_repo.link_label(kind, entry_id, label_id)
        except psycopg.Error as exc:
            Log.error(f"Error linking {label} '{name}' to entry {entry_id}: {exc}")
            return False
        return True
