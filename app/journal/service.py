from app.analysis.base import BaseMoodAnalyzer
from app.analysis.factory import MoodAnalyzerFactory
from app.analysis.models import AnalysisResult
from app.auth.principal import Principal
from app.config.settings import Settings
from app.database.repositories.journal_entries_repository import JournalEntriesRepository
from app.database.repositories.profiles_repository import ProfilesRepository
from app.journal.confirmation import ContentConfirmation
from app.journal.exceptions import EmptyContentError, EntryNotFoundError
from app.journal.persistence import EntryPersister, SaveResult
from app.journal.resolution import ResolvedEntry, resolve_entry
from app.logging.logger import Log


class JournalService:
    """Entry point for writing and reading journal entries.

    Typed text goes straight to analysis; document text arrives through a
    ContentConfirmation once the user has approved it.
    """

    def __init__(
        self,
        analyzer: BaseMoodAnalyzer,
        persister: EntryPersister,
        entries_repo: JournalEntriesRepository,
    ) -> None:
        self._analyzer = analyzer
        self._persister = persister
        self._entries_repo = entries_repo

    def analyze(self, text: str) -> AnalysisResult:
        """Analyse non-empty journal text.

        Raises:
            EmptyContentError: if the text is blank.
        """
        content = text.strip()
        if not content:
            raise EmptyContentError("Please write something before analyzing")
        result = self._analyzer.analyze(content)
        if result.is_fallback:
            Log.warning("Journal entry analysed with the neutral fallback result")
        return result

    def save(self, principal: Principal, text: str, analysis: AnalysisResult) -> SaveResult:
        return self._persister.save(principal, text.strip(), analysis)

    def submit_text(self, principal: Principal, text: str) -> SaveResult:
        """Analyse then save typed text."""
        analysis = self.analyze(text)
        return self.save(principal, text, analysis)

    def submit_confirmed(
        self, principal: Principal, confirmation: ContentConfirmation
    ) -> SaveResult:
        """Analyse then save the approved text of an uploaded document."""
        text = confirmation.approve()
        Log.info(
            f"Submitting text from document {confirmation.document_id}"
            f"{' (edited)' if confirmation.is_edited else ''}"
        )
        return self.submit_text(principal, text)

    def history(self, principal: Principal, limit: int = 50) -> list[ResolvedEntry]:
        records = self._entries_repo.list_for_owner(principal.id, limit=limit)
        return [resolve_entry(record) for record in records]

    def get_entry(self, principal: Principal, entry_id: str) -> ResolvedEntry:
        """Raises EntryNotFoundError if the entry is not the principal's."""
        record = self._entries_repo.find_by_id(principal.id, entry_id)
        if record is None:
            raise EntryNotFoundError(f"Journal entry {entry_id} not found")
        return resolve_entry(record)


def build_journal_service(settings: Settings) -> JournalService:
    """Build a JournalService with the configured analyzer and repositories."""
    entries_repo = JournalEntriesRepository()
    persister = EntryPersister(entries_repo, ProfilesRepository())
    return JournalService(
        analyzer=MoodAnalyzerFactory.create(settings),
        persister=persister,
        entries_repo=entries_repo,
    )
