import argparse
import mimetypes
import sys
from collections.abc import Sequence
from pathlib import Path

from app.auth.principal import Principal, principal_from_settings
from app.config.settings import Settings
from app.database.connection import apply_schema, build_conninfo, close_pool, init_pool
from app.database.models import STATUS_COMPLETED
from app.database.notifications import DocumentNotificationListener
from app.database.repositories.documents_repository import DocumentsRepository
from app.database.repositories.journal_entries_repository import JournalEntriesRepository
from app.ingestion.ingestor import build_ingestor
from app.ingestion.models import UploadRequest
from app.journal.confirmation import ContentConfirmation
from app.journal.exceptions import JournalError
from app.journal.persistence import SaveResult
from app.journal.resolution import ResolvedEntry
from app.journal.service import build_journal_service
from app.logging.logger import Log
from app.reporting.builder import DashboardBuilder
from app.reporting.dashboard import describe_mood
from app.watcher.exceptions import WatchError
from app.watcher.status_watcher import StatusWatcher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moodbuilder", description="Journal with AI mood analysis."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create the database schema.")

    write = commands.add_parser("write", help="Analyse and save a typed entry.")
    write.add_argument("text", nargs="?", help="Entry text; read from stdin if omitted.")

    upload = commands.add_parser("upload", help="Extract, confirm and save a document.")
    upload.add_argument("path", type=Path)
    upload.add_argument("--mime-type", help="Override the guessed MIME type.")
    upload.add_argument("--yes", action="store_true", help="Submit the text without review.")

    history = commands.add_parser("history", help="List recent entries.")
    history.add_argument("--limit", type=int, default=20)

    documents = commands.add_parser("documents", help="List uploaded documents.")
    documents.add_argument("--limit", type=int, default=50)

    commands.add_parser("dashboard", help="Show mood statistics for the last 90 days.")
    return parser


def cmd_init_db(args: argparse.Namespace, settings: Settings, principal: Principal) -> int:
    apply_schema()
    print("Database schema is up to date.")
    return 0


def cmd_write(args: argparse.Namespace, settings: Settings, principal: Principal) -> int:
    text = args.text if args.text is not None else sys.stdin.read()
    service = build_journal_service(settings)
    return _report_save(service.submit_text(principal, text))


def cmd_upload(args: argparse.Namespace, settings: Settings, principal: Principal) -> int:
    path: Path = args.path
    mime_type = args.mime_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    try:
        content = path.read_bytes()
    except OSError as exc:
        print(f"Upload failed: {exc}", file=sys.stderr)
        return 1
    request = UploadRequest(filename=path.name, mime_type=mime_type, content=content)

    result = build_ingestor(settings).ingest(principal, request)
    if not result.success or result.document_id is None:
        print(f"Upload failed: {result.error}", file=sys.stderr)
        return 1

    extracted: list[str] = []
    failures: list[str] = []
    listener = DocumentNotificationListener(build_conninfo(settings))
    with StatusWatcher(
        result.document_id,
        doc_repo=DocumentsRepository(),
        listener=listener,
        on_complete=extracted.append,
        on_failed=failures.append,
        poll_interval_seconds=settings.status_poll_interval_seconds,
        timeout_seconds=settings.status_watch_timeout_seconds,
    ) as watcher:
        status = watcher.wait()

    if status != STATUS_COMPLETED:
        print(failures[0] if failures else f"Document ended as {status}", file=sys.stderr)
        return 1

    confirmation = ContentConfirmation(document_id=result.document_id, extracted_text=extracted[0])
    if not args.yes and not _review(confirmation):
        print("Cancelled.")
        return 0

    service = build_journal_service(settings)
    return _report_save(service.submit_confirmed(principal, confirmation))


def cmd_history(args: argparse.Namespace, settings: Settings, principal: Principal) -> int:
    entries = build_journal_service(settings).history(principal, limit=args.limit)
    if not entries:
        print("No journal entries yet.")
    for entry in entries:
        _print_entry(entry)
    return 0


def cmd_documents(args: argparse.Namespace, settings: Settings, principal: Principal) -> int:
    documents = DocumentsRepository().list_for_owner(principal.id, limit=args.limit)
    if not documents:
        print("No documents uploaded yet.")
    for doc in documents:
        print(f"{doc.created_at:%Y-%m-%d %H:%M}  {doc.status:<10}  {doc.file_name}  ({doc.file_size} bytes)")
    return 0


def cmd_dashboard(args: argparse.Namespace, settings: Settings, principal: Principal) -> int:
    summary = DashboardBuilder(JournalEntriesRepository()).build(principal)
    print(f"Entries (90 days): {summary.entry_count}")
    print(f"Weekly mood:       {summary.weekly_mood} ({describe_mood(summary.weekly_mood)})")
    print(f"Streak:            {summary.streak} day(s)")
    if summary.latest_entry is not None:
        print("Latest entry:")
        _print_entry(summary.latest_entry)
    if summary.trend:
        print("Last 7 days:")
        for day in summary.trend:
            print(f"  {day.day}  {day.mood:>3}  {', '.join(day.keywords)}")
    print("Distribution: " + ", ".join(f"{b.name} {b.count}" for b in summary.distribution))
    if summary.top_emotions:
        print("Top emotions: " + ", ".join(f"{e.name} ({e.count})" for e in summary.top_emotions))
    return 0


COMMANDS = {
    "init-db": cmd_init_db,
    "write": cmd_write,
    "upload": cmd_upload,
    "history": cmd_history,
    "documents": cmd_documents,
    "dashboard": cmd_dashboard,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> initialize pool -> run one command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        return COMMANDS[args.command](args, settings, principal_from_settings(settings))
    except (JournalError, WatchError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        close_pool()


def _review(confirmation: ContentConfirmation) -> bool:
    print("Extracted text:")
    print(confirmation.extracted_text)
    answer = input("Submit this text? [Y]es / [e]dit / [n]o: ").strip().lower()
    if answer.startswith("n"):
        return False
    if answer.startswith("e"):
        print("Enter the corrected text, then end input with Ctrl-D:")
        confirmation.edit(sys.stdin.read())
    return True


def _report_save(result: SaveResult) -> int:
    if not result.success or result.entry is None:
        print(f"Could not save journal entry: {result.error}", file=sys.stderr)
        return 1
    entry = result.entry
    print(f"Saved entry {entry.id} with mood {entry.mood_score:g}")
    if entry.emotions:
        print(f"Emotions: {', '.join(entry.emotions)}")
    if entry.themes:
        print(f"Themes:   {', '.join(entry.themes)}")
    return 0


def _print_entry(entry: ResolvedEntry) -> None:
    created = f"{entry.created_at:%Y-%m-%d %H:%M}" if entry.created_at else "-"
    print(f"{created}  mood {entry.mood_score} ({describe_mood(float(entry.mood_score))})")
    if entry.emotions:
        print(f"  emotions: {', '.join(entry.emotions)}")
    if entry.themes:
        print(f"  themes:   {', '.join(entry.themes)}")
    if entry.summary:
        print(f"  {entry.summary}")


if __name__ == "__main__":
    sys.exit(main())
