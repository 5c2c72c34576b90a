from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

from app.auth.principal import Principal
from app.database.repositories.journal_entries_repository import JournalEntriesRepository
from app.journal.resolution import ResolvedEntry, resolve_entry
from app.reporting.dashboard import (
    CalendarDay,
    DailyMood,
    LabelCount,
    MoodBucket,
    calendar_heatmap,
    daily_mood_trend,
    emotion_frequency,
    journal_streak,
    mood_distribution,
    weekly_average,
)

DASHBOARD_WINDOW_DAYS = 90


@dataclass(frozen=True)
class DashboardSummary:
    latest_entry: ResolvedEntry | None
    weekly_mood: int
    streak: int
    trend: list[DailyMood] = field(default_factory=list)
    calendar: dict[date, CalendarDay] = field(default_factory=dict)
    distribution: list[MoodBucket] = field(default_factory=list)
    top_emotions: list[LabelCount] = field(default_factory=list)
    entry_count: int = 0


class DashboardBuilder:
    """Loads the last 90 days of a user's entries and computes the dashboard."""

    def __init__(self, entries_repo: JournalEntriesRepository) -> None:
        self._entries_repo = entries_repo

    def build(self, principal: Principal, now: datetime | None = None) -> DashboardSummary:
        now = now or datetime.now(timezone.utc)
        today = now.date()
        records = self._entries_repo.list_for_owner(
            principal.id, since=now - timedelta(days=DASHBOARD_WINDOW_DAYS)
        )
        entries = [resolve_entry(record) for record in records]

        return DashboardSummary(
            latest_entry=entries[0] if entries else None,
            weekly_mood=weekly_average(entries, today=today),
            streak=journal_streak(entries, today=today),
            trend=daily_mood_trend(entries, today=today),
            calendar=calendar_heatmap(entries),
            distribution=mood_distribution(entries),
            top_emotions=emotion_frequency(entries),
            entry_count=len(entries),
        )
