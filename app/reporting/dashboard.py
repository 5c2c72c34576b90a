"""Read models behind the dashboard: trend chart, calendar, distribution, streak.

All functions take resolved entries, so the mood score and labels follow the
same precedence as every other view.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from app.journal.resolution import ResolvedEntry

TREND_KEYWORD_LIMIT = 5


@dataclass(frozen=True)
class DailyMood:
    day: date
    mood: int
    entry_count: int
    keywords: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarDay:
    score: float
    count: int


@dataclass(frozen=True)
class MoodBucket:
    name: str
    minimum: int
    maximum: int
    count: int


@dataclass(frozen=True)
class LabelCount:
    name: str
    count: int


def describe_mood(score: float) -> str:
    if score >= 80:
        return "Very Positive"
    if score >= 60:
        return "Positive"
    if score >= 40:
        return "Neutral"
    if score >= 20:
        return "Negative"
    return "Very Negative"


def daily_mood_trend(
    entries: Iterable[ResolvedEntry], *, today: date, days: int = 7
) -> list[DailyMood]:
    """Average mood per day over the last `days` days, oldest first."""
    first_day = today - timedelta(days=days - 1)
    scores: dict[date, list[float]] = {}
    keywords: dict[date, list[str]] = {}
    for entry in _dated(entries):
        day = entry.created_at.date()  # type: ignore[union-attr]
        if not first_day <= day <= today:
            continue
        scores.setdefault(day, []).append(float(entry.mood_score))
        day_keywords = keywords.setdefault(day, [])
        day_keywords.extend(e for e in entry.emotions if e not in day_keywords)

    return [
        DailyMood(
            day=day,
            mood=round(sum(day_scores) / len(day_scores)),
            entry_count=len(day_scores),
            keywords=keywords[day][:TREND_KEYWORD_LIMIT],
        )
        for day, day_scores in sorted(scores.items())
    ]


def calendar_heatmap(entries: Iterable[ResolvedEntry]) -> dict[date, CalendarDay]:
    """Mean mood score and entry count for each day that has entries."""
    totals: dict[date, list[float]] = {}
    for entry in _dated(entries):
        totals.setdefault(entry.created_at.date(), []).append(float(entry.mood_score))  # type: ignore[union-attr]
    return {
        day: CalendarDay(score=sum(values) / len(values), count=len(values))
        for day, values in sorted(totals.items())
    }


def mood_distribution(entries: Iterable[ResolvedEntry]) -> list[MoodBucket]:
    """Count entries in the Low (0-33), Medium (34-66) and High (67-100) bands."""
    low = medium = high = 0
    for entry in entries:
        score = float(entry.mood_score)
        if score < 34:
            low += 1
        elif score < 67:
            medium += 1
        else:
            high += 1
    return [
        MoodBucket("Low", 0, 33, low),
        MoodBucket("Medium", 34, 66, medium),
        MoodBucket("High", 67, 100, high),
    ]


def emotion_frequency(entries: Iterable[ResolvedEntry], limit: int = 10) -> list[LabelCount]:
    counts = Counter(emotion for entry in entries for emotion in entry.emotions)
    return [LabelCount(name, count) for name, count in counts.most_common(limit)]


def weekly_average(entries: Iterable[ResolvedEntry], *, today: date) -> int:
    """Rounded mean mood over the last seven days; 0 when there are no entries."""
    first_day = today - timedelta(days=6)
    scores = [
        float(entry.mood_score)
        for entry in _dated(entries)
        if first_day <= entry.created_at.date() <= today  # type: ignore[union-attr]
    ]
    if not scores:
        return 0
    return round(sum(scores) / len(scores))


def journal_streak(entries: Iterable[ResolvedEntry], *, today: date) -> int:
    """Consecutive days with at least one entry, ending today."""
    days = {entry.created_at.date() for entry in _dated(entries)}  # type: ignore[union-attr]
    streak = 0
    current = today
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


def _dated(entries: Iterable[ResolvedEntry]) -> list[ResolvedEntry]:
    return [entry for entry in entries if entry.created_at is not None]
