"""Weekly progress aggregation.

Pure functions over record snapshots already filtered to one patient and
one time window. Nothing here touches Firestore.
"""
from __future__ import annotations

import math
from collections import defaultdict
from datetime import tzinfo
from typing import Iterable, Sequence

from app.models.records import (
    POSITIVE_MOODS,
    DoseEvent,
    DoseStatus,
    ExerciseRecord,
    JournalRecord,
)
from app.models.report import DayMinutes, WeeklySummary

WEEK_LABEL = "Last 7 Days"
GOOD_MOOD_THRESHOLD = 0.6

# datetime.weekday(): Monday == 0
DAY_LABELS = ("M", "T", "W", "T", "F", "S", "S")

MOOD_GOOD = "Good"
MOOD_NEEDS_ATTENTION = "Needs Attention"
MOOD_NO_DATA = "No data"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def total_minutes(exercise: Iterable[ExerciseRecord]) -> int:
    return sum(r.duration_minutes for r in exercise)


def adherence_rate(doses: Sequence[DoseEvent]) -> int:
    """Percentage of doses marked Taken; no doses counts as fully adherent."""
    if not doses:
        return 100
    taken = sum(1 for d in doses if d.status is DoseStatus.TAKEN)
    return round_half_up(taken / len(doses) * 100)


def mood_trend(journal: Sequence[JournalRecord]) -> str:
    if not journal:
        return MOOD_NO_DATA
    positive = sum(1 for e in journal if e.mood in POSITIVE_MOODS)
    if positive / len(journal) > GOOD_MOOD_THRESHOLD:
        return MOOD_GOOD
    return MOOD_NEEDS_ATTENTION


def minutes_per_weekday(exercise: Iterable[ExerciseRecord], tz: tzinfo | None = None) -> tuple[DayMinutes, ...]:
    """
    Sum exercise minutes by the weekday each session happened on in `tz`
    (None = server local time). Always returns Monday..Sunday.
    """
    by_day: dict[int, int] = defaultdict(int)
    for r in exercise:
        by_day[r.occurred_at.astimezone(tz).weekday()] += r.duration_minutes

    return tuple(
        DayMinutes(label=label, minutes=by_day.get(i, 0))
        for i, label in enumerate(DAY_LABELS)
    )


def compute_weekly_summary(
    exercise: Sequence[ExerciseRecord],
    doses: Sequence[DoseEvent],
    journal: Sequence[JournalRecord],
    window_label: str = WEEK_LABEL,
    tz: tzinfo | None = None,
) -> WeeklySummary:
    return WeeklySummary(
        window_label=window_label,
        total_exercise_minutes=total_minutes(exercise),
        adherence_rate_percent=adherence_rate(doses),
        mood_trend=mood_trend(journal),
        per_day_minutes=minutes_per_weekday(exercise, tz),
    )
