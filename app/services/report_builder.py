"""Provider-facing patient report composition.

`generate_report` works on record lists that the caller has already
fetched for the window [today - period_days + 1, today].
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from app.models.records import ChatRecord, ChatRole, DoseEvent, ExerciseRecord, JournalRecord
from app.models.report import PatientReport
from app.services.progress import adherence_rate, round_half_up, total_minutes
from app.services.symptoms import most_common_symptom

WEEKLY_EXERCISE_TARGET_MINUTES = 150
DEFAULT_PERIOD_DAYS = 7


def report_window(period_days: int, today: date | None = None) -> tuple[date, date]:
    """Inclusive (start, end) dates of an N-day report ending today."""
    if period_days < 1:
        raise ValueError("period_days must be >= 1")
    end = today or date.today()
    return end - timedelta(days=period_days - 1), end


def exercise_compliance(minutes: int, period_days: int) -> int:
    """Share of the 150 min/week target reached, scaled to the window, capped at 100."""
    target = WEEKLY_EXERCISE_TARGET_MINUTES * period_days / 7
    return min(100, round_half_up(minutes / target * 100))


def generate_report(
    patient_id: str,
    patient_name: str,
    exercise: Sequence[ExerciseRecord],
    doses: Sequence[DoseEvent],
    journal: Sequence[JournalRecord],
    chats: Sequence[ChatRecord],
    period_days: int = DEFAULT_PERIOD_DAYS,
    today: date | None = None,
) -> PatientReport:
    start, end = report_window(period_days, today)
    minutes = total_minutes(exercise)

    return PatientReport(
        patient_id=patient_id,
        patient_name=patient_name,
        generated_on=end,
        period_start=start,
        period_end=end,
        total_exercise_minutes=minutes,
        exercise_compliance_percent=exercise_compliance(minutes, period_days),
        medication_adherence_percent=adherence_rate(doses),
        most_common_symptom=most_common_symptom(journal),
        total_chat_interactions=sum(1 for c in chats if c.role is ChatRole.USER),
        out_of_scope_interactions=sum(1 for c in chats if not c.in_scope),
    )
