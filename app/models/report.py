"""Derived progress values: the weekly summary and the provider-facing report."""
from datetime import date
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class DayMinutes(_Frozen):
    label: str
    minutes: int = Field(0, ge=0)


class WeeklySummary(_Frozen):
    window_label: str
    total_exercise_minutes: int = Field(0, ge=0)
    adherence_rate_percent: int = Field(100, ge=0, le=100)
    mood_trend: str = "No data"
    # Monday .. Sunday, always 7 entries
    per_day_minutes: Tuple[DayMinutes, ...] = Field(..., min_length=7, max_length=7)


class PatientReport(_Frozen):
    patient_id: str
    patient_name: str = ""
    generated_on: date
    period_start: date
    period_end: date
    total_exercise_minutes: int = Field(0, ge=0)
    exercise_compliance_percent: int = Field(0, ge=0, le=100)
    medication_adherence_percent: int = Field(100, ge=0, le=100)
    most_common_symptom: str = "None Reported"
    total_chat_interactions: int = Field(0, ge=0)
    out_of_scope_interactions: int = Field(0, ge=0)
