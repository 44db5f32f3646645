"""Patient activity records as stored in Firestore.

Field names follow the Firestore documents written by the mobile app
(`userId`, `duration`, `reminderStatus`, `entryDate`, ...) through aliases,
while Python code uses snake_case attributes.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Intensity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DoseStatus(str, Enum):
    PENDING = "Pending"
    TAKEN = "Taken"
    MISSED = "Missed"


class Mood(str, Enum):
    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    TIRED = "Tired"
    ANXIOUS = "Anxious"
    STRESSED = "Stressed"
    SAD = "Sad"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


POSITIVE_MOODS = frozenset({Mood.HAPPY, Mood.NEUTRAL})

# Older clients stored the Gemini reply under its SDK role name
ROLE_ALIASES = {"model": "assistant", "bot": "assistant"}


def normalize_enum(enum_cls, v):
    """Case-insensitive lookup of an enum value; unknown values are rejected."""
    if isinstance(v, enum_cls):
        return v
    if isinstance(v, str):
        wanted = v.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    raise ValueError(f"unknown {enum_cls.__name__} value: {v!r}")


def as_utc(v):
    # Firestore hands back DatetimeWithNanoseconds (aware) or ISO strings
    if isinstance(v, str):
        v = datetime.fromisoformat(v)
    if isinstance(v, datetime) and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    patient_id: str = Field(..., alias="userId")


class ExerciseRecord(_Record):
    exercise_type: str = Field("", alias="exerciseType")
    duration_minutes: int = Field(0, ge=0, alias="duration")
    intensity: Intensity = Intensity.LOW
    notes: Optional[str] = None
    occurred_at: datetime = Field(..., alias="timestamp")

    @field_validator("intensity", mode="before")
    @classmethod
    def validate_intensity(cls, v):
        return normalize_enum(Intensity, v)

    @field_validator("occurred_at", mode="before")
    @classmethod
    def validate_occurred_at(cls, v):
        return as_utc(v)


class DoseEvent(_Record):
    medication_name: str = Field("", alias="medicationName")
    dosage: str = ""
    frequency_label: str = Field("Once Daily", alias="frequency")
    scheduled_time_of_day: str = Field("", alias="timeOfDay")
    status: DoseStatus = Field(DoseStatus.PENDING, alias="reminderStatus")
    occurred_at: datetime = Field(..., alias="timestamp")

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        return normalize_enum(DoseStatus, v)

    @field_validator("occurred_at", mode="before")
    @classmethod
    def validate_occurred_at(cls, v):
        return as_utc(v)


class JournalRecord(_Record):
    mood: Mood
    symptoms: Optional[str] = None
    notes: str = Field("", alias="freeTextEntry")
    diet_notes: Optional[str] = Field(None, alias="dietNotes")
    occurred_at: datetime = Field(..., alias="entryDate")

    @field_validator("mood", mode="before")
    @classmethod
    def validate_mood(cls, v):
        return normalize_enum(Mood, v)

    @field_validator("occurred_at", mode="before")
    @classmethod
    def validate_occurred_at(cls, v):
        return as_utc(v)


class ChatRecord(_Record):
    role: ChatRole
    text: str = ""
    in_scope: bool = Field(True, alias="isInScope")
    occurred_at: datetime = Field(..., alias="timestamp")

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v):
        if isinstance(v, str):
            v = ROLE_ALIASES.get(v.strip().lower(), v)
        return normalize_enum(ChatRole, v)

    @field_validator("occurred_at", mode="before")
    @classmethod
    def validate_occurred_at(cls, v):
        return as_utc(v)
