"""Request bodies for the patient-facing write endpoints."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.records import DoseStatus, Intensity, Mood, normalize_enum


class ExerciseLogIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    exercise_type: str = Field(..., min_length=1, alias="exerciseType")
    duration: int = Field(..., gt=0)            # minutes
    intensity: Intensity = Intensity.LOW
    notes: Optional[str] = None

    @field_validator("intensity", mode="before")
    @classmethod
    def validate_intensity(cls, v):
        return normalize_enum(Intensity, v)


class PrescriptionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patient_id: str = Field(..., min_length=1, alias="patientId")
    medication_name: str = Field(..., min_length=1, alias="medicationName")
    dosage: str = Field(..., min_length=1)      # "75 mg", "1 tab", etc.
    frequency: str = "Once Daily"
    time_of_day: str = Field("", alias="timeOfDay")


class DoseStatusUpdate(BaseModel):
    status: DoseStatus

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        return normalize_enum(DoseStatus, v)


class JournalEntryIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mood: Mood
    symptoms: Optional[str] = None
    free_text: str = Field("", alias="freeTextEntry")
    diet_notes: Optional[str] = Field(None, alias="dietNotes")

    @field_validator("mood", mode="before")
    @classmethod
    def validate_mood(cls, v):
        return normalize_enum(Mood, v)

    @field_validator("symptoms", mode="before")
    @classmethod
    def validate_symptoms(cls, v):
        # blank symptoms are stored as null
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def has_content(self) -> bool:
        return bool(self.symptoms) or bool(self.free_text.strip())


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
