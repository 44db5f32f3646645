from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.records import as_utc

AppointmentStatus = Literal["scheduled", "completed", "cancelled"]
AppointmentMode = Literal["virtual", "in_person"]
AppointmentCategory = Literal["upcoming", "past", "cancelled"]


class AppointmentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patient_id: str = Field(..., min_length=1, alias="patientId")
    provider_id: str = Field(..., min_length=1, alias="providerId")
    provider_name: str = Field("", alias="providerName")
    appointment_date_time: datetime = Field(..., alias="appointmentDateTime")
    mode: AppointmentMode = "virtual"
    notes: Optional[str] = None

    @field_validator("appointment_date_time", mode="before")
    @classmethod
    def validate_date_time(cls, v):
        return as_utc(v)


class Appointment(AppointmentIn):
    appointment_id: str = Field("", alias="appointmentId")
    status: AppointmentStatus = "scheduled"
