from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from google.cloud.firestore import FieldFilter
from pydantic import ValidationError

from app.core.firebase import get_db
from app.models.appointment import Appointment, AppointmentIn
from app.services.logger import get_logger

logger = get_logger(__name__)

APPOINTMENTS_COLLECTION = "appointments"


def _to_appointment(doc) -> Optional[Appointment]:
    data = doc.to_dict() or {}
    data["appointmentId"] = doc.id
    ts = data.get("appointmentDateTime")
    data["appointmentDateTime"] = getattr(ts, "datetime", ts)
    try:
        return Appointment.model_validate(data)
    except ValidationError as e:
        logger.warning("Skipping malformed appointment %s: %s", doc.id, e.errors()[:1])
        return None


def filter_by_category(appointments: list[Appointment], category: str, now: datetime) -> list[Appointment]:
    """
    upcoming  -> scheduled and still ahead, soonest first
    past      -> completed, or scheduled but already gone by; latest first
    cancelled -> cancelled, latest first
    """
    if category == "upcoming":
        items = [a for a in appointments if a.status == "scheduled" and a.appointment_date_time > now]
        return sorted(items, key=lambda a: a.appointment_date_time)

    if category == "past":
        items = [
            a for a in appointments
            if a.status == "completed" or (a.status == "scheduled" and a.appointment_date_time < now)
        ]
    elif category == "cancelled":
        items = [a for a in appointments if a.status == "cancelled"]
    else:
        raise ValueError(f"unknown appointment category: {category}")

    return sorted(items, key=lambda a: a.appointment_date_time, reverse=True)


def list_appointments(user_id: str, category: str, field: str = "patientId", db=None, now=None) -> list[Appointment]:
    db = db or get_db()
    now = now or datetime.now(timezone.utc)

    docs = db.collection(APPOINTMENTS_COLLECTION).where(filter=FieldFilter(field, "==", user_id)).stream()
    items = (_to_appointment(d) for d in docs)
    return filter_by_category([a for a in items if a is not None], category, now)


def create_appointment(payload: AppointmentIn, db=None) -> str:
    db = db or get_db()
    data = payload.model_dump(by_alias=True)
    data["status"] = "scheduled"
    _, ref = db.collection(APPOINTMENTS_COLLECTION).add(data)
    return ref.id


def get_appointment(appointment_id: str, db=None) -> Optional[Appointment]:
    db = db or get_db()
    doc = db.collection(APPOINTMENTS_COLLECTION).document(appointment_id).get()
    if not doc.exists:
        return None
    return _to_appointment(doc)


def cancel_appointment(appointment_id: str, db=None):
    db = db or get_db()
    db.collection(APPOINTMENTS_COLLECTION).document(appointment_id).update({"status": "cancelled"})
