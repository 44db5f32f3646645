from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from google.cloud.firestore import And, FieldFilter
from pydantic import ValidationError

from app.core.firebase import get_db
from app.models.records import ChatRecord, ChatRole, DoseEvent, DoseStatus, ExerciseRecord, JournalRecord
from app.services.logger import get_logger, log_debug

logger = get_logger(__name__)

EXERCISE_COLLECTION = "exerciselog"
MEDICATION_COLLECTION = "MedicationReminders"
JOURNAL_COLLECTION = "patientjournal"
CHAT_COLLECTION = "mycardiacrehab_chat"
REPORT_COLLECTION = "patient_reports"
SUMMARY_COLLECTION = "weekly_summaries"


# -------------------------
# Helpers
# -------------------------
def _to_datetime(ts):
    if ts is None:
        return None
    # Firestore Timestamp has .datetime in some SDK versions
    dt = getattr(ts, "datetime", ts)
    if isinstance(dt, datetime):
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    return ts


def _now():
    return datetime.now(timezone.utc)


def _parse(model_cls, doc, time_field: str):
    """Build a record from a snapshot; malformed documents are dropped."""
    data = doc.to_dict() or {}
    data["id"] = doc.id
    data[time_field] = _to_datetime(data.get(time_field))
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        logger.warning("Skipping malformed %s document %s: %s", model_cls.__name__, doc.id, e.errors()[:1])
        return None


def _query(
    model_cls,
    collection: str,
    time_field: str,
    patient_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    descending: bool = False,
    db=None,
) -> list:
    """
    Records of one patient with start <= time_field < end.
    Sorted in memory so no composite index is needed.
    """
    db = db or get_db()

    filters = [FieldFilter("userId", "==", patient_id)]
    if start is not None:
        filters.append(FieldFilter(time_field, ">=", start))
    if end is not None:
        filters.append(FieldFilter(time_field, "<", end))

    q = db.collection(collection)
    if len(filters) == 1:
        q = q.where(filter=filters[0])
    else:
        q = q.where(filter=And(filters=filters))

    out = []
    for doc in q.stream():
        rec = _parse(model_cls, doc, time_field)
        if rec is not None:
            out.append(rec)

    out.sort(key=lambda r: r.occurred_at, reverse=descending)
    return out


def _get_doc(collection: str, doc_id: str, db=None) -> Optional[dict[str, Any]]:
    db = db or get_db()
    doc = db.collection(collection).document(doc_id).get()
    if not doc.exists:
        return None
    return {"id": doc.id, **(doc.to_dict() or {})}


# -------------------------
# Reads
# -------------------------
def fetch_exercise_logs(patient_id: str, start=None, end=None, descending=False, db=None) -> list[ExerciseRecord]:
    return _query(ExerciseRecord, EXERCISE_COLLECTION, "timestamp", patient_id, start, end, descending, db)


def fetch_dose_events(patient_id: str, start=None, end=None, descending=False, db=None) -> list[DoseEvent]:
    return _query(DoseEvent, MEDICATION_COLLECTION, "timestamp", patient_id, start, end, descending, db)


def fetch_journal_entries(patient_id: str, start=None, end=None, descending=False, db=None) -> list[JournalRecord]:
    return _query(JournalRecord, JOURNAL_COLLECTION, "entryDate", patient_id, start, end, descending, db)


def fetch_chat_messages(patient_id: str, start=None, end=None, db=None) -> list[ChatRecord]:
    return _query(ChatRecord, CHAT_COLLECTION, "timestamp", patient_id, start, end, False, db)


def fetch_summary_inputs(patient_id: str, start: datetime, end: Optional[datetime] = None, db=None):
    """Exercise, dose and journal snapshots for the weekly summary."""
    db = db or get_db()
    exercise = fetch_exercise_logs(patient_id, start, end, db=db)
    doses = fetch_dose_events(patient_id, start, end, db=db)
    journal = fetch_journal_entries(patient_id, start, end, db=db)
    log_debug("summary_inputs", {
        "patient_id": patient_id,
        "start": start,
        "exercise": len(exercise),
        "doses": len(doses),
        "journal": len(journal),
    })
    return exercise, doses, journal


def fetch_report_inputs(patient_id: str, start: datetime, end: Optional[datetime] = None, db=None):
    """All four record streams for a report window."""
    db = db or get_db()
    exercise, doses, journal = fetch_summary_inputs(patient_id, start, end, db=db)
    chats = fetch_chat_messages(patient_id, start, end, db=db)
    return exercise, doses, journal, chats


def get_exercise_log(log_id: str, db=None):
    return _get_doc(EXERCISE_COLLECTION, log_id, db)


def get_dose_event(reminder_id: str, db=None):
    return _get_doc(MEDICATION_COLLECTION, reminder_id, db)


def get_journal_entry(entry_id: str, db=None):
    return _get_doc(JOURNAL_COLLECTION, entry_id, db)


# -------------------------
# Writes
# -------------------------
def add_exercise_log(patient_id: str, exercise_type: str, duration: int, intensity: str, notes=None, db=None) -> str:
    db = db or get_db()
    _, ref = db.collection(EXERCISE_COLLECTION).add({
        "userId": patient_id,
        "exerciseType": exercise_type,
        "duration": duration,
        "intensity": intensity,
        "notes": notes,
        "timestamp": _now(),
    })
    return ref.id


def update_exercise_log(log_id: str, duration: int, intensity: str, exercise_type: str, db=None):
    db = db or get_db()
    db.collection(EXERCISE_COLLECTION).document(log_id).update({
        "duration": duration,
        "intensity": intensity,
        "exerciseType": exercise_type,
    })


def delete_exercise_log(log_id: str, db=None):
    db = db or get_db()
    db.collection(EXERCISE_COLLECTION).document(log_id).delete()


def add_prescription(
    patient_id: str,
    medication_name: str,
    dosage: str,
    frequency: str,
    time_of_day: str,
    db=None,
) -> str:
    db = db or get_db()
    _, ref = db.collection(MEDICATION_COLLECTION).add({
        "userId": patient_id,
        "medicationName": medication_name,
        "dosage": dosage,
        "frequency": frequency,
        "timeOfDay": time_of_day,
        "reminderStatus": DoseStatus.PENDING.value,
        "timestamp": _now(),
    })
    return ref.id


def update_dose_status(reminder_id: str, status: DoseStatus, db=None):
    db = db or get_db()
    db.collection(MEDICATION_COLLECTION).document(reminder_id).update({"reminderStatus": status.value})


def add_journal_entry(patient_id: str, mood: str, symptoms, free_text: str, diet_notes=None, db=None) -> str:
    db = db or get_db()
    _, ref = db.collection(JOURNAL_COLLECTION).add({
        "userId": patient_id,
        "mood": mood,
        "symptoms": symptoms,
        "dietNotes": diet_notes,
        "freeTextEntry": free_text,
        "entryDate": _now(),
    })
    return ref.id


def update_journal_entry(entry_id: str, mood: str, symptoms, free_text: str, db=None):
    db = db or get_db()
    db.collection(JOURNAL_COLLECTION).document(entry_id).update({
        "mood": mood,
        "symptoms": symptoms,
        "freeTextEntry": free_text,
    })


def delete_journal_entry(entry_id: str, db=None):
    db = db or get_db()
    db.collection(JOURNAL_COLLECTION).document(entry_id).delete()


def save_chat_message(patient_id: str, role: ChatRole, text: str, in_scope: bool = True, db=None) -> str:
    db = db or get_db()
    _, ref = db.collection(CHAT_COLLECTION).add({
        "userId": patient_id,
        "role": role.value,
        "text": text,
        "isInScope": in_scope,
        "timestamp": _now(),
    })
    return ref.id


def save_report(report, db=None) -> str:
    db = db or get_db()
    payload = report.model_dump(mode="json", by_alias=True)
    payload["createdAt"] = _now()
    _, ref = db.collection(REPORT_COLLECTION).add(payload)
    return ref.id


def save_weekly_summary(patient_id: str, summary, db=None):
    db = db or get_db()
    payload = summary.model_dump(mode="json", by_alias=True)
    payload["updatedAt"] = _now()
    db.collection(SUMMARY_COLLECTION).document(patient_id).set(payload)
