"""Small builders for record models used across the tests."""
from datetime import datetime, timezone

from app.models.records import ChatRecord, DoseEvent, ExerciseRecord, JournalRecord

# A Monday
MONDAY = datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)


def exercise(minutes=30, at=MONDAY, patient="p1", kind="Walking", intensity="Low"):
    return ExerciseRecord(
        patient_id=patient, exercise_type=kind, duration_minutes=minutes,
        intensity=intensity, occurred_at=at,
    )


def dose(status="Taken", at=MONDAY, patient="p1"):
    return DoseEvent(patient_id=patient, medication_name="Aspirin", dosage="75mg", status=status, occurred_at=at)


def journal(mood="Happy", symptoms=None, at=MONDAY, patient="p1"):
    return JournalRecord(patient_id=patient, mood=mood, symptoms=symptoms, occurred_at=at)


def chat(role="user", in_scope=True, at=MONDAY, patient="p1", text="hello"):
    return ChatRecord(patient_id=patient, role=role, text=text, in_scope=in_scope, occurred_at=at)
