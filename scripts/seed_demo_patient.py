import sys
from datetime import datetime, timedelta, timezone

import firebase_admin
from firebase_admin import credentials, firestore

if not firebase_admin._apps:
    cred = credentials.Certificate("app/core/firebase_key.json")
    firebase_admin.initialize_app(cred)

db = firestore.client()

EXERCISES = [
    ("Walking", 30, "Low"),
    ("Cycling", 25, "Medium"),
    ("Walking", 40, "Low"),
    ("Stretching", 15, "Low"),
    ("Treadmill", 30, "Medium"),
    ("Walking", 20, "Low"),
    ("Swimming", 35, "High"),
]
MOODS = ["Happy", "Neutral", "Tired", "Happy", "Anxious", "Happy", "Neutral"]
SYMPTOMS = ["fatigue", "", "fatigue; shortness of breath", "", "dizziness", "", "fatigue"]


def seed(uid: str):
    now = datetime.now(timezone.utc)

    for i in range(7):
        day = now - timedelta(days=i, hours=2)
        ex_type, minutes, intensity = EXERCISES[i]

        db.collection("exerciselog").add({
            "userId": uid, "exerciseType": ex_type, "duration": minutes,
            "intensity": intensity, "timestamp": day,
        })
        db.collection("MedicationReminders").add({
            "userId": uid, "medicationName": "Aspirin", "dosage": "75mg",
            "frequency": "Once Daily", "timeOfDay": "08:00",
            "reminderStatus": "Missed" if i == 3 else "Taken", "timestamp": day,
        })
        db.collection("patientjournal").add({
            "userId": uid, "mood": MOODS[i], "symptoms": SYMPTOMS[i] or None,
            "freeTextEntry": "Demo entry", "entryDate": day,
        })

    print(f"Seeded 7 days of records for {uid}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit("usage: python scripts/seed_demo_patient.py <patient uid>")
    seed(sys.argv[1])
