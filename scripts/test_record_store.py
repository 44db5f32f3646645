import unittest
from datetime import datetime, timedelta, timezone

from app.models.records import ChatRole, DoseStatus
from app.models.report import DayMinutes, WeeklySummary
from app.services import record_store
from fake_firestore import FakeFirestore

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


class TestRecordStore(unittest.TestCase):
    def setUp(self):
        self.db = FakeFirestore()
        logs = self.db.collection("exerciselog")
        logs.add({"userId": "p1", "exerciseType": "Walking", "duration": 30, "intensity": "Low",
                  "timestamp": NOW - timedelta(days=1)})
        logs.add({"userId": "p1", "exerciseType": "Cycling", "duration": 20, "intensity": "High",
                  "timestamp": NOW - timedelta(days=3)})
        logs.add({"userId": "p1", "exerciseType": "Old", "duration": 60, "intensity": "Low",
                  "timestamp": NOW - timedelta(days=20)})
        logs.add({"userId": "p2", "exerciseType": "Walking", "duration": 15, "intensity": "Low",
                  "timestamp": NOW - timedelta(days=1)})
        # malformed: unknown intensity
        logs.add({"userId": "p1", "exerciseType": "Yoga", "duration": 10, "intensity": "Extreme",
                  "timestamp": NOW - timedelta(days=2)})

    def test_fetch_filters_patient_and_window(self):
        logs = record_store.fetch_exercise_logs("p1", start=NOW - timedelta(days=7), db=self.db)
        self.assertEqual([r.exercise_type for r in logs], ["Cycling", "Walking"])

    def test_fetch_descending(self):
        logs = record_store.fetch_exercise_logs("p1", descending=True, db=self.db)
        self.assertEqual([r.exercise_type for r in logs], ["Walking", "Cycling", "Old"])

    def test_end_bound_is_exclusive(self):
        logs = record_store.fetch_exercise_logs("p1", start=NOW - timedelta(days=30), end=NOW - timedelta(days=3),
                                                db=self.db)
        self.assertEqual([r.exercise_type for r in logs], ["Old"])

    def test_add_and_update_exercise(self):
        log_id = record_store.add_exercise_log("p3", "Swimming", 25, "Medium", db=self.db)
        record_store.update_exercise_log(log_id, 35, "High", "Swimming", db=self.db)

        stored = record_store.get_exercise_log(log_id, db=self.db)
        self.assertEqual(stored["userId"], "p3")
        self.assertEqual(stored["duration"], 35)
        self.assertEqual(stored["intensity"], "High")

        record_store.delete_exercise_log(log_id, db=self.db)
        self.assertIsNone(record_store.get_exercise_log(log_id, db=self.db))

    def test_prescription_starts_pending(self):
        rid = record_store.add_prescription("p1", "Aspirin", "75mg", "Once Daily", "08:00", db=self.db)
        doses = record_store.fetch_dose_events("p1", db=self.db)
        self.assertEqual(len(doses), 1)
        self.assertIs(doses[0].status, DoseStatus.PENDING)

        record_store.update_dose_status(rid, DoseStatus.TAKEN, db=self.db)
        self.assertIs(record_store.fetch_dose_events("p1", db=self.db)[0].status, DoseStatus.TAKEN)

    def test_report_inputs_include_chat(self):
        record_store.save_chat_message("p1", ChatRole.USER, "Can I walk today?", db=self.db)
        record_store.save_chat_message("p1", ChatRole.ASSISTANT, "Yes.", db=self.db)
        record_store.add_journal_entry("p1", "Tired", "fatigue", "", db=self.db)

        start = datetime.now(timezone.utc) - timedelta(hours=1)
        exercise, doses, journal, chats = record_store.fetch_report_inputs("p1", start, db=self.db)
        self.assertEqual(exercise, [])
        self.assertEqual(doses, [])
        self.assertEqual(len(journal), 1)
        self.assertEqual([c.role for c in chats], [ChatRole.USER, ChatRole.ASSISTANT])

    def test_save_weekly_summary_uses_camel_case(self):
        summary = WeeklySummary(
            window_label="Last 7 Days",
            total_exercise_minutes=30,
            adherence_rate_percent=100,
            mood_trend="Good",
            per_day_minutes=tuple(DayMinutes(label=l, minutes=0) for l in "MTWTFSS"),
        )
        record_store.save_weekly_summary("p1", summary, db=self.db)

        stored = self.db.docs("weekly_summaries")["p1"]
        self.assertEqual(stored["totalExerciseMinutes"], 30)
        self.assertEqual(len(stored["perDayMinutes"]), 7)


if __name__ == '__main__':
    unittest.main()
