import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from app.api.deps import get_current_user
from app.core import firebase
from app.main import app
from app.services.chatbot_service import ChatbotService
from fake_firestore import FailingFirestore, FakeFirestore
from fake_gemini import StubModel

PATIENT = {"uid": "p1", "role": "patient", "email": "p1@example.com"}
OTHER_PATIENT = {"uid": "p2", "role": "patient"}
PROVIDER = {"uid": "dr1", "role": "provider"}
ADMIN = {"uid": "admin1", "role": "admin"}


class RouteTestCase(unittest.TestCase):
    def setUp(self):
        self.db = FakeFirestore()
        self._saved_db = firebase.db
        firebase.db = self.db
        app.state.chatbot_service = ChatbotService(model=StubModel())
        self.client = TestClient(app)
        self.act_as(PATIENT)

        self.db.collection("users").document("p1").set({
            "userId": "p1", "fullName": "Alex Doe", "email": "p1@example.com",
            "userType": "patient", "isActive": True,
        })

    def tearDown(self):
        firebase.db = self._saved_db
        app.dependency_overrides.clear()

    def act_as(self, user):
        app.dependency_overrides[get_current_user] = lambda: user


class TestPatientRoutes(RouteTestCase):
    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_log_and_list_exercise(self):
        r = self.client.post("/exercise/", json={"exerciseType": "Walking", "duration": 30, "intensity": "medium"})
        self.assertEqual(r.status_code, 201)

        items = self.client.get("/exercise/").json()["items"]
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0]["duration"], 30)
        self.assertEqual(items[0]["intensity"], "Medium")

    def test_zero_duration_rejected(self):
        r = self.client.post("/exercise/", json={"exerciseType": "Walking", "duration": 0})
        self.assertEqual(r.status_code, 422)

    def test_cannot_edit_someone_elses_log(self):
        log_id = self.client.post("/exercise/", json={"exerciseType": "Walking", "duration": 30}).json()["id"]
        self.act_as(OTHER_PATIENT)
        r = self.client.delete(f"/exercise/{log_id}")
        self.assertEqual(r.status_code, 403)

    def test_patient_cannot_read_other_patient(self):
        r = self.client.get("/exercise/", params={"patient_id": "p2"})
        self.assertEqual(r.status_code, 403)

    def test_journal_requires_content(self):
        r = self.client.post("/journal/", json={"mood": "Happy", "symptoms": " ", "freeTextEntry": ""})
        self.assertEqual(r.status_code, 400)

        r = self.client.post("/journal/", json={"mood": "Tired", "symptoms": "fatigue"})
        self.assertEqual(r.status_code, 201)

    def test_weekly_progress(self):
        self.client.post("/exercise/", json={"exerciseType": "Walking", "duration": 30})
        self.client.post("/journal/", json={"mood": "Happy", "freeTextEntry": "Felt fine"})

        body = self.client.get("/progress/weekly").json()
        self.assertEqual(body["windowLabel"], "Last 7 Days")
        self.assertEqual(body["totalExerciseMinutes"], 30)
        self.assertEqual(body["adherenceRatePercent"], 100)
        self.assertEqual(body["moodTrend"], "Good")
        self.assertEqual(len(body["perDayMinutes"]), 7)

    def test_medication_schedule_and_status(self):
        self.act_as(PROVIDER)
        r = self.client.post("/provider/prescriptions/", json={
            "patientId": "p1", "medicationName": "Aspirin", "dosage": "75mg", "timeOfDay": "08:00",
        })
        self.assertEqual(r.status_code, 201)
        reminder_id = r.json()["id"]

        self.act_as(PATIENT)
        r = self.client.patch(f"/medications/{reminder_id}/status", json={"status": "taken"})
        self.assertEqual(r.json()["status"], "Taken")

        body = self.client.get("/medications/").json()
        self.assertEqual(body["adherenceRate"], 100)
        self.assertEqual(body["items"][0]["reminderStatus"], "Taken")

    def test_chat(self):
        r = self.client.post("/chatbot/chat", json={"message": "Is walking good?"})
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.json()["in_scope"])

        messages = self.client.get("/chatbot/history").json()["messages"]
        self.assertEqual([m["role"] for m in messages], ["user", "assistant"])


class TestProviderRoutes(RouteTestCase):
    def setUp(self):
        super().setUp()
        now = datetime.now(timezone.utc)
        self.db.collection("patientjournal").add({
            "userId": "p1", "mood": "Tired", "symptoms": "Fatigue, Nausea", "entryDate": now,
        })
        self.db.collection("patientjournal").add({
            "userId": "p1", "mood": "Sad", "symptoms": "fatigue", "entryDate": now,
        })
        self.db.collection("mycardiacrehab_chat").add({
            "userId": "p1", "role": "user", "text": "hi", "isInScope": False, "timestamp": now,
        })
        self.db.collection("exerciselog").add({
            "userId": "p1", "exerciseType": "Walking", "duration": 200, "intensity": "Low",
            "timestamp": now - timedelta(days=40),
        })
        self.act_as(PROVIDER)

    def test_generate_report(self):
        r = self.client.post("/provider/reports/p1", params={"days": 7})
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["patientName"], "Alex Doe")
        self.assertEqual(body["mostCommonSymptom"], "Fatigue")
        # the 40-day-old session is outside the window
        self.assertEqual(body["totalExerciseMinutes"], 0)
        self.assertEqual(body["exerciseCompliancePercent"], 0)
        self.assertEqual(body["medicationAdherencePercent"], 100)
        self.assertEqual(body["totalChatInteractions"], 1)
        self.assertEqual(body["outOfScopeInteractions"], 1)
        self.assertEqual(self.db.docs("patient_reports"), {})

    def test_saved_report(self):
        self.client.post("/provider/reports/p1", params={"days": 7, "save": True})
        saved = list(self.db.docs("patient_reports").values())
        self.assertEqual(len(saved), 1)
        self.assertEqual(saved[0]["patientId"], "p1")

    def test_days_must_be_positive(self):
        r = self.client.post("/provider/reports/p1", params={"days": 0})
        self.assertEqual(r.status_code, 422)

    def test_unknown_patient(self):
        r = self.client.post("/provider/reports/nobody")
        self.assertEqual(r.status_code, 404)

    def test_patients_cannot_generate_reports(self):
        self.act_as(PATIENT)
        r = self.client.post("/provider/reports/p1")
        self.assertEqual(r.status_code, 403)

    def test_export(self):
        r = self.client.get("/provider/reports/p1/export", params={"days": 14})
        self.assertEqual(r.status_code, 200)
        self.assertIn("Most Common Symptom: Fatigue", r.text)

    def test_roster_and_archive(self):
        items = self.client.get("/provider/patients/").json()["items"]
        self.assertEqual([p["userId"] for p in items], ["p1"])

        self.client.post("/provider/patients/p1/archive")
        self.assertEqual(self.client.get("/provider/patients/").json()["items"], [])


class TestReportFailure(RouteTestCase):
    def test_fetch_failure_gives_no_report(self):
        self.act_as(PROVIDER)
        real_db = self.db

        class FailAfterProfile:
            def collection(self, name):
                if name == "users":
                    return real_db.collection(name)
                return FailingFirestore().collection(name)

        firebase.db = FailAfterProfile()
        r = self.client.post("/provider/reports/p1")
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json()["detail"], "Could not generate report")


class TestAdminRoutes(RouteTestCase):
    def test_toggle_and_delete(self):
        self.act_as(ADMIN)
        r = self.client.post("/admin/users/p1/toggle")
        self.assertEqual(r.json(), {"userId": "p1", "isActive": False})

        self.assertEqual(len(self.client.get("/admin/users/").json()["items"]), 1)

        self.client.delete("/admin/users/p1")
        self.assertEqual(self.client.get("/admin/users/").json()["items"], [])

    def test_providers_are_not_admins(self):
        self.act_as(PROVIDER)
        self.assertEqual(self.client.get("/admin/users/").status_code, 403)


class TestAppointmentRoutes(RouteTestCase):
    def test_book_and_cancel(self):
        when = (datetime.now(timezone.utc) + timedelta(days=2)).isoformat()
        r = self.client.post("/appointments/", json={
            "patientId": "p1", "providerId": "dr1", "providerName": "Dr. Lee",
            "appointmentDateTime": when, "mode": "virtual",
        })
        self.assertEqual(r.status_code, 201)
        appt_id = r.json()["id"]

        upcoming = self.client.get("/appointments/", params={"category": "upcoming"}).json()["items"]
        self.assertEqual([a["appointmentId"] for a in upcoming], [appt_id])

        self.act_as(PROVIDER)
        self.assertEqual(len(self.client.get("/appointments/").json()["items"]), 1)
        self.client.post(f"/appointments/{appt_id}/cancel")

        self.act_as(PATIENT)
        cancelled = self.client.get("/appointments/", params={"category": "cancelled"}).json()["items"]
        self.assertEqual(cancelled[0]["status"], "cancelled")

    def test_cannot_book_for_strangers(self):
        r = self.client.post("/appointments/", json={
            "patientId": "p2", "providerId": "dr1",
            "appointmentDateTime": datetime.now(timezone.utc).isoformat(),
        })
        self.assertEqual(r.status_code, 403)


if __name__ == '__main__':
    unittest.main()
