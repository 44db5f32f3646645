import unittest
from datetime import date

from app.services.report_builder import exercise_compliance, generate_report, report_window
from app.services.symptoms import most_common_symptom, symptom_tokens
from record_factory import chat, dose, exercise, journal

TODAY = date(2024, 3, 10)


def _report(exercise_logs=(), doses=(), entries=(), chats=(), days=7):
    return generate_report("p1", "Alex Doe", list(exercise_logs), list(doses), list(entries), list(chats),
                           period_days=days, today=TODAY)


class TestGenerateReport(unittest.TestCase):
    def test_empty_inputs(self):
        r = _report()
        self.assertEqual(r.total_exercise_minutes, 0)
        self.assertEqual(r.exercise_compliance_percent, 0)
        self.assertEqual(r.medication_adherence_percent, 100)
        self.assertEqual(r.most_common_symptom, "None Reported")
        self.assertEqual(r.total_chat_interactions, 0)
        self.assertEqual(r.out_of_scope_interactions, 0)

    def test_period_dates(self):
        r = _report(days=7)
        self.assertEqual(r.generated_on, TODAY)
        self.assertEqual(r.period_end, TODAY)
        self.assertEqual(r.period_start, date(2024, 3, 4))

        one_day = _report(days=1)
        self.assertEqual(one_day.period_start, TODAY)

    def test_full_week_of_exercise_is_capped(self):
        r = _report(exercise_logs=[exercise(30) for _ in range(7)])
        self.assertEqual(r.total_exercise_minutes, 210)
        self.assertEqual(r.exercise_compliance_percent, 100)

    def test_partial_compliance(self):
        r = _report(exercise_logs=[exercise(75)])
        self.assertEqual(r.exercise_compliance_percent, 50)

    def test_chat_counts(self):
        chats = [
            chat("user", True),
            chat("assistant", True),
            chat("user", False),
            chat("assistant", False),
        ]
        r = _report(chats=chats)
        self.assertEqual(r.total_chat_interactions, 2)
        self.assertEqual(r.out_of_scope_interactions, 2)

    def test_medication_adherence(self):
        r = _report(doses=[dose("Taken")] * 7 + [dose("Missed")] * 3)
        self.assertEqual(r.medication_adherence_percent, 70)

    def test_same_input_same_report(self):
        args = dict(exercise_logs=[exercise(20)], doses=[dose("Missed")],
                    entries=[journal("Sad", "cough")], chats=[chat()])
        self.assertEqual(_report(**args), _report(**args))

    def test_rejects_zero_days(self):
        with self.assertRaises(ValueError):
            report_window(0, TODAY)


class TestCompliance(unittest.TestCase):
    def test_target_or_more_is_exactly_100(self):
        for days in (1, 7, 14, 30):
            target = 150 * days / 7
            self.assertEqual(exercise_compliance(int(target) + 1, days), 100)
            self.assertEqual(exercise_compliance(int(target * 3), days), 100)

    def test_scales_with_window_length(self):
        # 14-day target is 300 minutes
        self.assertEqual(exercise_compliance(150, 14), 50)

    def test_zero_minutes(self):
        self.assertEqual(exercise_compliance(0, 7), 0)


class TestSymptoms(unittest.TestCase):
    def test_most_frequent_is_capitalized(self):
        entries = [journal("Tired", "Fatigue, Nausea"), journal("Tired", "fatigue")]
        self.assertEqual(most_common_symptom(entries), "Fatigue")

    def test_semicolons_and_blanks(self):
        entries = [journal("Sad", " dizziness ;; chest tightness"), journal("Sad", "   "), journal("Sad", None)]
        self.assertEqual(symptom_tokens(entries), ["dizziness", "chest tightness"])

    def test_tie_goes_to_first_logged(self):
        entries = [journal("Sad", "nausea"), journal("Sad", "fatigue"), journal("Sad", "fatigue, nausea")]
        self.assertEqual(most_common_symptom(entries), "Nausea")

    def test_multiword_only_first_letter_upper(self):
        entries = [journal("Sad", "shortness of breath")]
        self.assertEqual(most_common_symptom(entries), "Shortness of breath")

    def test_nothing_reported(self):
        self.assertEqual(most_common_symptom([journal("Happy")]), "None Reported")
        self.assertEqual(most_common_symptom([]), "None Reported")


if __name__ == '__main__':
    unittest.main()
