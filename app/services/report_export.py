from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from app.core.config import settings
from app.models.report import PatientReport


def render_report_text(report: PatientReport) -> str:
    """Plain-text layout of a patient report, one field per line."""
    lines = [
        "Cardiac Rehabilitation Progress Report",
        "=" * 60,
        f"Patient: {report.patient_name} ({report.patient_id})",
        f"Generated: {report.generated_on.isoformat()}",
        f"Period: {report.period_start.isoformat()} to {report.period_end.isoformat()}",
        "-" * 60,
        f"Total Exercise: {report.total_exercise_minutes} min",
        f"Exercise Compliance: {report.exercise_compliance_percent}%",
        f"Medication Adherence: {report.medication_adherence_percent}%",
        f"Most Common Symptom: {report.most_common_symptom}",
        "-" * 60,
        f"Chatbot Interactions: {report.total_chat_interactions}",
        f"Out-of-Scope Interactions: {report.out_of_scope_interactions}",
    ]
    return "\n".join(lines) + "\n"


def export_report_to_txt(report: PatientReport, out_dir: str | None = None) -> str:
    """
    Writes the report to a text file and returns the saved file path.
    """
    out_dir = out_dir or settings.REPORT_EXPORT_DIR
    Path(out_dir).mkdir(parents=True, exist_ok=True)
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    file_path = Path(out_dir) / f"report_{report.patient_id}_{ts}.txt"

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(render_report_text(report))

    return str(file_path)
