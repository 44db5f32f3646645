"""Provider report centre.

A report covers [today - days + 1, today] in the clinic's local calendar.
If any of the record fetches fails, no report is produced.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from app.api.deps import require_role
from app.models.report import PatientReport
from app.services import record_store, user_store
from app.services.logger import get_logger, log_debug
from app.services.report_builder import generate_report, report_window
from app.services.report_export import export_report_to_txt, render_report_text
from app.services.time_utils import day_start, local_today, local_tz

router = APIRouter(prefix="/provider/reports", tags=["provider_reports"])
logger = get_logger(__name__)


def build_patient_report(patient_id: str, days: int) -> PatientReport:
    patient = user_store.get_user(patient_id)
    if patient is None:
        raise HTTPException(status_code=404, detail="Patient not found")

    tz = local_tz()
    today = local_today(tz)
    start_date, _ = report_window(days, today)

    try:
        exercise, doses, journal, chats = record_store.fetch_report_inputs(
            patient_id, day_start(start_date, tz)
        )
    except Exception as e:
        logger.error("Error generating report for %s: %s", patient_id, e)
        raise HTTPException(status_code=500, detail="Could not generate report")

    report = generate_report(
        patient_id,
        patient.full_name,
        exercise,
        doses,
        journal,
        chats,
        period_days=days,
        today=today,
    )
    log_debug("report_generated", report.model_dump(mode="json"))
    return report


@router.post("/{patient_id}", response_model=PatientReport)
def create_report(
    patient_id: str,
    days: int = Query(7, ge=1, le=365, description="Days covered, ending today"),
    save: bool = Query(False, description="Also store the report in Firestore"),
    user=Depends(require_role(["provider"])),
):
    report = build_patient_report(patient_id, days)

    if save:
        try:
            report_id = record_store.save_report(report)
            logger.info("Saved report patient_reports/%s", report_id)
        except Exception as e:
            logger.warning("Report save failed: %s", e)

    return report


@router.get("/{patient_id}/export", response_class=PlainTextResponse)
def export_report(
    patient_id: str,
    days: int = Query(7, ge=1, le=365),
    archive: bool = Query(False, description="Also write the text file to the export directory"),
    user=Depends(require_role(["provider"])),
):
    """Plain-text version of the report for sharing."""
    report = build_patient_report(patient_id, days)

    if archive:
        try:
            path = export_report_to_txt(report)
            logger.info("Report archived to %s", path)
        except OSError as e:
            logger.warning("Report archive failed: %s", e)

    return PlainTextResponse(render_report_text(report))
