from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from app.api.deps import get_current_user, resolve_patient_id
from app.models.report import WeeklySummary
from app.services import record_store
from app.services.logger import get_logger
from app.services.progress import WEEK_LABEL, compute_weekly_summary
from app.services.time_utils import local_tz, rolling_window_start

router = APIRouter(prefix="/progress", tags=["progress"])
logger = get_logger(__name__)


@router.get("/weekly", response_model=WeeklySummary)
def weekly_progress(
    patient_id: Optional[str] = Query(None),
    user=Depends(get_current_user),
):
    """Exercise, medication and mood summary for the last 7 days."""
    uid = resolve_patient_id(user, patient_id)
    start = rolling_window_start(7)

    try:
        exercise, doses, journal = record_store.fetch_summary_inputs(uid, start)
    except Exception as e:
        logger.error("Error loading progress for %s: %s", uid, e)
        raise HTTPException(status_code=500, detail="Could not load weekly progress")

    return compute_weekly_summary(exercise, doses, journal, WEEK_LABEL, local_tz())
