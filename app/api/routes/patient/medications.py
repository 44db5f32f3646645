from fastapi import APIRouter, Depends, Body, HTTPException, Query
from typing import Optional

from app.api.deps import ensure_owner, get_current_user, require_role, resolve_patient_id
from app.models.schemas import DoseStatusUpdate
from app.services import record_store
from app.services.logger import get_logger
from app.services.progress import adherence_rate

router = APIRouter(prefix="/medications", tags=["medications"])
logger = get_logger(__name__)


@router.get("/")
def daily_schedule(
    patient_id: Optional[str] = Query(None),
    user=Depends(get_current_user),
):
    """
    The patient's medication reminders (newest first) plus the adherence
    rate across them.
    """
    uid = resolve_patient_id(user, patient_id)
    try:
        doses = record_store.fetch_dose_events(uid, descending=True)
    except Exception as e:
        logger.error("Error loading medication schedule for %s: %s", uid, e)
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "adherenceRate": adherence_rate(doses),
        "items": [d.model_dump(mode="json", by_alias=True) for d in doses],
    }


@router.patch("/{reminder_id}/status")
def update_status(
    reminder_id: str,
    payload: DoseStatusUpdate = Body(...),
    user=Depends(require_role(["patient"])),
):
    ensure_owner(record_store.get_dose_event(reminder_id), user, "Medication reminder")

    record_store.update_dose_status(reminder_id, payload.status)
    return {"id": reminder_id, "status": payload.status.value}
