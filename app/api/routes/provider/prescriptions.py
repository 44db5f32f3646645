from fastapi import APIRouter, Depends, Body, HTTPException

from app.api.deps import require_role
from app.models.schemas import PrescriptionIn
from app.services import record_store
from app.services.logger import get_logger

router = APIRouter(prefix="/provider/prescriptions", tags=["provider_prescriptions"])
logger = get_logger(__name__)


@router.post("/", status_code=201)
def set_prescription(
    payload: PrescriptionIn = Body(...),
    user=Depends(require_role(["provider"])),
):
    """Creates a Pending medication reminder for the patient."""
    try:
        reminder_id = record_store.add_prescription(
            payload.patient_id,
            payload.medication_name,
            payload.dosage,
            payload.frequency,
            payload.time_of_day,
        )
    except Exception as e:
        logger.error("Error setting prescription: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"message": "Prescription saved", "id": reminder_id}
