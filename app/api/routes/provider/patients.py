from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import require_role
from app.services import user_store
from app.services.logger import get_logger

router = APIRouter(prefix="/provider/patients", tags=["provider_patients"])
logger = get_logger(__name__)


@router.get("/")
def list_patients(user=Depends(require_role(["provider", "admin"]))):
    """Active patients only; archived patients drop off the roster."""
    try:
        patients = user_store.list_active_patients()
    except Exception as e:
        logger.error("Error loading patients: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"items": [p.model_dump(mode="json", by_alias=True) for p in patients]}


@router.get("/{patient_id}")
def get_patient(patient_id: str, user=Depends(require_role(["provider", "admin"]))):
    patient = user_store.get_user(patient_id)
    if patient is None:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient.model_dump(mode="json", by_alias=True)


@router.post("/{patient_id}/archive")
def archive_patient(patient_id: str, user=Depends(require_role(["provider", "admin"]))):
    if user_store.get_user(patient_id) is None:
        raise HTTPException(status_code=404, detail="Patient not found")

    user_store.set_active(patient_id, False)
    return {"message": "Patient archived"}
