from fastapi import APIRouter, Body, Depends, HTTPException, Query

from app.api.deps import get_current_user, has_role
from app.models.appointment import AppointmentCategory, AppointmentIn
from app.services import appointment_store
from app.services.logger import get_logger

router = APIRouter(prefix="/appointments", tags=["appointments"])
logger = get_logger(__name__)


@router.get("/")
def list_appointments(
    category: AppointmentCategory = Query("upcoming"),
    user=Depends(get_current_user),
):
    """Providers see the appointments booked with them, patients their own."""
    field = "providerId" if has_role(user, ["provider"]) else "patientId"
    try:
        items = appointment_store.list_appointments(user["uid"], category, field=field)
    except Exception as e:
        logger.error("Error loading appointments: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"category": category, "items": [a.model_dump(mode="json", by_alias=True) for a in items]}


@router.post("/", status_code=201)
def create_appointment(
    payload: AppointmentIn = Body(...),
    user=Depends(get_current_user),
):
    if user["uid"] not in (payload.patient_id, payload.provider_id) and not has_role(user, ["admin"]):
        raise HTTPException(status_code=403, detail="Cannot book for other users")

    appointment_id = appointment_store.create_appointment(payload)
    return {"id": appointment_id, "status": "scheduled"}


@router.post("/{appointment_id}/cancel")
def cancel_appointment(appointment_id: str, user=Depends(get_current_user)):
    appt = appointment_store.get_appointment(appointment_id)
    if appt is None:
        raise HTTPException(status_code=404, detail="Appointment not found")

    if user["uid"] not in (appt.patient_id, appt.provider_id) and not has_role(user, ["admin"]):
        raise HTTPException(status_code=403, detail="Not authorized")

    appointment_store.cancel_appointment(appointment_id)
    return {"id": appointment_id, "status": "cancelled"}
