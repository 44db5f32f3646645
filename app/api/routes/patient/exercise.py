from fastapi import APIRouter, Depends, Body, HTTPException, Query
from typing import Optional

from app.api.deps import ensure_owner, get_current_user, require_role, resolve_patient_id
from app.models.schemas import ExerciseLogIn
from app.services import record_store
from app.services.logger import get_logger

router = APIRouter(prefix="/exercise", tags=["exercise"])
logger = get_logger(__name__)


@router.post("/", status_code=201)
def log_exercise(
    payload: ExerciseLogIn = Body(...),
    user=Depends(require_role(["patient"])),
):
    try:
        log_id = record_store.add_exercise_log(
            user["uid"],
            payload.exercise_type,
            payload.duration,
            payload.intensity.value,
            payload.notes,
        )
    except Exception as e:
        logger.error("Error logging exercise: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"id": log_id}


@router.get("/")
def list_exercise_history(
    patient_id: Optional[str] = Query(None),
    user=Depends(get_current_user),
):
    """Exercise history, newest first."""
    uid = resolve_patient_id(user, patient_id)
    try:
        logs = record_store.fetch_exercise_logs(uid, descending=True)
    except Exception as e:
        logger.error("Error loading exercise history for %s: %s", uid, e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"items": [r.model_dump(mode="json", by_alias=True) for r in logs]}


@router.put("/{log_id}")
def update_exercise(
    log_id: str,
    payload: ExerciseLogIn = Body(...),
    user=Depends(require_role(["patient"])),
):
    ensure_owner(record_store.get_exercise_log(log_id), user, "Exercise log")

    record_store.update_exercise_log(log_id, payload.duration, payload.intensity.value, payload.exercise_type)
    return {"id": log_id, "status": "updated"}


@router.delete("/{log_id}")
def delete_exercise(log_id: str, user=Depends(require_role(["patient"]))):
    ensure_owner(record_store.get_exercise_log(log_id), user, "Exercise log")

    record_store.delete_exercise_log(log_id)
    return {"message": "Exercise log deleted"}
