from fastapi import APIRouter, Depends, Body, HTTPException, Query
from typing import Optional

from app.api.deps import ensure_owner, get_current_user, require_role, resolve_patient_id
from app.models.schemas import JournalEntryIn
from app.services import record_store
from app.services.logger import get_logger

router = APIRouter(prefix="/journal", tags=["journal"])
logger = get_logger(__name__)


def _require_content(payload: JournalEntryIn):
    if not payload.has_content():
        raise HTTPException(status_code=400, detail="symptoms or freeTextEntry required")


@router.post("/", status_code=201)
def log_entry(
    payload: JournalEntryIn = Body(...),
    user=Depends(require_role(["patient"])),
):
    _require_content(payload)
    try:
        entry_id = record_store.add_journal_entry(
            user["uid"],
            payload.mood.value,
            payload.symptoms,
            payload.free_text,
            payload.diet_notes,
        )
    except Exception as e:
        logger.error("Error logging journal: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"id": entry_id}


@router.get("/")
def list_entries(
    patient_id: Optional[str] = Query(None),
    user=Depends(get_current_user),
):
    uid = resolve_patient_id(user, patient_id)
    try:
        entries = record_store.fetch_journal_entries(uid, descending=True)
    except Exception as e:
        logger.error("Error loading journal for %s: %s", uid, e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"items": [e.model_dump(mode="json", by_alias=True) for e in entries]}


@router.put("/{entry_id}")
def update_entry(
    entry_id: str,
    payload: JournalEntryIn = Body(...),
    user=Depends(require_role(["patient"])),
):
    ensure_owner(record_store.get_journal_entry(entry_id), user, "Journal entry")

    record_store.update_journal_entry(entry_id, payload.mood.value, payload.symptoms, payload.free_text)
    return {"id": entry_id, "status": "updated"}


@router.delete("/{entry_id}")
def delete_entry(entry_id: str, user=Depends(require_role(["patient"]))):
    ensure_owner(record_store.get_journal_entry(entry_id), user, "Journal entry")

    record_store.delete_journal_entry(entry_id)
    return {"message": "Journal deleted"}
