from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import require_role
from app.services import user_store
from app.services.logger import get_logger

router = APIRouter(prefix="/admin/users", tags=["admin_users"])
logger = get_logger(__name__)


@router.get("/")
def list_users(user=Depends(require_role(["admin"]))):
    try:
        users = user_store.list_users()
    except Exception as e:
        logger.error("Error loading users: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"items": [u.model_dump(mode="json", by_alias=True) for u in users]}


@router.post("/{user_id}/toggle")
def toggle_user_status(user_id: str, user=Depends(require_role(["admin"]))):
    """Ban / unban: flips isActive."""
    target = user_store.get_user(user_id)
    if target is None:
        raise HTTPException(status_code=404, detail="User not found")

    new_status = not target.is_active
    user_store.set_active(user_id, new_status)
    return {"userId": user_id, "isActive": new_status}


@router.delete("/{user_id}")
def delete_user(user_id: str, user=Depends(require_role(["admin"]))):
    if user_store.get_user(user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    user_store.delete_user(user_id)
    return {"message": "User deleted"}
