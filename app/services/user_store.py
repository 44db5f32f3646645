from __future__ import annotations

from typing import Optional

from google.cloud.firestore import And, FieldFilter
from pydantic import ValidationError

from app.core.firebase import get_db
from app.models.user import User, UserType
from app.services.logger import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"


def _to_user(doc) -> Optional[User]:
    data = doc.to_dict() or {}
    data.setdefault("userId", doc.id)
    try:
        return User.model_validate(data)
    except ValidationError as e:
        logger.warning("Skipping malformed user %s: %s", doc.id, e.errors()[:1])
        return None


def get_user(user_id: str, db=None) -> Optional[User]:
    db = db or get_db()
    doc = db.collection(USERS_COLLECTION).document(user_id).get()
    if not doc.exists:
        return None
    return _to_user(doc)


def list_users(db=None) -> list[User]:
    db = db or get_db()
    users = (_to_user(d) for d in db.collection(USERS_COLLECTION).stream())
    return [u for u in users if u is not None]


def list_active_patients(db=None) -> list[User]:
    db = db or get_db()
    docs = (
        db.collection(USERS_COLLECTION)
        .where(filter=And(filters=[
            FieldFilter("userType", "==", UserType.PATIENT.value),
            FieldFilter("isActive", "==", True),
        ]))
        .stream()
    )
    users = (_to_user(d) for d in docs)
    return [u for u in users if u is not None]


def update_profile(user_id: str, updates: dict, db=None):
    """Applies only the fields that were actually sent."""
    db = db or get_db()
    if updates:
        db.collection(USERS_COLLECTION).document(user_id).update(updates)


def set_active(user_id: str, active: bool, db=None):
    db = db or get_db()
    db.collection(USERS_COLLECTION).document(user_id).update({"isActive": active})


def delete_user(user_id: str, db=None):
    db = db or get_db()
    db.collection(USERS_COLLECTION).document(user_id).delete()
