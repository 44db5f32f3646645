"""
API dependencies (Firebase auth verification and role checks).

Roles come from the Firebase custom claim `role`:
    {'role': 'patient'} | {'role': 'provider'} | {'role': 'admin'}
"""

from typing import List, Callable

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth

# FastAPI security scheme (Swagger + header binding)
security = HTTPBearer(auto_error=True)

STAFF_ROLES = ("provider", "admin")


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    """
    Verify Firebase ID token from Authorization header.

    Expects:
        Authorization: Bearer <id_token>
    """
    try:
        id_token = credentials.credentials
        decoded = auth.verify_id_token(id_token)
        return decoded
    except Exception as exc:
        raise HTTPException(
            status_code=401,
            detail="Invalid ID token",
        ) from exc


def has_role(user: dict, allowed) -> bool:
    role = user.get("role") or user.get("roles")
    if isinstance(role, list):
        return any(r in allowed for r in role)
    return role in allowed


def require_role(allowed: List[str]) -> Callable:
    """
    Return a FastAPI dependency that enforces a user's role.
    """

    def _checker(user=Depends(get_current_user)):
        if not has_role(user, allowed):
            raise HTTPException(
                status_code=403,
                detail="Insufficient permissions",
            )

        return user

    return _checker


def resolve_patient_id(user: dict, patient_id: str | None) -> str:
    """
    Patients may only act on their own data; providers and admins may name
    any patient (and must, since they have no records of their own).
    """
    if patient_id is None or patient_id == user["uid"]:
        return user["uid"]
    if not has_role(user, STAFF_ROLES):
        raise HTTPException(status_code=403, detail="Cannot access another patient's records")
    return patient_id


def ensure_owner(doc: dict | None, user: dict, label: str = "Record") -> dict:
    """404 for missing documents, 403 when the caller does not own it."""
    if doc is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    if doc.get("userId") != user["uid"]:
        raise HTTPException(status_code=403, detail="Not authorized")
    return doc
