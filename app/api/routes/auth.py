"""Authentication and profile routes.

The mobile client signs in with Firebase; the backend only verifies the
token and serves the caller's `users/{uid}` profile.
"""
from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from app.api.deps import get_current_user, has_role
from app.models.user import PatientProfileUpdate, ProviderProfileUpdate
from app.services import user_store

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me")
async def get_me(user=Depends(get_current_user)):
    return {"uid": user.get("uid"), "email": user.get("email"), "role": user.get("role")}


@router.get("/profile")
def get_profile(user=Depends(get_current_user)):
    profile = user_store.get_user(user["uid"])
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile.model_dump(mode="json", by_alias=True)


@router.put("/profile")
def update_profile(data: dict = Body(...), user=Depends(get_current_user)):
    """Providers may edit name/specialization, patients their medical details."""
    model = ProviderProfileUpdate if has_role(user, ["provider"]) else PatientProfileUpdate
    try:
        updates = model.model_validate(data).model_dump(by_alias=True, exclude_unset=True)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    user_store.update_profile(user["uid"], updates)
    return {"message": "Profile updated", "fields": sorted(updates)}
