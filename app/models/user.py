"""Pydantic models for user profiles stored in the `users` collection.

This is NOT an auth model: roles for authorization come from the Firebase
custom claim `role`; `userType` mirrors it for the client's convenience.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserType(str, Enum):
    PATIENT = "patient"
    PROVIDER = "provider"
    ADMIN = "admin"


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field("", alias="userId")
    full_name: str = Field("", alias="fullName")
    email: Optional[EmailStr] = None
    user_type: UserType = Field(UserType.PATIENT, alias="userType")
    specialization: Optional[str] = None

    medical_history: Optional[str] = Field(None, alias="medicalHistory")
    allergies: Optional[str] = None
    emergency_contact_name: Optional[str] = Field(None, alias="emergencyContactName")
    emergency_contact_number: Optional[str] = Field(None, alias="emergencyContactNumber")

    is_active: bool = Field(True, alias="isActive")
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class PatientProfileUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(None, alias="fullName")
    medical_history: Optional[str] = Field(None, alias="medicalHistory")
    allergies: Optional[str] = None
    emergency_contact_name: Optional[str] = Field(None, alias="emergencyContactName")
    emergency_contact_number: Optional[str] = Field(None, alias="emergencyContactNumber")


class ProviderProfileUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(None, alias="fullName")
    specialization: Optional[str] = None
