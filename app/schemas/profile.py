from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import date, datetime

from app.schemas.notification import StatusMessage

class ProfileSave(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[date] = None
    # Only honoured when the profile is first created.
    cnic: Optional[str] = None

class ProfileResponse(BaseModel):
    id: UUID
    email: Optional[str] = None
    full_name: str
    phone: Optional[str] = None
    gender: Optional[str] = None
    cnic: str
    dob: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ProfileState(BaseModel):
    email: Optional[str] = None
    exists: bool
    profile: Optional[ProfileResponse] = None

class ProfileSaveResponse(StatusMessage):
    created: bool
    profile: ProfileResponse
