from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from app.core.utils import utcnow

class Profile(SQLModel, table=True):
    __tablename__ = "profiles"
    id: UUID = Field(primary_key=True)  # same as the auth user id
    email: Optional[str] = None
    full_name: str
    phone: Optional[str] = None
    gender: Optional[str] = None  # male | female | other
    cnic: str = Field(max_length=13)  # written by the insert only
    dob: Optional[date] = None
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
