from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, UniqueConstraint
from typing import Optional
from datetime import date, datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    # One user may not register the same CNIC twice; enforced here so that
    # two concurrent creates cannot both succeed.
    __table_args__ = (
        UniqueConstraint("user_id", "cnic", name="uq_patients_user_cnic"),
    )

    patient_id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(index=True)
    name: str = Field(max_length=255)
    cnic: str = Field(max_length=13)  # ASCII digits only, never updated
    dob: date
    gender: str = Field(max_length=16)  # male | female
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
