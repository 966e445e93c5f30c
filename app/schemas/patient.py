from pydantic import BaseModel, ConfigDict, computed_field
from typing import Optional, List
from uuid import UUID
from datetime import date, datetime

from app.core.utils import format_cnic
from app.schemas.notification import StatusMessage

# Inputs are loosely typed on purpose: missing or blank values are reported
# per field by app.core.validators rather than rejected wholesale.

class PatientCreate(BaseModel):
    name: Optional[str] = None
    cnic: Optional[str] = None  # raw input, dashes allowed
    dob: Optional[date] = None
    gender: Optional[str] = None

class PatientUpdate(BaseModel):
    # cnic is write-once; sending it is an error rather than being ignored
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None

class PatientResponse(BaseModel):
    patient_id: UUID
    user_id: UUID
    name: str
    cnic: str
    dob: date
    gender: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def cnic_display(self) -> str:
        return format_cnic(self.cnic)

    class Config:
        from_attributes = True

class PatientList(BaseModel):
    email: Optional[str] = None
    patients: List[PatientResponse]
    count: int

class PatientMutationResponse(StatusMessage):
    patient: PatientResponse

class CNICCheck(BaseModel):
    cnic: str
    cnic_display: str
    exists: bool
