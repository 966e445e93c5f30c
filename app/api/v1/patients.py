from fastapi import APIRouter, Depends, Query
from uuid import UUID

from app.api.deps import get_current_user, get_patient_service
from app.core.utils import cnic_digits, format_cnic
from app.core.validators import ensure_valid, validate_cnic
from app.schemas.auth import CurrentUser
from app.schemas.notification import StatusMessage
from app.schemas.patient import (
    CNICCheck,
    PatientCreate,
    PatientList,
    PatientMutationResponse,
    PatientResponse,
    PatientUpdate,
)
from app.services.patient_service import PatientService

router = APIRouter()

@router.get("/", response_model=PatientList)
async def list_patients(
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service)
):
    patients = await service.list_for_user(current_user.id)
    return PatientList(
        email=current_user.email,
        patients=[PatientResponse.model_validate(p) for p in patients],
        count=len(patients),
    )

@router.post("/", response_model=PatientMutationResponse, status_code=201)
async def create_patient(
    payload: PatientCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service)
):
    patient = await service.create(payload, current_user.id)
    return PatientMutationResponse(
        status="success",
        message="Patient saved successfully.",
        patient=PatientResponse.model_validate(patient),
    )

@router.get("/exists", response_model=CNICCheck)
async def cnic_exists(
    cnic: str = Query(..., description="Raw CNIC, dashes allowed"),
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service)
):
    digits = cnic_digits(cnic)
    ensure_valid({"cnic": (validate_cnic, (digits,))})
    exists = await service.exists_for_user(current_user.id, digits)
    return CNICCheck(cnic=digits, cnic_display=format_cnic(digits), exists=exists)

@router.get("/{patient_id}", response_model=PatientResponse)
async def read_patient(
    patient_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service)
):
    patient = await service.get_by_id(patient_id, current_user.id)
    return PatientResponse.model_validate(patient)

@router.put("/{patient_id}", response_model=PatientMutationResponse)
async def update_patient(
    patient_id: UUID,
    payload: PatientUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service)
):
    patient, changed = await service.update(patient_id, current_user.id, payload)
    if changed:
        status, message = "success", "Changes saved successfully."
    else:
        status, message = "info", "No changes to save."
    return PatientMutationResponse(
        status=status,
        message=message,
        patient=PatientResponse.model_validate(patient),
    )

@router.delete("/{patient_id}", response_model=StatusMessage)
async def delete_patient(
    patient_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: PatientService = Depends(get_patient_service)
):
    await service.delete(patient_id, current_user.id)
    return StatusMessage(status="success", message="Patient deleted successfully")
