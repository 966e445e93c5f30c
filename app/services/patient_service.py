from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from sqlmodel import select

from app.core.exceptions import BackendError, ConflictError, NotFoundError
from app.core.logger import logger
from app.core.utils import cnic_digits, utcnow
from app.core.validators import (
    ensure_valid,
    validate_dob,
    validate_gender,
    validate_name,
    validate_patient_fields,
)
from app.db.models import Patient
from app.schemas.patient import PatientCreate, PatientUpdate

CNIC_TAKEN = "This CNIC already exists for this user"


class PatientService:
    """Patient records, always scoped to the owning user."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_for_user(self, owner_id: UUID, cnic: str) -> bool:
        stmt = select(Patient.patient_id).where(
            Patient.user_id == owner_id,
            Patient.cnic == cnic,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError:
            logger.exception("CNIC lookup failed for user %s", owner_id)
            raise BackendError("Unable to check CNIC")
        return result.first() is not None

    async def create(self, data: PatientCreate, owner_id: UUID, today: Optional[date] = None) -> Patient:
        # Untruncated: a 14-digit input must fail, not lose its last digit.
        cnic = cnic_digits(data.cnic)
        validate_patient_fields(data.name, cnic, data.dob, data.gender, today=today)

        if await self.exists_for_user(owner_id, cnic):
            raise ConflictError(CNIC_TAKEN, errors={"cnic": CNIC_TAKEN})

        patient = Patient(
            user_id=owner_id,
            name=data.name.strip(),
            cnic=cnic,
            dob=data.dob,
            gender=data.gender,
        )
        self.session.add(patient)
        try:
            await self.session.commit()
        except IntegrityError:
            # Lost a race against another create with the same CNIC.
            await self.session.rollback()
            raise ConflictError(CNIC_TAKEN, errors={"cnic": CNIC_TAKEN})
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Error saving patient for user %s", owner_id)
            raise BackendError("Unable to save patient")
        await self.session.refresh(patient)

        logger.info("Patient %s created for user %s", patient.patient_id, owner_id)
        return patient

    async def list_for_user(self, owner_id: UUID) -> List[Patient]:
        stmt = (
            select(Patient)
            .where(Patient.user_id == owner_id)
            .order_by(Patient.created_at.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError:
            logger.exception("Error fetching patients for user %s", owner_id)
            raise BackendError("Unable to load patients")
        return list(result.scalars().all())

    async def get_by_id(self, patient_id: UUID, owner_id: UUID) -> Patient:
        stmt = select(Patient).where(
            Patient.patient_id == patient_id,
            Patient.user_id == owner_id,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError:
            logger.exception("Error fetching patient %s", patient_id)
            raise BackendError("Unable to load patient")
        patient = result.scalars().first()
        if not patient:
            raise NotFoundError("Patient not found")
        return patient

    async def update(
        self,
        patient_id: UUID,
        owner_id: UUID,
        data: PatientUpdate,
        today: Optional[date] = None,
    ) -> Tuple[Patient, bool]:
        """Apply an edit; returns the record and whether anything was written.

        The stored record is the pre-edit snapshot: when name, dob and
        gender all match it no write happens and ``updated_at`` is kept.
        """
        ensure_valid({
            "name": (validate_name, (data.name,)),
            "dob": (validate_dob, (data.dob, today)),
            "gender": (validate_gender, (data.gender,)),
        })
        patient = await self.get_by_id(patient_id, owner_id)

        changes = {
            "name": data.name.strip(),
            "dob": data.dob,
            "gender": data.gender,
        }
        changes = {k: v for k, v in changes.items() if getattr(patient, k) != v}
        if not changes:
            return patient, False

        for key, value in changes.items():
            setattr(patient, key, value)
        patient.updated_at = utcnow()
        self.session.add(patient)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Error updating patient %s", patient_id)
            raise BackendError("Failed to save changes")
        await self.session.refresh(patient)

        logger.info("Patient %s updated (%s)", patient_id, ", ".join(sorted(changes)))
        return patient, True

    async def delete(self, patient_id: UUID, owner_id: UUID) -> None:
        # An unknown id fails exactly like a store error.
        stmt = delete(Patient).where(
            Patient.patient_id == patient_id,
            Patient.user_id == owner_id,
        )
        try:
            result = await self.session.execute(stmt)
            if result.rowcount != 1:
                await self.session.rollback()
                logger.error("Error deleting patient %s: no matching row", patient_id)
                raise BackendError("Failed to delete patient.")
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Error deleting patient %s", patient_id)
            raise BackendError("Failed to delete patient.")

        logger.info("Patient %s deleted", patient_id)
