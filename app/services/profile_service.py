from datetime import date
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from sqlmodel import select

from app.core.exceptions import BackendError, FieldValidationError, NotFoundError, RequiredError
from app.core.logger import logger
from app.core.utils import clean_optional, cnic_digits, utcnow
from app.core.validators import (
    PROFILE_GENDERS,
    collect_errors,
    ensure_valid,
    validate_cnic,
    validate_dob,
    validate_gender,
)
from app.db.models import Profile
from app.schemas.auth import CurrentUser
from app.schemas.profile import ProfileSave


def _require_full_name(value: Optional[str]) -> str:
    if not value or not value.strip():
        raise RequiredError("Full name is required")
    return value.strip()


def _optional_gender(value: Optional[str]) -> Optional[str]:
    return validate_gender(value, PROFILE_GENDERS) if value else None


def _optional_dob(value: Optional[date], today: Optional[date] = None) -> Optional[date]:
    return validate_dob(value, today) if value else None


class ProfileService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def load(self, user_id) -> Optional[Profile]:
        """A missing row is not an error: it means the profile is not created yet."""
        try:
            result = await self.session.execute(select(Profile).where(Profile.id == user_id))
        except SQLAlchemyError:
            logger.exception("Error loading profile %s", user_id)
            raise BackendError("Unable to load profile")
        return result.scalars().first()

    async def save(self, user: CurrentUser, data: ProfileSave, today: Optional[date] = None) -> Tuple[Profile, bool]:
        """Create the caller's profile or update its mutable fields.

        Returns the stored profile and whether it was created by this call.
        Existence is decided by the UPDATE itself on every call, so the
        CNIC can only ever be written by the INSERT branch.
        """
        cnic = cnic_digits(data.cnic)
        errors = collect_errors({
            "full_name": (_require_full_name, (data.full_name,)),
            "gender": (_optional_gender, (clean_optional(data.gender),)),
            "dob": (_optional_dob, (data.dob, today)),
        })
        if errors:
            # Report the CNIC alongside the rest when this save would create the row.
            if await self.load(user.id) is None:
                errors.update(collect_errors({"cnic": (validate_cnic, (cnic,))}))
            raise FieldValidationError(errors=errors)

        fields = {
            "full_name": data.full_name.strip(),
            "phone": clean_optional(data.phone),
            "gender": clean_optional(data.gender),
            "dob": data.dob,
        }

        if await self._update_existing(user, fields):
            return await self._reload(user), False

        ensure_valid({"cnic": (validate_cnic, (cnic,))})

        profile = Profile(id=user.id, email=user.email, cnic=cnic, updated_at=utcnow(), **fields)
        self.session.add(profile)
        try:
            await self.session.commit()
        except IntegrityError:
            # Another save created the row first: fall back to the update path.
            await self.session.rollback()
            if await self._update_existing(user, fields):
                return await self._reload(user), False
            raise BackendError("Unable to save profile")
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Error creating profile %s", user.id)
            raise BackendError("Unable to save profile")
        await self.session.refresh(profile)

        logger.info("Profile %s created", user.id)
        return profile, True

    async def _update_existing(self, user: CurrentUser, fields: dict) -> bool:
        # Never includes cnic or email.
        stmt = (
            update(Profile)
            .where(Profile.id == user.id)
            .values(**fields, updated_at=utcnow())
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception("Error updating profile %s", user.id)
            raise BackendError("Unable to save profile")
        if result.rowcount:
            logger.info("Profile %s updated", user.id)
            return True
        return False

    async def _reload(self, user: CurrentUser) -> Profile:
        profile = await self.load(user.id)
        if profile is None:
            raise NotFoundError("Profile not found")
        # The bulk UPDATE bypasses the identity map.
        await self.session.refresh(profile)
        return profile
