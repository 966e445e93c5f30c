from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_profile_service
from app.schemas.auth import CurrentUser
from app.schemas.profile import ProfileResponse, ProfileSave, ProfileSaveResponse, ProfileState
from app.services.profile_service import ProfileService

router = APIRouter()

@router.get("", response_model=ProfileState)
async def read_profile(
    current_user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    profile = await service.load(current_user.id)
    return ProfileState(
        email=current_user.email,
        exists=profile is not None,
        profile=ProfileResponse.model_validate(profile) if profile else None,
    )

@router.put("", response_model=ProfileSaveResponse)
async def save_profile(
    payload: ProfileSave,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    profile, created = await service.save(current_user, payload)
    return ProfileSaveResponse(
        status="success",
        message="Profile saved successfully",
        created=created,
        profile=ProfileResponse.model_validate(profile),
    )
