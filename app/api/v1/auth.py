from fastapi import APIRouter, Depends

from app.api.deps import get_auth_service, get_current_user, get_token
from app.schemas.auth import CurrentUser, SessionInfo
from app.schemas.notification import StatusMessage
from app.services.auth_service import AuthService

router = APIRouter()

@router.post("/session", response_model=SessionInfo)
async def start_session(
    token: str = Depends(get_token),
    service: AuthService = Depends(get_auth_service)
):
    return await service.start_session(token)

@router.get("/me", response_model=CurrentUser)
async def read_me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user

@router.delete("/session", response_model=StatusMessage)
async def end_session(
    token: str = Depends(get_token),
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    await service.end_session(token, current_user)
    return StatusMessage(status="success", message="Signed out")
