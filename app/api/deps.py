from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthError
from app.core.redis import SessionStore, get_session_store
from app.db.session import get_session
from app.schemas.auth import CurrentUser
from app.services.auth_service import AuthService
from app.services.patient_service import PatientService
from app.services.profile_service import ProfileService

bearer_scheme = HTTPBearer(auto_error=False)

def get_token(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> str:
    if creds is None or not creds.credentials:
        raise AuthError()
    return creds.credentials

def get_auth_service(store: SessionStore = Depends(get_session_store)) -> AuthService:
    return AuthService(store)

async def get_current_user(
    token: str = Depends(get_token),
    service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    return await service.current_user(token)

async def get_patient_service(session: AsyncSession = Depends(get_session)) -> PatientService:
    return PatientService(session)

async def get_profile_service(session: AsyncSession = Depends(get_session)) -> ProfileService:
    return ProfileService(session)
