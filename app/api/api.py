from fastapi import APIRouter
from app.api.v1 import auth, patients, profile

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(patients.router, prefix="/patients", tags=["patients"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
