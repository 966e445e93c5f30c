from sqlmodel import SQLModel
from .patient import Patient
from .profile import Profile

__all__ = [
    "SQLModel",
    "Patient",
    "Profile",
]
