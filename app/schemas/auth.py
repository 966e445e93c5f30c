from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

class CurrentUser(BaseModel):
    id: UUID
    email: Optional[str] = None

class SessionInfo(BaseModel):
    user: CurrentUser
    expires_at: datetime
