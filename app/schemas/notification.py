from pydantic import BaseModel
from typing import Dict, Literal

NotificationStatus = Literal["success", "danger", "warning", "info"]

class StatusMessage(BaseModel):
    status: NotificationStatus
    message: str

class ErrorResponse(StatusMessage):
    errors: Dict[str, str] = {}
