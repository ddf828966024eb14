# models/notification.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str
    created_at: datetime
    expires_at: datetime
    tab_target: Optional[str] = None
