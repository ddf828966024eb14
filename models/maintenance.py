# models/maintenance.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .enums import MaintenanceCategory, MaintenanceStatus, Priority, Sentiment


class MaintenanceRequest(BaseModel):
    id: str
    student_id: str
    student_name: str
    room_number: str
    category: MaintenanceCategory = MaintenanceCategory.other
    description: str
    status: MaintenanceStatus = MaintenanceStatus.pending
    priority: Priority = Priority.medium
    created_at: datetime
    is_preventative: bool = False

    # Annotations (AI analysis, resident feedback)
    severity: Optional[int] = Field(None, ge=1, le=10)
    estimated_cost: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    sentiment: Optional[Sentiment] = None


class MaintenanceCreate(BaseModel):
    category: MaintenanceCategory = MaintenanceCategory.other
    description: str = Field(..., min_length=1)
    priority: Optional[Priority] = None
    # optional base64 photo, analysed before the request is filed
    image_base64: Optional[str] = None
    image_mime_type: Optional[str] = None


class MaintenanceFeedback(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    feedback: str = ""
