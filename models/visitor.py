# models/visitor.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .enums import VisitorStatus, VisitType


class Visitor(BaseModel):
    id: str
    name: str
    resident_id: str
    resident_name: str
    expected_arrival: str
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: VisitorStatus = VisitorStatus.upcoming
    visit_type: VisitType = VisitType.friend


class VisitorCreate(BaseModel):
    name: str = Field(..., min_length=1)
    expected_arrival: str
    visit_type: VisitType = VisitType.friend
