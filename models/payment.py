# models/payment.py

from typing import Optional
from pydantic import BaseModel, Field

from .enums import PaymentStatus


class Payment(BaseModel):
    id: str
    student_id: str
    amount: float = Field(..., ge=0)
    status: PaymentStatus = PaymentStatus.pending
    due_date: str
    description: str
    # assigned exactly once, when the payment becomes Paid
    settlement_reference: Optional[str] = None


class FeeOverride(BaseModel):
    amount: float = Field(..., ge=0)
    reason: str = ""
