# routers/payments.py

from typing import List

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.payment import FeeOverride, Payment


router = APIRouter(
    prefix="/payments",
    tags=["Payments"],
)


@router.get("/", response_model=List[Payment])
def list_payments(console: SessionManager = Depends(get_console)):
    return console.payments()


@router.post("/{payment_id}/settle", response_model=Payment)
def settle(payment_id: str, console: SessionManager = Depends(get_console)):
    return console.settle_payment(payment_id)


@router.patch("/{payment_id}/amount", response_model=Payment, summary="Override an invoice amount")
def override(payment_id: str, payload: FeeOverride, console: SessionManager = Depends(get_console)):
    return console.override_fee(payment_id, payload.amount, payload.reason)
