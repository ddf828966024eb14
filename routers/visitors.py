# routers/visitors.py

from typing import List

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.visitor import Visitor, VisitorCreate


router = APIRouter(
    prefix="/visitors",
    tags=["Visitors"],
)


@router.get("/", response_model=List[Visitor])
def list_visitors(console: SessionManager = Depends(get_console)):
    return console.visitors()


# -----------------------------------------------------
# REGISTER A GUEST PASS
# -----------------------------------------------------
@router.post("/", response_model=Visitor, status_code=201)
def register(payload: VisitorCreate, console: SessionManager = Depends(get_console)):
    return console.register_visitor(payload.name, payload.expected_arrival, payload.visit_type)


# -----------------------------------------------------
# GATE OPERATIONS (gate-access)
# -----------------------------------------------------
@router.post("/{visitor_id}/check-in", response_model=Visitor)
def check_in(visitor_id: str, console: SessionManager = Depends(get_console)):
    return console.check_in_visitor(visitor_id)


@router.post("/{visitor_id}/check-out", response_model=Visitor)
def check_out(visitor_id: str, console: SessionManager = Depends(get_console)):
    return console.check_out_visitor(visitor_id)


@router.post("/{visitor_id}/deny", response_model=Visitor)
def deny(visitor_id: str, console: SessionManager = Depends(get_console)):
    return console.deny_visitor(visitor_id)
