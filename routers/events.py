# routers/events.py

from typing import List

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console, get_current_session
from models.dorm_event import DormEvent
from models.user import Session


router = APIRouter(
    prefix="/events",
    tags=["Events"],
)


@router.get("/", response_model=List[DormEvent])
def list_events(
    console: SessionManager = Depends(get_console),
    session: Session = Depends(get_current_session),
):
    return console.store.list_events()


# -----------------------------------------------------
# JOIN (idempotent)
# -----------------------------------------------------
@router.post("/{event_id}/join", response_model=DormEvent)
def join(event_id: str, console: SessionManager = Depends(get_console)):
    return console.join_event(event_id)
