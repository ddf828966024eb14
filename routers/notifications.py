# routers/notifications.py

from typing import List

from fastapi import APIRouter, Depends

from core.errors import EntityNotFound
from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.notification import Notification


router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


@router.get("/", response_model=List[Notification], summary="Active notifications, newest first")
def active(console: SessionManager = Depends(get_console)):
    return console.notifications()


@router.delete("/{notification_id}", status_code=204)
def dismiss(notification_id: str, console: SessionManager = Depends(get_console)):
    if not console.dismiss_notification(notification_id):
        raise EntityNotFound("Notification", notification_id)
