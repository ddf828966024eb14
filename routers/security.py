# routers/security.py

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.auth import LockdownStatus


router = APIRouter(
    prefix="/security",
    tags=["Security"],
)


def _status(console: SessionManager) -> LockdownStatus:
    return LockdownStatus(state=console.lockdown.state, engaged_by=console.lockdown.engaged_by)


@router.get("/lockdown", response_model=LockdownStatus)
def lockdown_status(console: SessionManager = Depends(get_console)):
    return _status(console)


# -----------------------------------------------------
# TOGGLE LOCKDOWN (security-lockdown)
# -----------------------------------------------------
@router.post("/lockdown/toggle", response_model=LockdownStatus)
def toggle(console: SessionManager = Depends(get_console)):
    console.toggle_lockdown()
    return _status(console)


@router.post("/lockdown/engage", response_model=LockdownStatus)
def engage(console: SessionManager = Depends(get_console)):
    console.enter_lockdown()
    return _status(console)


@router.post("/lockdown/release", response_model=LockdownStatus)
def release(console: SessionManager = Depends(get_console)):
    console.exit_lockdown()
    return _status(console)
