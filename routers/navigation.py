# routers/navigation.py

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.auth import NavigateRequest


router = APIRouter(
    prefix="/navigation",
    tags=["Navigation"],
)


@router.get("/", summary="Tabs reachable for the current role and lockdown state")
def reachable(console: SessionManager = Depends(get_console)):
    return {"active_tab": console.active_tab, "tabs": console.reachable_tabs()}


@router.post("/", summary="Switch the active tab")
def navigate(payload: NavigateRequest, console: SessionManager = Depends(get_console)):
    return {"active_tab": console.navigate(payload.tab)}
