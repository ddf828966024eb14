# routers/preferences.py

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.auth import ThemePreference


router = APIRouter(
    prefix="/preferences",
    tags=["Preferences"],
)


@router.get("/theme", response_model=ThemePreference)
def get_theme(console: SessionManager = Depends(get_console)):
    return ThemePreference(theme=console.theme())


@router.post("/theme/toggle", response_model=ThemePreference)
def toggle_theme(console: SessionManager = Depends(get_console)):
    return ThemePreference(theme=console.toggle_theme())
