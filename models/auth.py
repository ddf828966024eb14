# models/auth.py

from typing import Optional
from pydantic import BaseModel

from .enums import LockdownState, Theme
from .user import SessionRead


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    session: SessionRead
    active_tab: str


class ImpersonateRequest(BaseModel):
    user_id: str


class NavigateRequest(BaseModel):
    tab: str


class LockdownStatus(BaseModel):
    state: LockdownState
    engaged_by: Optional[str] = None


class ThemePreference(BaseModel):
    theme: Theme
