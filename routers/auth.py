# routers/auth.py

from fastapi import APIRouter, Depends

from core.logging_config import logger
from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.auth import ImpersonateRequest, LoginRequest, LoginResponse
from models.user import SessionRead


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


def session_read(console: SessionManager) -> SessionRead:
    session = console.require_session()
    return SessionRead(
        user_id=session.user_id,
        name=session.name,
        email=session.email,
        role=session.role,
        permissions=sorted(session.permissions, key=lambda p: p.value),
        points=session.points,
        level=session.level,
        check_in_status=session.check_in_status,
        assigned_room_id=session.assigned_room_id,
        impersonated_by=session.impersonated_by,
        active_tab=console.active_tab,
    )


# -----------------------------------------------------
# POST /auth/login
# -----------------------------------------------------
@router.post("/login", response_model=LoginResponse, summary="Sign in with email + access key")
def login(payload: LoginRequest, console: SessionManager = Depends(get_console)):
    console.authenticate(payload.email, payload.password)
    return LoginResponse(session=session_read(console), active_tab=console.active_tab)


# -----------------------------------------------------
# POST /auth/logout
# -----------------------------------------------------
@router.post("/logout", summary="Terminate the active session")
def logout(console: SessionManager = Depends(get_console)):
    return {"signed_out": console.logout()}


# -----------------------------------------------------
# POST /auth/restore
# Rehydrate from the persisted session record
# -----------------------------------------------------
@router.post("/restore", response_model=LoginResponse)
def restore(console: SessionManager = Depends(get_console)):
    if console.session is None:
        console.restore_session()
    return LoginResponse(session=session_read(console), active_tab=console.active_tab)


# -----------------------------------------------------
# GET /auth/me
# -----------------------------------------------------
@router.get("/me", response_model=SessionRead)
def me(console: SessionManager = Depends(get_console)):
    return session_read(console)


# -----------------------------------------------------
# GET /auth/login-error
# Transient sign-in failure banner (expires on its own)
# -----------------------------------------------------
@router.get("/login-error")
def login_error(console: SessionManager = Depends(get_console)):
    return {"error": console.login_error}


# -----------------------------------------------------
# POST /auth/impersonate
# -----------------------------------------------------
@router.post("/impersonate", response_model=SessionRead, summary="Simulate the console as another user")
def impersonate(payload: ImpersonateRequest, console: SessionManager = Depends(get_console)):
    console.impersonate(payload.user_id)
    logger.debug(f"Impersonation active for {payload.user_id}")
    return session_read(console)
