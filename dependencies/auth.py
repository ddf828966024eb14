from fastapi import Depends, Request

from core.session_manager import SessionManager
from models.user import Session
from services.assistant import AssistantClient


# ============================================================
# Console kernel (one per application instance)
# ============================================================
def get_console(request: Request) -> SessionManager:
    return request.app.state.console


def get_assistant(request: Request) -> AssistantClient:
    return request.app.state.assistant


# ============================================================
# Active session guard
# ============================================================
def get_current_session(console: SessionManager = Depends(get_console)) -> Session:
    """
    Resolves the console's active session or raises NotAuthenticated.
    Capability checks stay inside the kernel; routes never evaluate them.
    """
    return console.require_session()
