# routers/health.py

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/app
# Lightweight check for uptime monitors (no auth)
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app(console: SessionManager = Depends(get_console)):
    return {
        "service": "UDMS Console",
        "status": "ok",
        "lockdown": console.lockdown.state,
        "audit_entries": len(console.audit),
    }
