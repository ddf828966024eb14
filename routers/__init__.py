# routers/__init__.py

from fastapi import APIRouter

from .auth import router as auth_router
from .navigation import router as navigation_router
from .rooms import router as rooms_router
from .maintenance import router as maintenance_router
from .payments import router as payments_router
from .visitors import router as visitors_router
from .events import router as events_router
from .audit import router as audit_router
from .security import router as security_router
from .notifications import router as notifications_router
from .assistant import router as assistant_router
from .preferences import router as preferences_router
from .health import router as health_router


# Master router mounted by main.create_app()
api_router = APIRouter()

# Session
api_router.include_router(auth_router)
api_router.include_router(navigation_router)

# Gated console actions
api_router.include_router(rooms_router)
api_router.include_router(maintenance_router)
api_router.include_router(payments_router)
api_router.include_router(visitors_router)
api_router.include_router(events_router)
api_router.include_router(security_router)

# Reads + preferences
api_router.include_router(audit_router)
api_router.include_router(notifications_router)
api_router.include_router(assistant_router)
api_router.include_router(preferences_router)

# Health
api_router.include_router(health_router)

__all__ = ["api_router"]
