# core/errors.py

"""
Console error taxonomy.

Every rejection raised by the kernel derives from ConsoleError. None of them
are fatal: the caller's session and every store stay exactly as they were.
`status_code` is what the HTTP adapter answers with, `title` is what the
rejection notification shows.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from core.logging_config import logger


class ConsoleError(Exception):
    status_code = 400
    code = "console_error"
    title = "❌ REQUEST REJECTED"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCredentials(ConsoleError):
    status_code = 401
    code = "invalid_credentials"
    title = "❌ SIGN-IN FAILED"

    def __init__(self, message: str = "Invalid identity or access key"):
        super().__init__(message)


class NotAuthenticated(ConsoleError):
    status_code = 401
    code = "not_authenticated"
    title = "❌ NO ACTIVE SESSION"

    def __init__(self, message: str = "No authenticated session"):
        super().__init__(message)


class PermissionDenied(ConsoleError):
    status_code = 403
    code = "permission_denied"
    title = "❌ ACCESS DENIED"

    def __init__(self, capability, action: Optional[str] = None):
        self.capability = capability
        self.action = action
        message = f"Insufficient privileges: '{capability}' required"
        if action:
            message += f" for {action}"
        super().__init__(message)


class LockedOut(ConsoleError):
    status_code = 423
    code = "locked_out"
    title = "🔒 LOCKDOWN ACTIVE"

    def __init__(self, tab: str):
        self.tab = tab
        super().__init__(f"'{tab}' is unavailable while the facility is in lockdown")


class EntityNotFound(ConsoleError):
    status_code = 404
    code = "not_found"
    title = "❌ NOT FOUND"

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")


class RuleViolation(ConsoleError):
    """An entity invariant or status transition would be broken."""
    status_code = 409
    code = "rule_violation"
    title = "⚠️ ACTION REJECTED"


class CollaboratorUnavailable(ConsoleError):
    """
    The AI collaborator failed. Always recovered inside the assistant
    client with a default value; never reaches the mutation pipeline.
    """
    status_code = 503
    code = "collaborator_unavailable"
    title = "🤖 ASSISTANT OFFLINE"


# -----------------------------------------------------
# FastAPI exception handler
# -----------------------------------------------------
async def handle_console_error(request: Request, exc: ConsoleError) -> JSONResponse:
    logger.warning(f"{exc.code} at {request.url.path} — {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )
