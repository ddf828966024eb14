# routers/audit.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.session_manager import SessionManager
from dependencies.auth import get_console
from models.audit import AuditEntry


router = APIRouter(
    prefix="/audit",
    tags=["Audit"],
)


@router.get("/", response_model=List[AuditEntry], summary="Audit trail, newest first")
def audit_log(
    limit: Optional[int] = Query(None, ge=1, le=100),
    console: SessionManager = Depends(get_console),
):
    return console.audit_log(limit)
