# models/audit.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict

from .enums import Severity


class AuditEntry(BaseModel):
    """Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime
    user: str
    action: str
    details: str
    severity: Severity = Severity.info
