# core/audit.py

"""
Rolling, append-only audit trail.

Newest entries sit at the front. Once the buffer holds more than
`capacity` entries the oldest are dropped silently: retention here is a
best-effort rolling window, not compliance storage.
"""

import uuid
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, List, Optional

from core.logging_config import logger
from models.audit import AuditEntry
from models.enums import Severity

SYSTEM_ACTOR = "System"


class AuditLogger:

    def __init__(self, capacity: int = 100, clock: Optional[Callable[[], datetime]] = None):
        if capacity < 1:
            raise ValueError("audit capacity must be positive")
        self.capacity = capacity
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: deque = deque(maxlen=capacity)
        self._lock = Lock()

    def record(
        self,
        actor_name: Optional[str],
        action: str,
        detail: str,
        severity: Severity = Severity.info,
    ) -> AuditEntry:
        entry = AuditEntry(
            id=uuid.uuid4().hex[:9],
            timestamp=self._clock(),
            user=actor_name or SYSTEM_ACTOR,
            action=action,
            details=detail,
            severity=severity,
        )
        with self._lock:
            # appendleft on a full deque evicts from the right (the oldest)
            self._entries.appendleft(entry)

        logger.info(f"Audit [{severity}] {entry.user}: {action} — {detail}")
        return entry

    def entries(self, limit: Optional[int] = None) -> List[AuditEntry]:
        """Newest first."""
        with self._lock:
            items = list(self._entries)
        return items[:limit] if limit is not None else items

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
