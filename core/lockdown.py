# core/lockdown.py

"""
Facility-wide lockdown: a two-state machine (Normal ⇄ Locked).

While Locked, any non-Admin role may only reach LOCKDOWN_ALLOWED_TABS,
whatever capabilities it holds. The gate sits above the per-capability
check; it never grants anything on its own.

State lives for the process lifetime only and is never persisted.
"""

from threading import Lock
from typing import Optional

from core.audit import AuditLogger
from core.errors import LockedOut, PermissionDenied
from core.logging_config import logger
from core.notifications import NotificationBroadcaster
from core.permission_helpers import has_capability
from core.roles import LOCKDOWN_ALLOWED_TABS
from models.enums import LockdownState, Permission, Role, Severity
from models.user import Session


class LockdownController:

    def __init__(self, audit: AuditLogger, notifier: NotificationBroadcaster):
        self._audit = audit
        self._notifier = notifier
        self._state = LockdownState.normal
        self._engaged_by: Optional[str] = None
        self._lock = Lock()

    @property
    def state(self) -> LockdownState:
        return self._state

    @property
    def is_locked(self) -> bool:
        return self._state == LockdownState.locked

    @property
    def engaged_by(self) -> Optional[str]:
        return self._engaged_by

    # -----------------------------------------------------
    # Reachability gate
    # -----------------------------------------------------
    def is_reachable(self, role: Role, tab: str) -> bool:
        if not self.is_locked:
            return True
        if role == Role.admin:
            return True
        return tab in LOCKDOWN_ALLOWED_TABS

    def ensure_reachable(self, role: Role, tab: str):
        if not self.is_reachable(role, tab):
            raise LockedOut(tab)

    # -----------------------------------------------------
    # Transitions
    # -----------------------------------------------------
    def enter(self, session: Session) -> LockdownState:
        self._authorize(session)
        with self._lock:
            if self.is_locked:
                return self._state
            self._state = LockdownState.locked
            self._engaged_by = session.name

        self._audit.record(session.name, "Security", "EMERGENCY LOCKDOWN INITIATED", Severity.critical)
        self._notifier.broadcast("⚠️ SYSTEM LOCKDOWN", "Perimeter secured. Residents remain in units.")
        logger.warning(f"Lockdown engaged by {session.name}")
        return self._state

    def exit(self, session: Session) -> LockdownState:
        self._authorize(session)
        with self._lock:
            if not self.is_locked:
                return self._state
            self._clear()

        self._audit.record(session.name, "Security", "Lockdown override successful", Severity.warning)
        self._notifier.broadcast("✅ LOCKDOWN OVERRIDE", "Nominal operations resumed.")
        logger.info(f"Lockdown lifted by {session.name}")
        return self._state

    def toggle(self, session: Session) -> LockdownState:
        if self.is_locked:
            return self.exit(session)
        return self.enter(session)

    def release(self):
        """Drop back to Normal without an actor (the session that held it is gone)."""
        with self._lock:
            if self.is_locked:
                logger.info("Lockdown released: session ended")
            self._clear()

    def _clear(self):
        self._state = LockdownState.normal
        self._engaged_by = None

    def _authorize(self, session: Session):
        if not has_capability(session, Permission.security_lockdown):
            self._notifier.broadcast(
                PermissionDenied.title,
                "Insufficient privileges for security lockdown operations.",
            )
            logger.warning(f"Lockdown toggle denied for {session.name}")
            raise PermissionDenied(Permission.security_lockdown.value, "toggle_lockdown")
