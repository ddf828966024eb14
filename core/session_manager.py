# core/session_manager.py

"""
Session manager: owns the active session and is the only entry point for
mutating actions.

Every gated action runs the same pipeline:

    lockdown gate (tab reachable for this role?)
      → permission evaluator (capability held?)
        → entity store mutation (all-or-nothing)
          → audit record → confirmation notification

A rejection at any step raises a ConsoleError after emitting a rejection
notification; nothing downstream of the failing step is touched.
"""

import random
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, List, Optional

from apscheduler.schedulers.base import BaseScheduler
from pydantic import ValidationError

from core.audit import AuditLogger
from core.cache import ExpiringStore
from core.config import Settings, settings as default_settings
from core.errors import ConsoleError, InvalidCredentials, NotAuthenticated, RuleViolation
from core.lockdown import LockdownController
from core.logging_config import logger
from core.notifications import NotificationBroadcaster
from core.permission_helpers import has_capability, require_capability
from core.permissions import ACTIONS, VIEW_AUDIT, ConsoleAction
from core.roles import initial_tab, tabs_for
from core.state_store import StateStore
from core.store import EntityStore
from core.telemetry import TelemetryMonitor
from models.audit import AuditEntry
from models.dorm_event import DormEvent
from models.enums import (
    LockdownState,
    MaintenanceCategory,
    MaintenanceStatus,
    Permission,
    Priority,
    RoomStatus,
    Sentiment,
    Severity,
    Theme,
    VisitorStatus,
    VisitType,
)
from models.maintenance import MaintenanceRequest
from models.notification import Notification
from models.payment import Payment
from models.room import Room
from models.assistant import IssueAnalysis
from models.user import PersistedSession, Session, User
from models.visitor import Visitor

LOGIN_ERROR_KEY = "login_error"


class SessionManager:

    def __init__(
        self,
        store: EntityStore,
        audit: AuditLogger,
        notifier: NotificationBroadcaster,
        lockdown: LockdownController,
        state: StateStore,
        telemetry: TelemetryMonitor,
        transient: Optional[ExpiringStore] = None,
        config: Settings = default_settings,
    ):
        self.store = store
        self.audit = audit
        self.notifier = notifier
        self.lockdown = lockdown
        self.state = state
        self.telemetry = telemetry
        self.config = config
        self._transient = transient or ExpiringStore()
        self._session: Optional[Session] = None
        self._active_tab: Optional[str] = None

    # =====================================================
    # SESSION STATE
    # =====================================================
    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def active_tab(self) -> Optional[str]:
        return self._active_tab

    @property
    def login_error(self) -> Optional[str]:
        return self._transient.get(LOGIN_ERROR_KEY)

    def require_session(self) -> Session:
        if self._session is None:
            raise NotAuthenticated()
        return self._session

    # =====================================================
    # AUTHENTICATION
    # =====================================================
    def authenticate(self, identifier: str, secret: str) -> Session:
        user = self.store.find_user_by_email(identifier)
        if user is None or user.secret.get_secret_value() != secret:
            error = InvalidCredentials()
            self._transient.set(LOGIN_ERROR_KEY, error.message, self.config.LOGIN_ERROR_TTL_SECONDS)
            logger.warning(f"Failed sign-in for identifier '{(identifier or '').strip()}'")
            raise error

        self._transient.delete(LOGIN_ERROR_KEY)
        # a new sign-in ends the current session (audit, lockdown, timers)
        if self._session is not None:
            self.logout()
        session = Session.from_user(user)
        self._establish(session)
        self.state.set(
            self.config.SESSION_STORAGE_KEY,
            PersistedSession.from_session(session).model_dump_json(),
        )
        self.audit.record(session.name, "Login", f"Authenticated session for role: {session.role}")
        logger.info(f"{session.name} signed in as {session.role}")
        return session

    def restore_session(self) -> Optional[Session]:
        """
        Rehydrate from the persisted record. When the identity no longer
        exists in the store the raw record is used as-is: stale data is
        tolerated rather than forcing a fresh sign-in.
        """
        raw = self.state.get(self.config.SESSION_STORAGE_KEY)
        if not raw:
            return None

        try:
            record = PersistedSession.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable persisted session: {e}")
            self.state.delete(self.config.SESSION_STORAGE_KEY)
            return None

        user = self.store.find_user(record.id)
        if user is not None:
            session = Session.from_user(user)
        else:
            logger.warning(f"Persisted identity {record.id} not found; reattaching stale record")
            session = record.to_session()

        self._establish(session)
        logger.info(f"Session restored for {session.name}")
        return session

    def logout(self) -> bool:
        session = self._session
        if session is None:
            return False

        self.audit.record(session.name, "Logout", "Session terminated by user.")
        self.state.delete(self.config.SESSION_STORAGE_KEY)
        # lockdown only ever exists inside an authenticated session
        self.lockdown.release()
        self.notifier.clear()
        self._session = None
        self._active_tab = None
        self._sync_telemetry()
        logger.info(f"{session.name} signed out")
        return True

    def impersonate(self, target_user_id: str) -> Session:
        """Simulate the console as another user. Requires manage-users."""
        with self._rejecting():
            session = self._authorize(ACTIONS["impersonate"])
            target = self.store.get_user(target_user_id)

        self.audit.record(session.name, "Simulation", f"Admin simulating session for {target.name}")
        self._establish(Session.from_user(target, impersonated_by=session.name))
        logger.info(f"{session.name} is now simulating {target.name}")
        return self._session

    def _establish(self, session: Session):
        self._session = session
        self._active_tab = initial_tab(session.role)
        self._sync_telemetry()

    # =====================================================
    # NAVIGATION
    # =====================================================
    def navigate(self, tab: str) -> str:
        with self._rejecting():
            session = self.require_session()
            self.lockdown.ensure_reachable(session.role, tab)
        self._active_tab = tab
        return tab

    def reachable_tabs(self) -> List[str]:
        session = self.require_session()
        return [t for t in tabs_for(session.role) if self.lockdown.is_reachable(session.role, t)]

    def require_tab(self, tab: str) -> Session:
        """Gate for non-mutating features (e.g. the assistant)."""
        with self._rejecting():
            session = self.require_session()
            self.lockdown.ensure_reachable(session.role, tab)
        return session

    def ensure_allowed(self, action_name: str) -> Session:
        """
        Run an action's lockdown and capability gates without mutating
        anything, so slow collaborator work is only started for callers
        who could complete the action.
        """
        with self._rejecting():
            return self._authorize(ACTIONS[action_name])

    # =====================================================
    # LOCKDOWN
    # =====================================================
    def toggle_lockdown(self) -> LockdownState:
        return self._lockdown_transition(self.lockdown.toggle)

    def enter_lockdown(self) -> LockdownState:
        return self._lockdown_transition(self.lockdown.enter)

    def exit_lockdown(self) -> LockdownState:
        return self._lockdown_transition(self.lockdown.exit)

    def _lockdown_transition(self, transition: Callable[[Session], LockdownState]) -> LockdownState:
        with self._rejecting():
            session = self.require_session()
        # the controller emits its own rejection notification
        state = transition(session)
        self._sync_telemetry()
        return state

    # =====================================================
    # ROOMS
    # =====================================================
    def reassign_room(self, resident_id: str, target_room_id: str) -> Room:
        with self._rejecting():
            session = self._authorize(ACTIONS["reassign_room"])
            resident, room = self.store.reassign_room(resident_id, target_room_id)

        self.audit.record(session.name, "Room", f"{resident.name} reassigned to room {room.number}")
        self.notifier.broadcast("Room Reassigned", f"{resident.name} now occupies {room.dormitory} {room.number}.", "rooms")
        return room

    def set_room_status(self, room_id: str, status: RoomStatus) -> Room:
        with self._rejecting():
            session = self._authorize(ACTIONS["set_room_status"])
            room = self.store.set_room_status(room_id, status)

        self.audit.record(session.name, "Room", f"Room {room.number} marked {room.status}")
        return room

    def approve_check_in(self, resident_id: str) -> User:
        with self._rejecting():
            session = self._authorize(ACTIONS["approve_check_in"])
            resident = self.store.approve_check_in(resident_id)

        self.audit.record(session.name, "Check-In", f"Arrival validated for {resident.name}")
        self.notifier.broadcast("Check-In Approved", f"{resident.name} is now checked in.")
        return resident

    # =====================================================
    # MAINTENANCE
    # =====================================================
    def submit_maintenance(
        self,
        category: MaintenanceCategory,
        description: str,
        priority: Optional[Priority] = None,
        analysis: Optional[IssueAnalysis] = None,
    ) -> MaintenanceRequest:
        with self._rejecting():
            session = self._authorize(ACTIONS["submit_maintenance"])
            if not description or not description.strip():
                raise RuleViolation("A description of the issue is required")
            room_number = self._room_number(session.assigned_room_id)
            request = self.store.create_maintenance(
                student_id=session.user_id,
                student_name=session.name,
                room_number=room_number,
                category=category,
                description=description.strip(),
                priority=priority or (analysis.priority if analysis else None),
                severity=analysis.severity if analysis else None,
                estimated_cost=analysis.estimated_cost if analysis else None,
            )

        self.audit.record(session.name, "Maintenance", f"{request.category} request {request.id} filed for room {room_number}")
        self.notifier.broadcast("Ticket Logged", "Maintenance has been notified of your issue.", "maintenance")
        return request

    def advance_maintenance(self, request_id: str, target: Optional[MaintenanceStatus] = None) -> MaintenanceRequest:
        with self._rejecting():
            session = self._authorize(ACTIONS["advance_maintenance"])
            request = self.store.advance_maintenance(request_id, target)

        self.audit.record(session.name, "Maintenance", f"Request {request.id} moved to {request.status}")
        self.notifier.broadcast("Ticket Updated", f"Request {request.id} is now {request.status}.", "maintenance")
        return request

    def rate_maintenance(self, request_id: str, rating: int, sentiment: Sentiment) -> MaintenanceRequest:
        with self._rejecting():
            session = self._authorize(ACTIONS["rate_maintenance"])
            if self.store.get_maintenance(request_id).student_id != session.user_id:
                raise RuleViolation("Only the resident who raised a request can rate it")
            request = self.store.annotate_maintenance(request_id, rating, sentiment)

        self.audit.record(session.name, "Feedback", f"Request {request.id} rated {rating}/5 ({sentiment})")
        return request

    def maintenance_requests(self) -> List[MaintenanceRequest]:
        """Staff and admins with approve-maintenance see the whole queue."""
        session = self.require_session()
        if has_capability(session, Permission.approve_maintenance):
            return self.store.list_maintenance()
        return self.store.list_maintenance(session.user_id)

    def _room_number(self, room_id: Optional[str]) -> str:
        if not room_id:
            return "N/A"
        try:
            return self.store.get_room(room_id).number
        except ConsoleError:
            return room_id

    # =====================================================
    # PAYMENTS
    # =====================================================
    def settle_payment(self, payment_id: str) -> Payment:
        action = ACTIONS["settle_payment"]
        with self._rejecting():
            session = self._authorize(action)
            own = self.store.get_payment(payment_id).student_id == session.user_id
            if not own:
                require_capability(session, Permission.override_fee, action.name)
            payment = self.store.settle_payment(payment_id)

        self.audit.record(session.name, "Financial", f"Invoice {payment_id} settled via UDMS Pay.")
        if own:
            self._award_points(self.config.PAYMENT_REWARD_POINTS)
            self.notifier.broadcast("Payment Success", "Ledger updated. Your points balance has increased.")
        else:
            self.notifier.broadcast("Payment Success", f"Ledger updated. Invoice {payment_id} settled on the resident's behalf.")
        return payment

    def override_fee(self, payment_id: str, amount: float, reason: str = "") -> Payment:
        with self._rejecting():
            session = self._authorize(ACTIONS["override_fee"])
            payment, previous = self.store.override_fee(payment_id, amount)

        detail = f"Invoice {payment_id} amount {previous:.2f} → {amount:.2f}"
        if reason:
            detail += f" ({reason})"
        self.audit.record(session.name, "Financial", detail, Severity.warning)
        return payment

    def payments(self) -> List[Payment]:
        """All invoices with view-financials, otherwise only the caller's own."""
        session = self.require_session()
        if has_capability(session, Permission.view_financials):
            return self.store.list_payments()
        return self.store.list_payments(session.user_id)

    def _award_points(self, points: int):
        session = self._session
        total = session.points + points
        self._session = session.model_copy(update={"points": total})
        if self.store.find_user(session.user_id) is not None:
            self.store.update_user(session.user_id, points=total)

    # =====================================================
    # VISITORS
    # =====================================================
    def register_visitor(self, name: str, expected_arrival: str, visit_type: VisitType = VisitType.friend) -> Visitor:
        with self._rejecting():
            session = self._authorize(ACTIONS["register_visitor"])
            if not name or not name.strip():
                raise RuleViolation("Visitor name is required")
            visitor = self.store.register_visitor(
                resident_id=session.user_id,
                resident_name=session.name,
                name=name.strip(),
                expected_arrival=expected_arrival,
                visit_type=visit_type,
            )

        self.notifier.broadcast("Pass Generated", f"Visitor pass for {visitor.name} is awaiting gate verification.", "visitors")
        self.audit.record(session.name, "Visitor", f"Guest pass requested by {session.name}")
        return visitor

    def check_in_visitor(self, visitor_id: str) -> Visitor:
        return self._move_visitor("check_in_visitor", visitor_id, VisitorStatus.checked_in)

    def check_out_visitor(self, visitor_id: str) -> Visitor:
        return self._move_visitor("check_out_visitor", visitor_id, VisitorStatus.checked_out)

    def deny_visitor(self, visitor_id: str) -> Visitor:
        return self._move_visitor("deny_visitor", visitor_id, VisitorStatus.denied)

    def _move_visitor(self, action_name: str, visitor_id: str, target: VisitorStatus) -> Visitor:
        with self._rejecting():
            session = self._authorize(ACTIONS[action_name])
            visitor = self.store.transition_visitor(visitor_id, target)

        self.audit.record(session.name, "Gate", f"Visitor {visitor.name} ({visitor.id}) {visitor.status}")
        return visitor

    def visitors(self) -> List[Visitor]:
        session = self.require_session()
        if has_capability(session, Permission.gate_access):
            return self.store.list_visitors()
        return self.store.list_visitors(session.user_id)

    # =====================================================
    # RESIDENT LIFE
    # =====================================================
    def join_event(self, event_id: str) -> DormEvent:
        with self._rejecting():
            session = self._authorize(ACTIONS["join_event"])
            event, joined = self.store.join_event(event_id, session.user_id)

        if joined:
            self.audit.record(session.name, "Event", f"Registered for {event.title}")
            self.notifier.broadcast("Event Joined", "Successfully registered. XP will be awarded upon attendance.", "events")
        return event

    def request_check_in(self) -> Session:
        with self._rejecting():
            session = self._authorize(ACTIONS["request_check_in"])
            user = self.store.request_check_in(session.user_id)

        self._session = session.model_copy(update={"check_in_status": user.check_in_status})
        self.audit.record(session.name, "Check-In", "Student requested arrival validation.")
        self.notifier.broadcast("Request Submitted", "Dorm Admin will review your arrival within 2 hours.")
        return self._session

    # =====================================================
    # AUDIT / NOTIFICATIONS (reads)
    # =====================================================
    def audit_log(self, limit: Optional[int] = None) -> List[AuditEntry]:
        with self._rejecting():
            self._authorize(VIEW_AUDIT)
        return self.audit.entries(limit)

    def dashboard(self) -> dict:
        self.require_session()
        return {
            "occupancy_rate": self.store.occupancy_rate(),
            "sentiment": self.store.sentiment_counts(),
            "leaderboard": self.store.leaderboard(),
            "lockdown": self.lockdown.state,
            "telemetry_highlight": self.telemetry.highlight,
        }

    def notifications(self) -> List[Notification]:
        return self.notifier.active()

    def dismiss_notification(self, notification_id: str) -> bool:
        return self.notifier.dismiss(notification_id)

    # =====================================================
    # THEME PREFERENCE
    # =====================================================
    def theme(self) -> Theme:
        raw = self.state.get(self.config.THEME_STORAGE_KEY)
        return Theme.dark if raw == Theme.dark.value else Theme.light

    def toggle_theme(self) -> Theme:
        new_theme = Theme.light if self.theme() == Theme.dark else Theme.dark
        self.state.set(self.config.THEME_STORAGE_KEY, new_theme.value)
        return new_theme

    # =====================================================
    # PIPELINE HELPERS
    # =====================================================
    def _authorize(self, action: ConsoleAction) -> Session:
        """Lockdown gate first, then the capability check."""
        session = self.require_session()
        if action.tab is not None:
            self.lockdown.ensure_reachable(session.role, action.tab)
        if action.capability is not None:
            require_capability(session, action.capability, action.name)
        return session

    @contextmanager
    def _rejecting(self):
        try:
            yield
        except ConsoleError as exc:
            self.notifier.broadcast(exc.title, exc.message)
            logger.warning(f"Rejected: {exc.message}")
            raise

    def _sync_telemetry(self):
        self.telemetry.sync(self._session is not None and not self.lockdown.is_locked)


# ---------------------------------------------------------
# Factory
# ---------------------------------------------------------
def build_session_manager(
    store: EntityStore,
    scheduler: Optional[BaseScheduler] = None,
    state: Optional[StateStore] = None,
    config: Settings = default_settings,
    clock: Optional[Callable[[], datetime]] = None,
    rng: Optional[random.Random] = None,
) -> SessionManager:
    transient = ExpiringStore(clock)
    audit = AuditLogger(capacity=config.AUDIT_LOG_CAPACITY, clock=clock)
    notifier = NotificationBroadcaster(
        store=ExpiringStore(clock),
        scheduler=scheduler,
        ttl_seconds=config.NOTIFICATION_TTL_SECONDS,
    )
    lockdown = LockdownController(audit, notifier)
    telemetry = TelemetryMonitor(
        scheduler=scheduler,
        interval_seconds=config.TELEMETRY_INTERVAL_SECONDS,
        probability=config.TELEMETRY_PROBABILITY,
        highlight_seconds=config.TELEMETRY_HIGHLIGHT_SECONDS,
        rng=rng,
        clock=clock,
    )
    return SessionManager(
        store=store,
        audit=audit,
        notifier=notifier,
        lockdown=lockdown,
        state=state or StateStore(),
        telemetry=telemetry,
        transient=transient,
        config=config,
    )
