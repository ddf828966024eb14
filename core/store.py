# core/store.py

"""
Authoritative in-memory entity collections.

Each mutation validates every precondition first and only then swaps in
new model instances under the store lock, so a rejected call leaves the
collections exactly as they were. Callers (the session manager) have
already cleared the lockdown and permission gates.
"""

import secrets
import uuid
from collections import Counter
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from core.errors import EntityNotFound, RuleViolation
from models.dorm_event import DormEvent
from models.enums import (
    CheckInStatus,
    MaintenanceCategory,
    MaintenanceStatus,
    PaymentStatus,
    Priority,
    Role,
    RoomStatus,
    Sentiment,
    VisitorStatus,
    VisitType,
)
from models.maintenance import MaintenanceRequest
from models.payment import Payment
from models.room import Room
from models.user import User
from models.visitor import Visitor


MAINTENANCE_ORDER = [
    MaintenanceStatus.pending,
    MaintenanceStatus.in_progress,
    MaintenanceStatus.completed,
]

VISITOR_TRANSITIONS: Dict[VisitorStatus, set] = {
    VisitorStatus.upcoming: {VisitorStatus.checked_in, VisitorStatus.denied},
    VisitorStatus.checked_in: {VisitorStatus.checked_out},
    VisitorStatus.checked_out: set(),
    VisitorStatus.denied: set(),
}


def _index(items: List, entity_id: str, kind: str) -> int:
    for i, item in enumerate(items):
        if item.id == entity_id:
            return i
    raise EntityNotFound(kind, entity_id)


def _derived_room_status(room: Room) -> RoomStatus:
    if room.status == RoomStatus.maintenance:
        return RoomStatus.maintenance
    return RoomStatus.full if room.occupied >= room.capacity else RoomStatus.available


class EntityStore:

    def __init__(
        self,
        users: Iterable[User] = (),
        rooms: Iterable[Room] = (),
        maintenance: Iterable[MaintenanceRequest] = (),
        payments: Iterable[Payment] = (),
        visitors: Iterable[Visitor] = (),
        events: Iterable[DormEvent] = (),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._users: List[User] = list(users)
        self._rooms: List[Room] = list(rooms)
        self._maintenance: List[MaintenanceRequest] = list(maintenance)
        self._payments: List[Payment] = list(payments)
        self._visitors: List[Visitor] = list(visitors)
        self._events: List[DormEvent] = list(events)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = RLock()

    # =====================================================
    # USERS
    # =====================================================
    def list_users(self, role: Optional[Role] = None) -> List[User]:
        with self._lock:
            return [u for u in self._users if role is None or u.role == role]

    def get_user(self, user_id: str) -> User:
        with self._lock:
            return self._users[_index(self._users, user_id, "User")]

    def find_user(self, user_id: str) -> Optional[User]:
        try:
            return self.get_user(user_id)
        except EntityNotFound:
            return None

    def find_user_by_email(self, identifier: str) -> Optional[User]:
        """Case-insensitive exact match on the sign-in identifier."""
        wanted = (identifier or "").strip().lower()
        if not wanted:
            return None
        with self._lock:
            for user in self._users:
                if user.email.lower() == wanted:
                    return user
        return None

    def update_user(self, user_id: str, **changes) -> User:
        with self._lock:
            i = _index(self._users, user_id, "User")
            updated = self._users[i].model_copy(update=changes)
            self._users[i] = updated
            return updated

    # =====================================================
    # ROOMS
    # =====================================================
    def list_rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms)

    def get_room(self, room_id: str) -> Room:
        with self._lock:
            return self._rooms[_index(self._rooms, room_id, "Room")]

    def reassign_room(self, resident_id: str, target_room_id: str) -> Tuple[User, Room]:
        """
        Move a resident into `target_room_id`, freeing their previous bed.
        Rejected (never clamped) when the move would overfill the target.
        """
        with self._lock:
            ui = _index(self._users, resident_id, "User")
            ti = _index(self._rooms, target_room_id, "Room")
            resident = self._users[ui]
            target = self._rooms[ti]

            if resident.assigned_room_id == target.id:
                raise RuleViolation(f"{resident.name} is already assigned to room {target.number}")
            if target.status == RoomStatus.maintenance:
                raise RuleViolation(f"Room {target.number} is under maintenance")
            if not target.has_vacancy:
                raise RuleViolation(
                    f"Room {target.number} is at capacity ({target.occupied}/{target.capacity})"
                )

            new_target = target.model_copy(update={"occupied": target.occupied + 1})
            new_target = new_target.model_copy(update={"status": _derived_room_status(new_target)})

            source_update = None
            if resident.assigned_room_id:
                try:
                    si = _index(self._rooms, resident.assigned_room_id, "Room")
                except EntityNotFound:
                    si = None
                if si is not None:
                    source = self._rooms[si]
                    new_source = source.model_copy(update={"occupied": max(source.occupied - 1, 0)})
                    new_source = new_source.model_copy(update={"status": _derived_room_status(new_source)})
                    source_update = (si, new_source)

            # Re-validate (occupied ≤ capacity) before anything is swapped in.
            Room.model_validate(new_target.model_dump())

            self._rooms[ti] = new_target
            if source_update is not None:
                self._rooms[source_update[0]] = source_update[1]
            moved = resident.model_copy(update={"assigned_room_id": new_target.id})
            self._users[ui] = moved
            return moved, new_target

    def set_room_status(self, room_id: str, status: RoomStatus) -> Room:
        """Only Available/Maintenance can be set; Full follows occupancy."""
        if status == RoomStatus.full:
            raise RuleViolation("Room status 'Full' is derived from occupancy")
        with self._lock:
            i = _index(self._rooms, room_id, "Room")
            room = self._rooms[i].model_copy(update={"status": status})
            room = room.model_copy(update={"status": _derived_room_status(room)})
            self._rooms[i] = room
            return room

    # =====================================================
    # MAINTENANCE
    # =====================================================
    def list_maintenance(self, student_id: Optional[str] = None) -> List[MaintenanceRequest]:
        with self._lock:
            return [m for m in self._maintenance if student_id is None or m.student_id == student_id]

    def get_maintenance(self, request_id: str) -> MaintenanceRequest:
        with self._lock:
            return self._maintenance[_index(self._maintenance, request_id, "Maintenance request")]

    def create_maintenance(
        self,
        student_id: str,
        student_name: str,
        room_number: str,
        category: MaintenanceCategory,
        description: str,
        priority: Optional[Priority] = None,
        severity: Optional[int] = None,
        estimated_cost: Optional[str] = None,
    ) -> MaintenanceRequest:
        request = MaintenanceRequest(
            id="M" + uuid.uuid4().hex[:8],
            student_id=student_id,
            student_name=student_name,
            room_number=room_number,
            category=category,
            description=description,
            status=MaintenanceStatus.pending,
            priority=priority or Priority.medium,
            created_at=self._clock(),
            severity=severity,
            estimated_cost=estimated_cost,
        )
        with self._lock:
            self._maintenance.insert(0, request)
        return request

    def advance_maintenance(
        self,
        request_id: str,
        target: Optional[MaintenanceStatus] = None,
    ) -> MaintenanceRequest:
        """Move strictly forward along Pending → In Progress → Completed."""
        with self._lock:
            i = _index(self._maintenance, request_id, "Maintenance request")
            current = self._maintenance[i]
            position = MAINTENANCE_ORDER.index(current.status)

            if target is None:
                if position == len(MAINTENANCE_ORDER) - 1:
                    raise RuleViolation(f"Request {request_id} is already completed")
                target = MAINTENANCE_ORDER[position + 1]
            elif MAINTENANCE_ORDER.index(target) <= position:
                raise RuleViolation(
                    f"Request {request_id} cannot move from '{current.status}' to '{target}'"
                )

            updated = current.model_copy(update={"status": target})
            self._maintenance[i] = updated
            return updated

    def annotate_maintenance(
        self,
        request_id: str,
        rating: int,
        sentiment: Sentiment,
    ) -> MaintenanceRequest:
        if not 1 <= rating <= 5:
            raise RuleViolation("Rating must be between 1 and 5")
        with self._lock:
            i = _index(self._maintenance, request_id, "Maintenance request")
            current = self._maintenance[i]
            if current.status != MaintenanceStatus.completed:
                raise RuleViolation(f"Request {request_id} can only be rated once completed")
            updated = current.model_copy(update={"rating": rating, "sentiment": sentiment})
            self._maintenance[i] = updated
            return updated

    # =====================================================
    # PAYMENTS
    # =====================================================
    def list_payments(self, student_id: Optional[str] = None) -> List[Payment]:
        with self._lock:
            return [p for p in self._payments if student_id is None or p.student_id == student_id]

    def get_payment(self, payment_id: str) -> Payment:
        with self._lock:
            return self._payments[_index(self._payments, payment_id, "Payment")]

    def settle_payment(self, payment_id: str) -> Payment:
        """Pending|Overdue → Paid, stamping a settlement reference. Never reversed."""
        with self._lock:
            i = _index(self._payments, payment_id, "Payment")
            current = self._payments[i]
            if current.status == PaymentStatus.paid:
                raise RuleViolation(f"Invoice {payment_id} is already settled")
            updated = current.model_copy(update={
                "status": PaymentStatus.paid,
                "settlement_reference": "0x" + secrets.token_hex(8),
            })
            self._payments[i] = updated
            return updated

    def override_fee(self, payment_id: str, amount: float) -> Tuple[Payment, float]:
        if amount < 0:
            raise RuleViolation("Fee amount cannot be negative")
        with self._lock:
            i = _index(self._payments, payment_id, "Payment")
            current = self._payments[i]
            if current.status == PaymentStatus.paid:
                raise RuleViolation(f"Invoice {payment_id} is settled and can no longer be changed")
            updated = current.model_copy(update={"amount": amount})
            self._payments[i] = updated
            return updated, current.amount

    # =====================================================
    # VISITORS
    # =====================================================
    def list_visitors(self, resident_id: Optional[str] = None) -> List[Visitor]:
        with self._lock:
            return [v for v in self._visitors if resident_id is None or v.resident_id == resident_id]

    def register_visitor(
        self,
        resident_id: str,
        resident_name: str,
        name: str,
        expected_arrival: str,
        visit_type: VisitType = VisitType.friend,
    ) -> Visitor:
        visitor = Visitor(
            id="V" + uuid.uuid4().hex[:8],
            name=name,
            resident_id=resident_id,
            resident_name=resident_name,
            expected_arrival=expected_arrival,
            status=VisitorStatus.upcoming,
            visit_type=visit_type,
        )
        with self._lock:
            self._visitors.insert(0, visitor)
        return visitor

    def transition_visitor(self, visitor_id: str, target: VisitorStatus) -> Visitor:
        with self._lock:
            i = _index(self._visitors, visitor_id, "Visitor")
            current = self._visitors[i]
            if target not in VISITOR_TRANSITIONS[current.status]:
                raise RuleViolation(
                    f"Visitor {visitor_id} cannot move from '{current.status}' to '{target}'"
                )
            changes = {"status": target}
            if target == VisitorStatus.checked_in:
                changes["check_in_time"] = self._clock()
            elif target == VisitorStatus.checked_out:
                changes["check_out_time"] = self._clock()
            updated = current.model_copy(update=changes)
            self._visitors[i] = updated
            return updated

    # =====================================================
    # EVENTS
    # =====================================================
    def list_events(self) -> List[DormEvent]:
        with self._lock:
            return list(self._events)

    def join_event(self, event_id: str, user_id: str) -> Tuple[DormEvent, bool]:
        """Idempotent: returns (event, False) when already attending."""
        with self._lock:
            i = _index(self._events, event_id, "Event")
            current = self._events[i]
            if user_id in current.attendees:
                return current, False
            updated = current.model_copy(update={"attendees": [*current.attendees, user_id]})
            self._events[i] = updated
            return updated, True

    # =====================================================
    # RESIDENT CHECK-IN
    # =====================================================
    def request_check_in(self, user_id: str) -> User:
        with self._lock:
            user = self.get_user(user_id)
            if user.check_in_status in (CheckInStatus.pending_approval, CheckInStatus.checked_in):
                raise RuleViolation(f"Check-in already {user.check_in_status}")
            return self.update_user(user_id, check_in_status=CheckInStatus.pending_approval)

    def approve_check_in(self, user_id: str) -> User:
        with self._lock:
            user = self.get_user(user_id)
            if user.check_in_status != CheckInStatus.pending_approval:
                raise RuleViolation(f"{user.name} has no pending check-in request")
            return self.update_user(user_id, check_in_status=CheckInStatus.checked_in)

    # =====================================================
    # DERIVED DASHBOARD FIGURES
    # =====================================================
    def occupancy_rate(self) -> float:
        with self._lock:
            total = sum(r.capacity for r in self._rooms)
            occupied = sum(r.occupied for r in self._rooms)
        if total == 0:
            return 0.0
        return round(occupied / total * 100, 1)

    def sentiment_counts(self) -> Dict[str, int]:
        with self._lock:
            counts = Counter((m.sentiment or Sentiment.neutral).value for m in self._maintenance)
        return {s.value: counts.get(s.value, 0) for s in Sentiment}

    def leaderboard(self) -> List[dict]:
        students = sorted(self.list_users(Role.student), key=lambda u: u.points, reverse=True)
        return [
            {"id": u.id, "name": u.name, "points": u.points, "rank": rank}
            for rank, u in enumerate(students, start=1)
        ]
