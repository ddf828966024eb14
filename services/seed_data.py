# services/seed_data.py

"""
Initial console state: accounts, rooms, open tickets, invoices, visitors
and events for a two-hall residence.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from core.store import EntityStore
from models.dorm_event import DormEvent
from models.enums import (
    CheckInStatus,
    MaintenanceCategory,
    MaintenanceStatus,
    Permission as P,
    PaymentStatus,
    Priority,
    Role,
    RoomStatus,
    VisitorStatus,
    VisitType,
)
from models.maintenance import MaintenanceRequest
from models.payment import Payment
from models.room import Room
from models.user import Badge, HealthMetrics, StudentPreferences, User
from models.visitor import Visitor


def _student(
    number: str,
    name: str,
    room_id: str,
    check_in: CheckInStatus,
    points: int,
    level: int,
    wellness: int,
    prefs: StudentPreferences,
    health: HealthMetrics,
    badges: List[Badge] = (),
) -> User:
    return User(
        id=f"s{number}",
        name=name,
        email=f"s{number}@university.edu",
        secret="StudentTemp123!",
        role=Role.student,
        permissions={P.submit_maintenance},
        student_id=f"S{number}",
        assigned_room_id=room_id,
        check_in_status=check_in,
        points=points,
        level=level,
        wellness_score=wellness,
        preferences=prefs,
        badges=list(badges),
        health_metrics=health,
    )


def seed_users() -> List[User]:
    return [
        # -------------------------------------------------
        # Super admin
        # -------------------------------------------------
        User(
            id="super-admin",
            name="University Head",
            email="superadmin@university.edu",
            secret="SuperSecure123!",
            role=Role.admin,
            permissions={
                P.manage_rooms, P.reassign_room, P.override_fee, P.manage_users,
                P.security_lockdown, P.view_audit_logs, P.view_financials,
            },
            level=10,
            health_metrics=HealthMetrics(sleep_hours=8, study_hours=0, activity_level=50),
        ),
        # -------------------------------------------------
        # Dorm managers (no reassign / fee override / lockdown / users)
        # -------------------------------------------------
        User(
            id="admin-north",
            name="Dorm Admin – North Hall",
            email="dormadmin1@university.edu",
            secret="DormAdmin123!",
            role=Role.admin,
            permissions={P.manage_rooms, P.view_financials, P.approve_maintenance},
            level=5,
            health_metrics=HealthMetrics(sleep_hours=7, study_hours=0, activity_level=40),
        ),
        User(
            id="admin-south",
            name="Dorm Admin – South Hall",
            email="dormadmin2@university.edu",
            secret="DormAdmin123!",
            role=Role.admin,
            permissions={P.manage_rooms, P.view_financials, P.approve_maintenance},
            level=5,
            health_metrics=HealthMetrics(sleep_hours=7, study_hours=0, activity_level=40),
        ),
        # -------------------------------------------------
        # Maintenance staff
        # -------------------------------------------------
        User(
            id="staff-north",
            name="Electrician – North Hall",
            email="maint1@university.edu",
            secret="Maintenance123!",
            role=Role.staff,
            permissions={P.approve_maintenance},
            level=3,
            health_metrics=HealthMetrics(sleep_hours=8, study_hours=0, activity_level=90),
        ),
        User(
            id="staff-south",
            name="Plumber – South Hall",
            email="maint2@university.edu",
            secret="Maintenance123!",
            role=Role.staff,
            permissions={P.approve_maintenance},
            level=3,
            health_metrics=HealthMetrics(sleep_hours=8, study_hours=0, activity_level=90),
        ),
        # -------------------------------------------------
        # Gate security
        # -------------------------------------------------
        User(
            id="sec-north",
            name="Gate Staff – North Entry",
            email="security1@university.edu",
            secret="GateAccess123!",
            role=Role.security,
            permissions={P.gate_access},
            level=2,
            health_metrics=HealthMetrics(sleep_hours=7, study_hours=0, activity_level=60),
        ),
        User(
            id="sec-south",
            name="Gate Staff – South Entry",
            email="security2@university.edu",
            secret="GateAccess123!",
            role=Role.security,
            permissions={P.gate_access},
            level=2,
            health_metrics=HealthMetrics(sleep_hours=7, study_hours=0, activity_level=60),
        ),
        # -------------------------------------------------
        # Students
        # -------------------------------------------------
        _student(
            "1001", "John Doe", "R101", CheckInStatus.checked_in, 1450, 5, 88,
            StudentPreferences(sleep_habit="Night Owl", study_environment="Quiet", cleanliness="Neat", hobbies=["Coding", "Chess"]),
            HealthMetrics(sleep_hours=7.5, study_hours=5, activity_level=80),
            [Badge(id="b1", name="Punctual Payer", icon="💰", description="Always pays fees on time")],
        ),
        _student(
            "1002", "Jane Smith", "R102", CheckInStatus.checked_in, 820, 3, 72,
            StudentPreferences(sleep_habit="Early Bird", study_environment="Social", cleanliness="Relaxed", hobbies=["Reading", "Gaming"]),
            HealthMetrics(sleep_hours=6, study_hours=8, activity_level=45),
            [Badge(id="b3", name="Clean Room", icon="✨", description="Passes all inspections")],
        ),
        _student(
            "1003", "Alex Johnson", "R201", CheckInStatus.pending_approval, 500, 2, 65,
            StudentPreferences(sleep_habit="Night Owl", study_environment="Social", cleanliness="Relaxed", hobbies=["Music", "Fitness"]),
            HealthMetrics(sleep_hours=5, study_hours=6, activity_level=95),
        ),
        _student(
            "1004", "Maria Lee", "R202", CheckInStatus.not_checked_in, 1200, 4, 90,
            StudentPreferences(sleep_habit="Early Bird", study_environment="Quiet", cleanliness="Neat", hobbies=["Art", "Swimming"]),
            HealthMetrics(sleep_hours=8, study_hours=4, activity_level=70),
        ),
        _student(
            "1005", "Samuel T.", "R103", CheckInStatus.checked_in, 300, 1, 82,
            StudentPreferences(sleep_habit="Early Bird", study_environment="Quiet", cleanliness="Neat", hobbies=["Photography"]),
            HealthMetrics(sleep_hours=7, study_hours=5, activity_level=30),
        ),
        _student(
            "1006", "Fatima K.", "R203", CheckInStatus.checked_in, 600, 2, 95,
            StudentPreferences(sleep_habit="Night Owl", study_environment="Quiet", cleanliness="Neat", hobbies=["Cooking"]),
            HealthMetrics(sleep_hours=7, study_hours=9, activity_level=50),
        ),
    ]


def seed_rooms() -> List[Room]:
    def room(room_id, number, floor, hall, cleaned, compat):
        return Room(
            id=room_id, number=number, floor=floor, dormitory=hall,
            capacity=2, occupied=1, status=RoomStatus.available,
            last_cleaned=cleaned, avg_compatibility=compat,
        )

    return [
        # North Hall
        room("R101", "101", 1, "North Hall", "2024-01-24", 85),
        room("R102", "102", 1, "North Hall", "2024-01-23", 70),
        room("R103", "103", 1, "North Hall", "2024-01-25", 92),
        # South Hall
        room("R201", "201", 2, "South Hall", "2024-01-22", 100),
        room("R202", "202", 2, "South Hall", "2024-01-15", 0),
        room("R203", "203", 2, "South Hall", "2024-01-26", 88),
    ]


def seed_maintenance() -> List[MaintenanceRequest]:
    now = datetime.now(timezone.utc)
    return [
        MaintenanceRequest(
            id="M1", student_id="s1001", student_name="John Doe", room_number="101",
            category=MaintenanceCategory.plumbing, description="Leaking faucet in the bathroom.",
            status=MaintenanceStatus.pending, priority=Priority.medium, created_at=now,
        ),
        MaintenanceRequest(
            id="M2", student_id="s1003", student_name="Alex Johnson", room_number="201",
            category=MaintenanceCategory.electrical, description="Sparking outlet near the bed.",
            status=MaintenanceStatus.in_progress, priority=Priority.high,
            created_at=now - timedelta(days=1),
        ),
    ]


def seed_payments() -> List[Payment]:
    return [
        Payment(id="P1", student_id="s1001", amount=1500, status=PaymentStatus.paid, due_date="2024-02-01",
                description="Semester 2 Rent", settlement_reference="0xabc123"),
        Payment(id="P2", student_id="s1001", amount=200, status=PaymentStatus.pending, due_date="2024-03-01",
                description="Utility Overdue"),
        Payment(id="P3", student_id="s1002", amount=1500, status=PaymentStatus.pending, due_date="2024-02-01",
                description="Semester 2 Rent"),
        Payment(id="P4", student_id="s1004", amount=1500, status=PaymentStatus.overdue, due_date="2024-01-01",
                description="Semester 1 Rent"),
    ]


def seed_visitors() -> List[Visitor]:
    return [
        Visitor(id="V1", name="Robert Smith", resident_id="s1001", resident_name="John Doe",
                expected_arrival="2024-02-15T14:00:00Z", status=VisitorStatus.upcoming, visit_type=VisitType.friend),
        Visitor(id="V2", name="Mary Watson", resident_id="s1002", resident_name="Jane Smith",
                expected_arrival="2024-02-14T10:00:00Z", status=VisitorStatus.checked_in, visit_type=VisitType.family),
    ]


def seed_events() -> List[DormEvent]:
    return [
        DormEvent(id="E1", title="Floor 1 Gaming Night", description="Tournament-style Mario Kart night in the lounge.",
                  location="North Hall Lounge", time="Tonight 8 PM", xp_reward=50, icon="🎮", attendees=["s1001", "s1002"]),
        DormEvent(id="E2", title="Study Hub Orientation", description="Learn how to maximize your study time with our resources.",
                  location="South Hall Library", time="Mon 2 PM", xp_reward=20, icon="📚"),
        DormEvent(id="E3", title="Dorm BBQ Social", description="Free food and networking with other residents.",
                  location="Outdoor Courtyard", time="Sat 12 PM", xp_reward=100, icon="🍔", attendees=["s1001"]),
    ]


def build_entity_store(clock: Optional[Callable[[], datetime]] = None) -> EntityStore:
    return EntityStore(
        users=seed_users(),
        rooms=seed_rooms(),
        maintenance=seed_maintenance(),
        payments=seed_payments(),
        visitors=seed_visitors(),
        events=seed_events(),
        clock=clock,
    )
