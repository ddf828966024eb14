# models/user.py

from typing import FrozenSet, List, Optional
from pydantic import BaseModel, Field, SecretStr

from models.enums import CheckInStatus, Permission, Role


# ===============================================================
# RESIDENT PROFILE PIECES
# ===============================================================

class StudentPreferences(BaseModel):
    """Lifestyle answers used for roommate compatibility scoring."""
    sleep_habit: str = "Early Bird"          # Early Bird | Night Owl
    study_environment: str = "Quiet"         # Quiet | Social
    cleanliness: str = "Neat"                # Neat | Relaxed
    hobbies: List[str] = []


class Badge(BaseModel):
    id: str
    name: str
    icon: str
    description: str


class HealthMetrics(BaseModel):
    sleep_hours: float = 0
    study_hours: float = 0
    activity_level: int = 0


# ===============================================================
# USER ACCOUNT (owned by the entity store)
# ===============================================================

class User(BaseModel):
    """
    A console account. `secret` is an opaque credential compared verbatim.
    `permissions` is the per-deployment capability set, independent of role.
    """
    id: str
    name: str
    email: str
    secret: SecretStr
    role: Role
    permissions: FrozenSet[Permission] = frozenset()

    student_id: Optional[str] = None
    assigned_room_id: Optional[str] = None
    check_in_status: Optional[CheckInStatus] = None

    points: int = 0
    level: int = 1
    wellness_score: int = 100
    preferences: Optional[StudentPreferences] = None
    badges: List[Badge] = []
    health_metrics: HealthMetrics = Field(default_factory=HealthMetrics)


# ===============================================================
# SESSION (owned by the session manager)
# ===============================================================

class Session(BaseModel):
    """
    The identity currently driving the console.

    Gamification fields and check-in status are mutable; identity, role and
    permissions are fixed for the session's lifetime.
    """
    user_id: str
    name: str
    email: str
    role: Role
    permissions: FrozenSet[Permission] = frozenset()

    student_id: Optional[str] = None
    assigned_room_id: Optional[str] = None
    check_in_status: Optional[CheckInStatus] = None
    points: int = 0
    level: int = 1

    # set when the session was created by "simulate as user"
    impersonated_by: Optional[str] = None

    @classmethod
    def from_user(cls, user: User, impersonated_by: Optional[str] = None) -> "Session":
        return cls(
            user_id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            permissions=user.permissions,
            student_id=user.student_id,
            assigned_room_id=user.assigned_room_id,
            check_in_status=user.check_in_status,
            points=user.points,
            level=user.level,
            impersonated_by=impersonated_by,
        )


class PersistedSession(BaseModel):
    """
    Identity-only record written to the external state store on login.
    Never carries the credential or any audit data.
    """
    id: str
    name: str
    email: str
    role: Role
    permissions: List[Permission] = []
    student_id: Optional[str] = None
    assigned_room_id: Optional[str] = None
    check_in_status: Optional[CheckInStatus] = None
    points: int = 0
    level: int = 1

    @classmethod
    def from_session(cls, session: Session) -> "PersistedSession":
        return cls(
            id=session.user_id,
            name=session.name,
            email=session.email,
            role=session.role,
            permissions=sorted(session.permissions, key=lambda p: p.value),
            student_id=session.student_id,
            assigned_room_id=session.assigned_room_id,
            check_in_status=session.check_in_status,
            points=session.points,
            level=session.level,
        )

    def to_session(self) -> Session:
        return Session(
            user_id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            permissions=frozenset(self.permissions),
            student_id=self.student_id,
            assigned_room_id=self.assigned_room_id,
            check_in_status=self.check_in_status,
            points=self.points,
            level=self.level,
        )


class SessionRead(BaseModel):
    """Returned to API consumers."""
    user_id: str
    name: str
    email: str
    role: Role
    permissions: List[Permission]
    points: int
    level: int
    check_in_status: Optional[CheckInStatus] = None
    assigned_room_id: Optional[str] = None
    impersonated_by: Optional[str] = None
    active_tab: Optional[str] = None
