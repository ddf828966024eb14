# -------------------------
# Enums
# -------------------------
from .enums import (
    CheckInStatus,
    LockdownState,
    MaintenanceCategory,
    MaintenanceStatus,
    PaymentStatus,
    Permission,
    Priority,
    Role,
    RoomStatus,
    Sentiment,
    Severity,
    Theme,
    VisitorStatus,
    VisitType,
)

# -------------------------
# Identity / session
# -------------------------
from .user import (
    Badge,
    HealthMetrics,
    PersistedSession,
    Session,
    SessionRead,
    StudentPreferences,
    User,
)

# -------------------------
# Entities
# -------------------------
from .room import Room, RoomReassign, RoomStatusUpdate
from .maintenance import MaintenanceCreate, MaintenanceFeedback, MaintenanceRequest
from .payment import FeeOverride, Payment
from .visitor import Visitor, VisitorCreate
from .dorm_event import DormEvent

# -------------------------
# Audit / notifications
# -------------------------
from .audit import AuditEntry
from .notification import Notification

# -------------------------
# Request / response bodies
# -------------------------
from .auth import (
    ImpersonateRequest,
    LockdownStatus,
    LoginRequest,
    LoginResponse,
    NavigateRequest,
    ThemePreference,
)
from .assistant import (
    ChatMessage,
    ChatRequest,
    CompatibilityReport,
    CompatibilityRequest,
    IssueAnalysis,
    SentimentRequest,
    SentimentResult,
)
