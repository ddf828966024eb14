from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Fixed set of console roles. Drives default navigation only."""

    admin = "ADMIN"
    student = "STUDENT"
    staff = "STAFF"
    security = "SECURITY"


# -----------------------------------------------------
# PERMISSION (capability tags)
# -----------------------------------------------------
class Permission(BaseStrEnum):
    """Closed universe of capabilities a session may hold."""

    manage_rooms = "manage-rooms"
    reassign_room = "reassign-room"
    override_fee = "override-fee"
    manage_users = "manage-users"
    security_lockdown = "security-lockdown"
    view_audit_logs = "view-audit-logs"
    view_financials = "view-financials"
    submit_maintenance = "submit-maintenance"
    approve_maintenance = "approve-maintenance"
    gate_access = "gate-access"


# -----------------------------------------------------
# ROOM STATUS
# -----------------------------------------------------
class RoomStatus(BaseStrEnum):
    available = "Available"
    full = "Full"
    maintenance = "Maintenance"


# -----------------------------------------------------
# MAINTENANCE
# -----------------------------------------------------
class MaintenanceStatus(BaseStrEnum):
    """Monotonic workflow: Pending → In Progress → Completed."""

    pending = "Pending"
    in_progress = "In Progress"
    completed = "Completed"


class MaintenanceCategory(BaseStrEnum):
    plumbing = "Plumbing"
    electrical = "Electrical"
    cleaning = "Cleaning"
    furniture = "Furniture"
    other = "Other"


class Priority(BaseStrEnum):
    low = "Low"
    medium = "Medium"
    high = "High"


class Sentiment(BaseStrEnum):
    positive = "POSITIVE"
    neutral = "NEUTRAL"
    negative = "NEGATIVE"


# -----------------------------------------------------
# PAYMENT STATUS
# -----------------------------------------------------
class PaymentStatus(BaseStrEnum):
    paid = "Paid"
    pending = "Pending"
    overdue = "Overdue"


# -----------------------------------------------------
# VISITORS
# -----------------------------------------------------
class VisitorStatus(BaseStrEnum):
    upcoming = "Upcoming"
    checked_in = "Checked In"
    checked_out = "Checked Out"
    denied = "Denied"


class VisitType(BaseStrEnum):
    friend = "Friend"
    family = "Family"
    maintenance = "Maintenance"
    other = "Other"


# -----------------------------------------------------
# RESIDENT CHECK-IN
# -----------------------------------------------------
class CheckInStatus(BaseStrEnum):
    not_checked_in = "Not Checked In"
    pending_approval = "Pending Approval"
    checked_in = "Checked In"
    checked_out = "Checked Out"


# -----------------------------------------------------
# AUDIT SEVERITY
# -----------------------------------------------------
class Severity(BaseStrEnum):
    info = "Info"
    warning = "Warning"
    critical = "Critical"


# -----------------------------------------------------
# LOCKDOWN
# -----------------------------------------------------
class LockdownState(BaseStrEnum):
    normal = "Normal"
    locked = "Locked"


# -----------------------------------------------------
# THEME
# -----------------------------------------------------
class Theme(BaseStrEnum):
    light = "light"
    dark = "dark"
