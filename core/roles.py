# ============================================
# ROLE → DEFAULT NAVIGATION
# ============================================
# Role decides where a session lands and which tabs it lists.
# It is never an authorization shortcut; see core.permission_helpers.

from typing import Dict, FrozenSet, List

from models.enums import Role


ROLE_TABS: Dict[Role, List[str]] = {

    # =====================================================
    # ADMIN
    # =====================================================
    Role.admin: [
        "dashboard",
        "rooms",
        "maintenance",
        "audit",
        "visitors",
        "architecture",
        "reports",
    ],

    # =====================================================
    # STUDENT
    # =====================================================
    Role.student: [
        "my-room",
        "wellness",
        "leaderboard",
        "swaps",
        "visitors",
        "events",
        "assistant",
    ],

    # =====================================================
    # MAINTENANCE STAFF
    # =====================================================
    Role.staff: [
        "tasks",
        "preventative",
    ],

    # =====================================================
    # GATE SECURITY
    # =====================================================
    Role.security: [
        "visitors",
        "logs",
    ],
}


# Tabs a non-Admin role can still reach while the facility is locked down.
LOCKDOWN_ALLOWED_TABS: FrozenSet[str] = frozenset({"dashboard", "assistant"})


def initial_tab(role: Role) -> str:
    """Admin → overview, Student → personal unit, everyone else → task pipeline."""
    if role == Role.admin:
        return "dashboard"
    if role == Role.student:
        return "my-room"
    return "tasks"


def tabs_for(role: Role) -> List[str]:
    return list(ROLE_TABS.get(role, []))
