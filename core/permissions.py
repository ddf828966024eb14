# ============================================
# CAPABILITY UNIVERSE + GATED ACTION CATALOGUE
# ============================================
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from models.enums import Permission


# Every capability a session may legitimately hold.
ALL_PERMISSIONS: FrozenSet[Permission] = frozenset(Permission)


@dataclass(frozen=True)
class ConsoleAction:
    """
    A named mutating action.

    `tab` is what the lockdown gate checks; `capability` is what the
    permission evaluator checks (None = any authenticated session).
    """
    name: str
    tab: Optional[str]
    capability: Optional[Permission] = None


def _action(name: str, tab: Optional[str], capability: Optional[Permission] = None) -> ConsoleAction:
    return ConsoleAction(name=name, tab=tab, capability=capability)


ACTIONS: Dict[str, ConsoleAction] = {
    # =====================================================
    # ROOMS
    # =====================================================
    "reassign_room": _action("reassign_room", "rooms", Permission.reassign_room),
    "set_room_status": _action("set_room_status", "rooms", Permission.manage_rooms),
    "approve_check_in": _action("approve_check_in", "rooms", Permission.manage_rooms),

    # =====================================================
    # MAINTENANCE
    # =====================================================
    "submit_maintenance": _action("submit_maintenance", "maintenance", Permission.submit_maintenance),
    "advance_maintenance": _action("advance_maintenance", "maintenance", Permission.approve_maintenance),
    "rate_maintenance": _action("rate_maintenance", "maintenance", Permission.submit_maintenance),

    # =====================================================
    # PAYMENTS: settling one's own invoice needs no capability;
    # settling someone else's is checked against override-fee
    # =====================================================
    "settle_payment": _action("settle_payment", "payments"),
    "override_fee": _action("override_fee", "payments", Permission.override_fee),

    # =====================================================
    # VISITORS
    # =====================================================
    "register_visitor": _action("register_visitor", "visitors"),
    "check_in_visitor": _action("check_in_visitor", "visitors", Permission.gate_access),
    "check_out_visitor": _action("check_out_visitor", "visitors", Permission.gate_access),
    "deny_visitor": _action("deny_visitor", "visitors", Permission.gate_access),

    # =====================================================
    # RESIDENT LIFE
    # =====================================================
    "join_event": _action("join_event", "events"),
    "request_check_in": _action("request_check_in", "my-room"),

    # =====================================================
    # ADMINISTRATION
    # =====================================================
    "impersonate": _action("impersonate", "users", Permission.manage_users),

    # Exempt from the tab gate: whoever holds the capability must
    # always be able to lift a lockdown.
    "toggle_lockdown": _action("toggle_lockdown", None, Permission.security_lockdown),
}


# Read-side gate
VIEW_AUDIT = _action("view_audit_logs", "audit", Permission.view_audit_logs)
