# tests/test_permissions.py

"""
Tests for permission checks and access control.
"""

import pytest

from core.errors import NotAuthenticated, PermissionDenied
from core.permission_helpers import has_capability, require_capability
from core.permissions import ACTIONS, ALL_PERMISSIONS
from models.enums import Permission, Role
from models.user import Session


def make_session(role: Role, permissions=()) -> Session:
    return Session(
        user_id="u1",
        name="Test User",
        email="test@university.edu",
        role=role,
        permissions=frozenset(permissions),
    )


@pytest.mark.parametrize("role", list(Role))
def test_capability_is_literal_membership(role):
    """The role never grants anything on its own."""
    session = make_session(role, {Permission.gate_access})

    for capability in ALL_PERMISSIONS:
        assert has_capability(session, capability) == (capability == Permission.gate_access)


def test_admin_without_capability_is_denied():
    session = make_session(Role.admin, {Permission.manage_rooms})

    with pytest.raises(PermissionDenied) as exc:
        require_capability(session, Permission.security_lockdown, "toggle_lockdown")

    assert exc.value.capability == "security-lockdown"
    assert "toggle_lockdown" in exc.value.message


def test_no_session_means_no_capability():
    assert has_capability(None, Permission.manage_rooms) is False
    with pytest.raises(NotAuthenticated):
        require_capability(None, Permission.manage_rooms)


def test_student_holds_submit_maintenance():
    session = make_session(Role.student, {Permission.submit_maintenance})

    require_capability(session, Permission.submit_maintenance)


def test_action_names_match_catalogue_keys():
    for name, action in ACTIONS.items():
        assert action.name == name


def test_lockdown_toggle_skips_tab_gate():
    assert ACTIONS["toggle_lockdown"].tab is None
    assert ACTIONS["toggle_lockdown"].capability == Permission.security_lockdown
