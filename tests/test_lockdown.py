# tests/test_lockdown.py

"""
Tests for the facility lockdown gate and its transitions.
"""

import pytest

from core.errors import LockedOut, PermissionDenied
from models.enums import LockdownState, Severity


def test_toggle_without_capability_changes_nothing(manager, login):
    login("dormadmin")
    audit_before = len(manager.audit)
    notifications_before = len(manager.notifications())

    with pytest.raises(PermissionDenied):
        manager.toggle_lockdown()

    assert manager.lockdown.state == LockdownState.normal
    assert len(manager.audit) == audit_before
    notifications = manager.notifications()
    assert len(notifications) == notifications_before + 1
    assert notifications[0].title == "❌ ACCESS DENIED"


def test_enter_and_exit_are_audited(manager, login):
    login("superadmin")

    assert manager.toggle_lockdown() == LockdownState.locked
    entered = manager.audit.entries(limit=1)[0]
    assert entered.action == "Security"
    assert entered.severity == Severity.critical
    assert manager.lockdown.engaged_by == "University Head"
    assert manager.notifications()[0].title == "⚠️ SYSTEM LOCKDOWN"

    assert manager.toggle_lockdown() == LockdownState.normal
    exited = manager.audit.entries(limit=1)[0]
    assert exited.severity == Severity.warning
    assert exited.details == "Lockdown override successful"
    assert manager.lockdown.engaged_by is None


def test_enter_twice_is_a_no_op(manager, login):
    login("superadmin")
    manager.enter_lockdown()
    count = len(manager.audit)

    assert manager.enter_lockdown() == LockdownState.locked
    assert len(manager.audit) == count


def test_locked_out_regardless_of_capabilities(manager, login):
    login("superadmin")
    manager.enter_lockdown()
    manager.impersonate("sec-north")
    audit_before = len(manager.audit)

    with pytest.raises(LockedOut):
        manager.check_in_visitor("V1")

    assert [v.status for v in manager.store.list_visitors() if v.id == "V1"] == ["Upcoming"]
    assert len(manager.audit) == audit_before
    assert manager.notifications()[0].title == "🔒 LOCKDOWN ACTIVE"


def test_admin_keeps_full_reach_during_lockdown(manager, login):
    login("superadmin")
    manager.enter_lockdown()

    room = manager.reassign_room("s1004", "R101")

    assert room.occupied == 2
    assert "audit" in manager.reachable_tabs()


def test_student_navigation_limited_to_allow_list(manager, login):
    login("superadmin")
    manager.enter_lockdown()
    manager.impersonate("s1001")

    assert manager.reachable_tabs() == ["assistant"]
    assert manager.navigate("assistant") == "assistant"
    with pytest.raises(LockedOut):
        manager.navigate("events")
    with pytest.raises(LockedOut):
        manager.join_event("E2")


def test_logout_releases_lockdown(manager, login):
    login("superadmin")
    manager.enter_lockdown()

    manager.logout()

    assert manager.lockdown.state == LockdownState.normal


def test_signing_in_over_a_session_ends_its_lockdown(manager, login):
    login("superadmin")
    manager.enter_lockdown()

    login("student")

    assert manager.lockdown.state == LockdownState.normal
    assert manager.lockdown.engaged_by is None
    assert [e.action for e in manager.audit.entries()] == ["Login", "Logout", "Security", "Login"]
    assert manager.reachable_tabs() != ["assistant"]
