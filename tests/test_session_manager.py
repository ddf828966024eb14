# tests/test_session_manager.py

"""
End-to-end kernel scenarios: sign-in, gated actions, audit and
notifications flowing through the session manager.
"""

import json
from unittest.mock import Mock

import pytest

from core.errors import (
    InvalidCredentials,
    NotAuthenticated,
    PermissionDenied,
    RuleViolation,
)
from core.session_manager import build_session_manager
from models.enums import (
    CheckInStatus,
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
)
from models.assistant import IssueAnalysis


# =====================================================
# AUTHENTICATION
# =====================================================
@pytest.mark.parametrize(
    "who, role, tab",
    [
        ("superadmin", Role.admin, "dashboard"),
        ("student", Role.student, "my-room"),
        ("staff", Role.staff, "tasks"),
        ("security", Role.security, "tasks"),
    ],
)
def test_login_selects_initial_tab_and_audits_once(manager, login, who, role, tab):
    session = login(who)

    assert session.role == role
    assert manager.active_tab == tab
    entries = manager.audit.entries()
    assert len(entries) == 1
    assert entries[0].action == "Login"
    assert entries[0].severity == Severity.info
    assert entries[0].details == f"Authenticated session for role: {role.value}"


def test_login_persists_identity_without_secret(manager, login, state, test_settings):
    login("student")

    record = json.loads(state.get(test_settings.SESSION_STORAGE_KEY))

    assert record["id"] == "s1001"
    assert record["permissions"] == ["submit-maintenance"]
    assert "secret" not in record
    assert "StudentTemp123!" not in state.get(test_settings.SESSION_STORAGE_KEY)


def test_failed_login_sets_expiring_banner(manager, clock):
    with pytest.raises(InvalidCredentials):
        manager.authenticate("superadmin@university.edu", "wrong")

    assert manager.session is None
    assert len(manager.audit) == 0
    assert manager.login_error == "Invalid identity or access key"
    clock.advance(3)
    assert manager.login_error is None


def test_unknown_identifier_is_rejected(manager):
    with pytest.raises(InvalidCredentials):
        manager.authenticate("ghost@university.edu", "StudentTemp123!")


def test_logout_clears_session_and_record(manager, login, state, test_settings):
    login("student")

    assert manager.logout() is True

    assert manager.session is None
    assert state.get(test_settings.SESSION_STORAGE_KEY) is None
    assert manager.audit.entries()[0].action == "Logout"
    assert manager.notifications() == []
    assert manager.logout() is False


def test_signing_in_again_logs_the_previous_session_out(manager, login, state, test_settings):
    login("superadmin")
    manager.enter_lockdown()

    login("student")

    assert manager.session.user_id == "s1001"
    logout = manager.audit.entries()[1]
    assert (logout.user, logout.action) == ("University Head", "Logout")
    assert manager.notifications() == []
    assert json.loads(state.get(test_settings.SESSION_STORAGE_KEY))["id"] == "s1001"


def test_failed_sign_in_keeps_the_current_session(manager, login):
    login("student")

    with pytest.raises(InvalidCredentials):
        manager.authenticate("superadmin@university.edu", "wrong")

    assert manager.session.user_id == "s1001"
    assert manager.audit.entries()[0].action == "Login"


def test_actions_require_a_session(manager):
    with pytest.raises(NotAuthenticated):
        manager.join_event("E1")


# =====================================================
# SESSION RESTORE
# =====================================================
def test_restore_rehydrates_from_store(store, state, test_settings, clock, login, manager):
    login("student")
    fresh = build_session_manager(store, state=state, config=test_settings, clock=clock)

    session = fresh.restore_session()

    assert session.user_id == "s1001"
    assert fresh.active_tab == "my-room"
    assert len(fresh.audit) == 0


def test_restore_tolerates_identity_missing_from_store(store, state, test_settings, clock):
    state.set(test_settings.SESSION_STORAGE_KEY, json.dumps({
        "id": "s9999",
        "name": "Former Resident",
        "email": "s9999@university.edu",
        "role": "STUDENT",
        "permissions": ["submit-maintenance"],
    }))
    manager = build_session_manager(store, state=state, config=test_settings, clock=clock)

    session = manager.restore_session()

    assert session.name == "Former Resident"
    assert session.permissions == frozenset({Permission.submit_maintenance})


def test_restore_discards_unreadable_record(store, state, test_settings):
    state.set(test_settings.SESSION_STORAGE_KEY, "{not json")
    manager = build_session_manager(store, state=state, config=test_settings)

    assert manager.restore_session() is None
    assert state.get(test_settings.SESSION_STORAGE_KEY) is None


# =====================================================
# IMPERSONATION
# =====================================================
def test_impersonation_requires_manage_users(manager, login):
    login("dormadmin")

    with pytest.raises(PermissionDenied):
        manager.impersonate("s1002")

    assert manager.session.user_id == "admin-north"
    assert manager.notifications()[0].title == "❌ ACCESS DENIED"


def test_superadmin_can_simulate_a_resident(manager, login):
    login("superadmin")

    session = manager.impersonate("s1002")

    assert session.user_id == "s1002"
    assert session.impersonated_by == "University Head"
    assert manager.active_tab == "my-room"
    assert manager.audit.entries()[0].action == "Simulation"


# =====================================================
# AUDIT BUFFER
# =====================================================
def test_101_actions_keep_buffer_at_100(manager, login):
    login("superadmin")
    first = manager.audit.entries()[0]

    for i in range(100):
        manager.set_room_status("R103", RoomStatus.maintenance if i % 2 == 0 else RoomStatus.available)

    entries = manager.audit_log()
    assert len(entries) == 100
    assert first not in entries


def test_audit_log_needs_view_capability(manager, login):
    login("dormadmin")

    with pytest.raises(PermissionDenied):
        manager.audit_log()


# =====================================================
# GATED ACTIONS
# =====================================================
def test_event_join_twice_records_attendee_once(manager, login):
    login("student")
    audit_before = len(manager.audit)

    manager.join_event("E2")
    event = manager.join_event("E2")

    assert event.attendees.count("s1001") == 1
    assert len(manager.audit) == audit_before + 1


def test_rejection_notifies_but_is_not_audited(manager, login):
    login("student")
    audit_before = len(manager.audit)

    with pytest.raises(PermissionDenied):
        manager.reassign_room("s1001", "R202")

    assert len(manager.audit) == audit_before
    assert manager.notifications()[0].title == "❌ ACCESS DENIED"
    assert manager.store.get_user("s1001").assigned_room_id == "R101"


def test_submit_maintenance_uses_analysis(manager, login):
    login("student")
    analysis = IssueAnalysis(problem="Cracked pipe", severity=8, priority=Priority.high, estimated_cost="$120")

    request = manager.submit_maintenance(MaintenanceCategory.plumbing, "Water on the floor", analysis=analysis)

    assert request.room_number == "101"
    assert request.priority == Priority.high
    assert request.severity == 8
    assert manager.notifications()[0].tab_target == "maintenance"


def test_submit_maintenance_requires_description(manager, login):
    login("student")

    with pytest.raises(RuleViolation):
        manager.submit_maintenance(MaintenanceCategory.other, "   ")


def test_staff_advances_and_resident_rates(manager, login):
    login("staff")
    manager.advance_maintenance("M1")
    assert manager.advance_maintenance("M1").status == MaintenanceStatus.completed

    login("student2")
    with pytest.raises(RuleViolation):
        manager.rate_maintenance("M1", 5, Sentiment.positive)

    login("student")
    rated = manager.rate_maintenance("M1", 5, Sentiment.positive)
    assert rated.rating == 5


def test_student_settles_own_invoice_and_earns_points(manager, login, test_settings):
    session = login("student")

    payment = manager.settle_payment("P2")

    assert payment.status == PaymentStatus.paid
    assert manager.session.points == session.points + test_settings.PAYMENT_REWARD_POINTS
    assert manager.store.get_user("s1001").points == manager.session.points
    assert manager.notifications()[0].content == "Ledger updated. Your points balance has increased."


def test_settling_a_paid_invoice_is_rejected(manager, login):
    login("student")
    audit_before = len(manager.audit)

    with pytest.raises(RuleViolation):
        manager.settle_payment("P1")

    assert len(manager.audit) == audit_before


def test_student_cannot_settle_someone_elses_invoice(manager, login):
    login("student")

    with pytest.raises(PermissionDenied):
        manager.settle_payment("P3")

    assert manager.store.get_payment("P3").status == PaymentStatus.pending


def test_settling_on_behalf_awards_no_points(manager, login):
    login("superadmin")
    points_before = manager.store.get_user("s1002").points

    payment = manager.settle_payment("P3")

    assert payment.status == PaymentStatus.paid
    assert manager.store.get_user("s1002").points == points_before
    assert "points" not in manager.notifications()[0].content


def test_fee_override_is_a_warning(manager, login):
    login("superadmin")

    payment = manager.override_fee("P4", 1000, "hardship waiver")

    assert payment.amount == 1000
    entry = manager.audit.entries()[0]
    assert entry.severity == Severity.warning
    assert "hardship waiver" in entry.details


def test_payment_visibility_follows_capability(manager, login):
    login("student")
    assert {p.id for p in manager.payments()} == {"P1", "P2"}

    login("dormadmin")
    assert len(manager.payments()) == 4


def test_visitor_pass_and_gate_flow(manager, login):
    login("student")
    visitor = manager.register_visitor("Sam Guest", "2024-02-20T18:00:00Z")
    with pytest.raises(PermissionDenied):
        manager.check_in_visitor(visitor.id)

    login("security")
    assert manager.check_in_visitor(visitor.id).status == "Checked In"
    assert manager.check_out_visitor(visitor.id).status == "Checked Out"


def test_check_in_request_and_approval(manager, login):
    login("student")
    with pytest.raises(RuleViolation):
        manager.request_check_in()

    manager.store.update_user("s1001", check_in_status=CheckInStatus.not_checked_in)
    assert manager.request_check_in().check_in_status == CheckInStatus.pending_approval

    login("dormadmin")
    assert manager.approve_check_in("s1001").check_in_status == CheckInStatus.checked_in


# =====================================================
# TELEMETRY + THEME
# =====================================================
def test_telemetry_runs_only_outside_lockdown(manager, login):
    assert manager.telemetry.active is False

    login("superadmin")
    assert manager.telemetry.active is True

    manager.enter_lockdown()
    assert manager.telemetry.active is False

    manager.exit_lockdown()
    assert manager.telemetry.active is True

    manager.logout()
    assert manager.telemetry.active is False


def test_telemetry_tick_sets_highlight(manager, login):
    login("superadmin")
    manager.telemetry._rng = Mock(random=Mock(return_value=0.0))

    assert manager.telemetry.tick() is True
    assert manager.dashboard()["telemetry_highlight"] == "telemetry"


def test_theme_toggle_persists(manager, state, test_settings):
    assert manager.theme() == Theme.light

    assert manager.toggle_theme() == Theme.dark
    assert state.get(test_settings.THEME_STORAGE_KEY) == "dark"
    assert manager.toggle_theme() == Theme.light
