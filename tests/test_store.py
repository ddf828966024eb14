# tests/test_store.py

"""
Tests for entity-store mutations and their invariants.
"""

import pytest

from core.errors import EntityNotFound, RuleViolation
from models.enums import (
    CheckInStatus,
    MaintenanceCategory,
    MaintenanceStatus,
    PaymentStatus,
    RoomStatus,
    Sentiment,
    VisitorStatus,
)


# -----------------------------------------------------
# Rooms
# -----------------------------------------------------
def test_reassign_moves_resident_between_rooms(store):
    resident, room = store.reassign_room("s1004", "R101")

    assert resident.assigned_room_id == "R101"
    assert room.occupied == 2
    assert room.status == RoomStatus.full
    source = store.get_room("R202")
    assert source.occupied == 0
    assert source.status == RoomStatus.available


def test_reassign_into_full_room_is_rejected_not_clamped(store):
    store.reassign_room("s1004", "R101")
    before = store.list_rooms()

    with pytest.raises(RuleViolation):
        store.reassign_room("s1006", "R101")

    assert store.list_rooms() == before
    assert store.get_user("s1006").assigned_room_id == "R203"
    assert all(r.occupied <= r.capacity for r in store.list_rooms())


def test_reassign_into_maintenance_room_is_rejected(store):
    store.set_room_status("R103", RoomStatus.maintenance)

    with pytest.raises(RuleViolation):
        store.reassign_room("s1004", "R103")


def test_reassign_to_same_room_is_rejected(store):
    with pytest.raises(RuleViolation):
        store.reassign_room("s1001", "R101")


def test_full_status_cannot_be_set_directly(store):
    with pytest.raises(RuleViolation):
        store.set_room_status("R101", RoomStatus.full)


def test_unknown_room_raises_not_found(store):
    with pytest.raises(EntityNotFound):
        store.reassign_room("s1001", "R999")


# -----------------------------------------------------
# Maintenance
# -----------------------------------------------------
def test_new_request_is_pending_and_first(store):
    request = store.create_maintenance(
        student_id="s1002",
        student_name="Jane Smith",
        room_number="102",
        category=MaintenanceCategory.furniture,
        description="Broken desk chair",
    )

    assert request.status == MaintenanceStatus.pending
    assert request.id.startswith("M")
    assert store.list_maintenance()[0] == request


def test_maintenance_only_moves_forward(store):
    assert store.advance_maintenance("M1").status == MaintenanceStatus.in_progress
    assert store.advance_maintenance("M1").status == MaintenanceStatus.completed

    with pytest.raises(RuleViolation):
        store.advance_maintenance("M1")
    with pytest.raises(RuleViolation):
        store.advance_maintenance("M2", MaintenanceStatus.pending)


def test_only_completed_requests_take_feedback(store):
    with pytest.raises(RuleViolation):
        store.annotate_maintenance("M1", 4, Sentiment.positive)

    store.advance_maintenance("M2")
    rated = store.annotate_maintenance("M2", 2, Sentiment.negative)

    assert rated.rating == 2
    assert store.sentiment_counts()["NEGATIVE"] == 1


# -----------------------------------------------------
# Payments
# -----------------------------------------------------
def test_settle_assigns_reference_once(store):
    paid = store.settle_payment("P2")

    assert paid.status == PaymentStatus.paid
    assert paid.settlement_reference.startswith("0x")

    with pytest.raises(RuleViolation):
        store.settle_payment("P2")
    assert store.get_payment("P2").settlement_reference == paid.settlement_reference


def test_override_fee_returns_previous_amount(store):
    payment, previous = store.override_fee("P3", 1200)

    assert previous == 1500
    assert payment.amount == 1200


def test_override_fee_rejected_once_paid(store):
    with pytest.raises(RuleViolation):
        store.override_fee("P1", 10)


# -----------------------------------------------------
# Visitors
# -----------------------------------------------------
def test_visitor_lifecycle(store, clock):
    visitor = store.transition_visitor("V1", VisitorStatus.checked_in)
    assert visitor.check_in_time == clock.now

    visitor = store.transition_visitor("V1", VisitorStatus.checked_out)
    assert visitor.check_out_time == clock.now

    with pytest.raises(RuleViolation):
        store.transition_visitor("V1", VisitorStatus.checked_in)


def test_denied_visitor_is_terminal(store):
    store.transition_visitor("V1", VisitorStatus.denied)

    with pytest.raises(RuleViolation):
        store.transition_visitor("V1", VisitorStatus.checked_in)


# -----------------------------------------------------
# Events / check-in
# -----------------------------------------------------
def test_join_event_is_idempotent(store):
    event, joined = store.join_event("E2", "s1004")
    again, joined_again = store.join_event("E2", "s1004")

    assert joined is True
    assert joined_again is False
    assert again.attendees.count("s1004") == 1


def test_check_in_request_then_approval(store):
    assert store.request_check_in("s1004").check_in_status == CheckInStatus.pending_approval
    with pytest.raises(RuleViolation):
        store.request_check_in("s1004")

    assert store.approve_check_in("s1004").check_in_status == CheckInStatus.checked_in


# -----------------------------------------------------
# Derived figures
# -----------------------------------------------------
def test_occupancy_rate(store):
    assert store.occupancy_rate() == 50.0


def test_leaderboard_ranks_by_points(store):
    board = store.leaderboard()

    assert board[0]["name"] == "John Doe"
    assert [row["rank"] for row in board] == list(range(1, len(board) + 1))
    assert board == sorted(board, key=lambda row: -row["points"])


def test_find_user_by_email_ignores_case_and_padding(store):
    assert store.find_user_by_email("  SuperAdmin@University.edu ").id == "super-admin"
    assert store.find_user_by_email("nobody@university.edu") is None
