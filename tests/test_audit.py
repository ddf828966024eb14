# tests/test_audit.py

"""
Tests for the rolling audit trail.
"""

import pytest

from core.audit import AuditLogger
from models.enums import Severity


def test_record_defaults(clock):
    audit = AuditLogger(clock=clock)

    entry = audit.record("Jane", "Login", "Authenticated session for role: STUDENT")

    assert entry.severity == Severity.info
    assert entry.timestamp == clock.now
    assert audit.entries() == [entry]


def test_missing_actor_is_recorded_as_system():
    audit = AuditLogger()

    entry = audit.record(None, "Maintenance", "Preventative sweep")

    assert entry.user == "System"


def test_entries_newest_first_with_limit():
    audit = AuditLogger()
    for i in range(5):
        audit.record("Admin", "Room", f"change {i}")

    details = [e.details for e in audit.entries(limit=3)]

    assert details == ["change 4", "change 3", "change 2"]


def test_buffer_evicts_oldest_after_capacity():
    audit = AuditLogger(capacity=100)
    first = audit.record("Admin", "Room", "first")
    for i in range(100):
        audit.record("Admin", "Room", f"later {i}")

    entries = audit.entries()

    assert len(audit) == 100
    assert first not in entries
    assert entries[0].details == "later 99"
    assert entries[-1].details == "later 0"


def test_entries_are_immutable():
    audit = AuditLogger()
    entry = audit.record("Admin", "Room", "x")

    with pytest.raises(Exception):
        entry.details = "rewritten"


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        AuditLogger(capacity=0)
