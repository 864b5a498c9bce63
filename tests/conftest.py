"""Shared fixtures: a fresh AppState per test with an in-memory audit trail."""

import pytest

from mocha.audit import AuditLogger
from mocha.orchestrator import AppState
from mocha.services.storage import InMemoryAuditStorage


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def state(audit_storage):
    return AppState(audit_logger=AuditLogger(audit_storage))


@pytest.fixture
def active_state(state):
    state.complete_onboarding()
    return state


@pytest.fixture
def two_jars(active_state):
    """Jars A (balance 100) and B (balance 0), in that order."""
    a = active_state.create_jar("A").entity_id
    b = active_state.create_jar("B").entity_id
    active_state.add_income("100")
    return active_state, a, b
