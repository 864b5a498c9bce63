"""Tests for audit logging, audit storage and settings."""

import pytest
from decimal import Decimal
from uuid import uuid4

from mocha.audit import AuditLogger, create_correlation_id
from mocha.config import (
    LedgerSettings,
    LoggingSettings,
    QuerySettings,
    get_settings,
    validate_all_settings,
)
from mocha.models.audit import AuditEvent, AuditEventBuilder, AuditEventType
from mocha.services.storage import InMemoryAuditStorage, StorageError


class FailingStorage(InMemoryAuditStorage):
    def append_event(self, event):
        raise StorageError("disk on fire")


class TestInMemoryAuditStorage:

    def test_append_and_recent(self):
        storage = InMemoryAuditStorage()
        first = AuditEvent(event_type=AuditEventType.INCOME_ADDED, description="one")
        second = AuditEvent(event_type=AuditEventType.GOAL_CREATED, description="two")

        storage.append_event(first)
        storage.append_event(second)

        assert storage.get_recent_events() == [second, first]
        assert storage.get_recent_events(1) == [second]
        assert storage.get_recent_events(0) == []

    def test_by_correlation_and_entity(self):
        storage = InMemoryAuditStorage()
        correlation_id, goal_id = uuid4(), uuid4()
        storage.append_event(AuditEventBuilder.goal_progress_added(goal_id, "5", "5", correlation_id))
        storage.append_event(AuditEventBuilder.goal_completed(goal_id, "Trip", "0", correlation_id))
        storage.append_event(AuditEventBuilder.onboarding_completed(uuid4()))

        assert len(storage.get_events_by_correlation_id(correlation_id)) == 2
        assert len(storage.get_events_by_entity("goal", goal_id)) == 2
        assert storage.get_events_by_entity("jar", goal_id) == []

    def test_full_storage_raises(self):
        storage = InMemoryAuditStorage(max_events=1)
        storage.append_event(AuditEventBuilder.onboarding_completed(uuid4()))
        with pytest.raises(StorageError):
            storage.append_event(AuditEventBuilder.onboarding_completed(uuid4()))


class TestAuditLogger:

    def test_log_without_storage(self):
        assert AuditLogger().log(AuditEventBuilder.onboarding_completed(uuid4())) is True

    def test_log_persists(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        event = AuditEventBuilder.command_during_onboarding("transfer_funds", uuid4())

        assert logger.log(event) is True
        assert storage.get_recent_events() == [event]

    def test_storage_failure_does_not_raise(self):
        logger = AuditLogger(FailingStorage())
        assert logger.log(AuditEventBuilder.onboarding_completed(uuid4())) is False

    def test_storage_failure_does_not_break_commands(self):
        from mocha.orchestrator import AppState

        state = AppState(audit_logger=AuditLogger(FailingStorage()))
        state.add_income("5")

        assert len(state.snapshot().jars) == 1

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()


class TestSettings:

    def test_defaults(self):
        ledger = LedgerSettings()
        assert ledger.default_jar_name == "Main Jar"
        assert ledger.default_jar_category == "savings"
        assert ledger.currency_code == "USD"
        assert ledger.near_completion_ratio == Decimal("0.75")
        assert QuerySettings().suggested_actions == ["Check jars", "Add new goal"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("MOCHA_CURRENCY_CODE", "eur")
        monkeypatch.setenv("MOCHA_QUERY_SUGGESTED_ACTIONS", '["Save more"]')

        assert LedgerSettings().currency_code == "EUR"
        assert QuerySettings().suggested_actions == ["Save more"]

    def test_invalid_ratio_rejected(self, monkeypatch):
        monkeypatch.setenv("MOCHA_NEAR_COMPLETION_RATIO", "1.5")
        with pytest.raises(ValueError):
            LedgerSettings()

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("MOCHA_LOG_LEVEL", "debug")
        assert LoggingSettings().level == "DEBUG"

    def test_validate_all_settings(self, monkeypatch):
        assert validate_all_settings() == {"ledger": True, "query": True, "logging": True}

        monkeypatch.setenv("MOCHA_LOG_LEVEL", "LOUD")
        results = validate_all_settings()
        assert results["logging"] is False
        assert "logging_error" in results

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
