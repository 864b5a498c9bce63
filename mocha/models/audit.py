"""
Audit Models for Mocha

Every command that reaches the ledger is logged for audit purposes.
This provides:
1. A trace of every balance change
2. Debugging information when a command is rejected
3. The ability to reconstruct how a balance came to be

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every command has a success event and, where it can fail, a rejection event.
    """
    # Jars
    JAR_CREATED = "jar_created"
    JAR_REJECTED = "jar_rejected"
    INCOME_ADDED = "income_added"
    INCOME_IGNORED = "income_ignored"
    TRANSFER_COMPLETED = "transfer_completed"
    TRANSFER_REJECTED = "transfer_rejected"

    # Goals
    GOAL_CREATED = "goal_created"
    GOAL_REJECTED = "goal_rejected"
    GOAL_PROGRESS_ADDED = "goal_progress_added"
    GOAL_PROGRESS_REJECTED = "goal_progress_rejected"
    GOAL_COMPLETED = "goal_completed"

    # Session
    ONBOARDING_COMPLETED = "onboarding_completed"
    COMMAND_DURING_ONBOARDING = "command_during_onboarding"

    # Queries
    QUERY_ANSWERED = "query_answered"

    # System events
    OBSERVER_FAILED = "observer_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every command creates at least one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'jar', 'goal', 'query')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., progress + completion)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.income_added(jar_id, "Main Jar", "50.00", correlation_id)
        event = AuditEventBuilder.transfer_rejected(from_id, to_id, "10", "same_jar", msg, correlation_id)

    Amounts are passed as strings so details stay JSON-friendly and exact.
    User-entered names go in details only; description is length-capped.
    """

    @staticmethod
    def jar_created(
        jar_id: UUID,
        name: str,
        category: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.JAR_CREATED,
            entity_type="jar",
            entity_id=jar_id,
            correlation_id=correlation_id,
            description="Jar created",
            details={
                "name": name,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def jar_rejected(
        name: str,
        error_code: str,
        message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.JAR_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="jar",
            correlation_id=correlation_id,
            description="Jar creation rejected",
            details={"name": name},
            error_code=error_code,
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def income_added(
        jar_id: UUID,
        jar_name: str,
        amount: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_ADDED,
            entity_type="jar",
            entity_id=jar_id,
            correlation_id=correlation_id,
            description=f"Income added: {amount}",
            details={
                "jar_name": jar_name,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def income_ignored(
        amount_text: str,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_IGNORED,
            severity=AuditSeverity.WARNING,
            entity_type="jar",
            correlation_id=correlation_id,
            description=f"Income ignored: {reason}",
            details={
                "amount_text": amount_text,
            },
            is_user_action=True,
        )

    @staticmethod
    def transfer_completed(
        from_jar_id: UUID,
        to_jar_id: UUID,
        amount: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_COMPLETED,
            entity_type="jar",
            entity_id=from_jar_id,
            correlation_id=correlation_id,
            description=f"Transferred {amount} between jars",
            details={
                "from_jar_id": str(from_jar_id),
                "to_jar_id": str(to_jar_id),
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transfer_rejected(
        from_jar_id: UUID,
        to_jar_id: UUID,
        amount_text: str,
        error_code: str,
        message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="jar",
            entity_id=from_jar_id,
            correlation_id=correlation_id,
            description=f"Transfer rejected: {error_code}",
            details={
                "from_jar_id": str(from_jar_id),
                "to_jar_id": str(to_jar_id),
                "amount_text": amount_text,
            },
            error_code=error_code,
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def goal_created(
        goal_id: UUID,
        name: str,
        target: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_CREATED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description=f"Goal created with target {target}",
            details={
                "name": name,
                "target": target,
            },
            is_user_action=True,
        )

    @staticmethod
    def goal_rejected(
        name: str,
        error_code: str,
        message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="goal",
            correlation_id=correlation_id,
            description="Goal creation rejected",
            details={"name": name},
            error_code=error_code,
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def goal_progress_added(
        goal_id: UUID,
        amount: str,
        current: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_PROGRESS_ADDED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description=f"Progress added: {amount} (now {current})",
            details={
                "amount": amount,
                "current_amount": current,
            },
            is_user_action=True,
        )

    @staticmethod
    def goal_progress_rejected(
        goal_id: UUID,
        amount_text: str,
        error_code: str,
        message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_PROGRESS_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description=f"Goal progress rejected: {error_code}",
            details={"amount_text": amount_text},
            error_code=error_code,
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def goal_completed(
        goal_id: UUID,
        name: str,
        discarded: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_COMPLETED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description="Goal completed",
            details={
                "name": name,
                "discarded_overpayment": discarded,
            },
        )

    @staticmethod
    def onboarding_completed(correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ONBOARDING_COMPLETED,
            entity_type="session",
            correlation_id=correlation_id,
            description="Onboarding completed",
            is_user_action=True,
        )

    @staticmethod
    def command_during_onboarding(
        command: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_DURING_ONBOARDING,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            correlation_id=correlation_id,
            description=f"{command} issued before onboarding finished",
            details={"command": command},
        )

    @staticmethod
    def query_answered(
        question_length: int,
        suggestion_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_ANSWERED,
            entity_type="query",
            correlation_id=correlation_id,
            description=f"Query answered with {suggestion_count} suggested actions",
            details={
                "question_length": question_length,
                "suggestion_count": suggestion_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def observer_failed(
        observer: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OBSERVER_FAILED,
            severity=AuditSeverity.ERROR,
            description="Observer failed",
            error_message=error_message,
            details={"observer": observer},
            correlation_id=correlation_id,
        )

