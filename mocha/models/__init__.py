"""Data models package."""

from mocha.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from mocha.models.ledger import (
    AppPhase,
    CommandError,
    CommandResult,
    FinancialGoal,
    GoalCategory,
    GoalError,
    InsightSeverity,
    InsightType,
    Jar,
    JarCategory,
    ParseError,
    QueryResult,
    SpendingInsight,
    StateSnapshot,
    TransferError,
    ValidationError,
)
from mocha.models.money import Money, sum_money

__all__ = [
    # Money
    "Money",
    "sum_money",
    # Ledger models
    "AppPhase",
    "FinancialGoal",
    "GoalCategory",
    "InsightSeverity",
    "InsightType",
    "Jar",
    "JarCategory",
    "QueryResult",
    "SpendingInsight",
    "StateSnapshot",
    # Results
    "CommandError",
    "CommandResult",
    "GoalError",
    "ParseError",
    "TransferError",
    "ValidationError",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
