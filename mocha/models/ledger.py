"""
Core Data Models for Mocha

These models define the state the UI renders: jars, goals, insights,
query answers and the snapshot that bundles them.

DESIGN DECISION: All models are frozen (value semantics). A mutation
builds a new model with model_copy(update=...) and swaps it in by id,
so a snapshot handed to the UI can never change under it.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from mocha.models.money import Money, sum_money


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class JarCategory(str, Enum):
    """What a jar's money is for."""
    ESSENTIALS = "essentials"
    SAVINGS = "savings"
    FUN = "fun"
    BILLS = "bills"
    INVESTMENTS = "investments"
    EMERGENCY = "emergency"
    GENERAL = "general"


class GoalCategory(str, Enum):
    """Goal time horizon."""
    SHORT_TERM = "shortTerm"
    MEDIUM_TERM = "mediumTerm"
    LONG_TERM = "longTerm"


class InsightType(str, Enum):
    OVERSPENDING = "overspending"
    SAVINGS_OPPORTUNITY = "savingsOpportunity"
    SPENDING_PATTERN = "spendingPattern"
    GOAL_PROGRESS = "goalProgress"


class InsightSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class AppPhase(str, Enum):
    """
    Session phase.

    ONBOARDING -> ACTIVE is one-way. ACTIVE is terminal for the session.
    """
    ONBOARDING = "onboarding"
    ACTIVE = "active"


# =============================================================================
# FAILURE CODES
# =============================================================================

class ParseError(str, Enum):
    """Amount text could not be read as money."""
    UNPARSABLE_AMOUNT = "unparsable_amount"


class ValidationError(str, Enum):
    """Rejected jar or goal definition."""
    EMPTY_NAME = "empty_name"
    NON_POSITIVE_TARGET = "non_positive_target"


class TransferError(str, Enum):
    INSUFFICIENT_FUNDS = "insufficient_funds"
    JAR_NOT_FOUND = "jar_not_found"
    SAME_JAR = "same_jar"
    INVALID_AMOUNT = "invalid_amount"


class GoalError(str, Enum):
    GOAL_NOT_FOUND = "goal_not_found"
    INVALID_AMOUNT = "invalid_amount"


CommandError = Union[ParseError, ValidationError, TransferError, GoalError]


class CommandResult(BaseModel):
    """
    Outcome of a fallible command.

    CRITICAL: A failed result always means no state was changed.

    Truthy on success, so callers can write `if result: ...`.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    error: Optional[CommandError] = None
    message: Optional[str] = None
    entity_id: Optional[UUID] = Field(
        default=None,
        description="Id of the jar or goal the command created, if any"
    )

    @model_validator(mode='after')
    def error_matches_success(self) -> 'CommandResult':
        if self.success and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("A failed result must carry an error")
        return self

    @classmethod
    def ok(cls, entity_id: Optional[UUID] = None) -> 'CommandResult':
        return cls(success=True, entity_id=entity_id)

    @classmethod
    def fail(cls, error: CommandError, message: str) -> 'CommandResult':
        return cls(success=False, error=error, message=message)

    def __bool__(self) -> bool:
        return self.success


# =============================================================================
# JARS
# =============================================================================

class Jar(BaseModel):
    """
    A named budget envelope.

    INVARIANT: balance is never negative.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique jar ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )
    category: JarCategory = JarCategory.GENERAL
    balance: Money = Field(default_factory=Money.zero)
    target: Optional[Money] = Field(
        default=None,
        description="Optional amount the jar is filling towards"
    )

    @field_validator('balance')
    @classmethod
    def balance_not_negative(cls, v: Money) -> Money:
        if v.is_negative:
            raise ValueError("Jar balance cannot be negative")
        return v

    @property
    def fill_percentage(self) -> Decimal:
        """balance / target clamped to [0, 1]; 0 when there is no target."""
        if self.target is None or not self.target.is_positive:
            return Decimal("0")
        ratio = self.balance.amount / self.target.amount
        return max(Decimal("0"), min(ratio, Decimal("1")))


# =============================================================================
# GOALS
# =============================================================================

class FinancialGoal(BaseModel):
    """
    A savings target tracked towards completion.

    INVARIANTS:
    - target_amount > 0
    - 0 <= current_amount, and current_amount == target_amount once completed
    - is_completed never goes back to False
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1)
    target_amount: Money
    current_amount: Money = Field(default_factory=Money.zero)
    category: GoalCategory = GoalCategory.SHORT_TERM
    is_completed: bool = False

    @model_validator(mode='after')
    def validate_amounts(self) -> 'FinancialGoal':
        if not self.target_amount.is_positive:
            raise ValueError("Goal target must be greater than zero")
        if self.current_amount.is_negative:
            raise ValueError("Goal progress cannot be negative")
        if self.is_completed and self.current_amount != self.target_amount:
            raise ValueError("A completed goal must sit exactly at its target")
        return self

    @property
    def progress(self) -> Decimal:
        """current / target clamped to [0, 1]."""
        ratio = self.current_amount.amount / self.target_amount.amount
        return max(Decimal("0"), min(ratio, Decimal("1")))

    @property
    def remaining_amount(self) -> Money:
        remaining = self.target_amount - self.current_amount
        return remaining if remaining.is_positive else Money.zero()


# =============================================================================
# INSIGHTS & QUERIES
# =============================================================================

class SpendingInsight(BaseModel):
    """
    Advisory message derived from jar and goal state.

    Never stored: the whole list is rebuilt after every command.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    message: str
    type: InsightType
    severity: InsightSeverity = InsightSeverity.INFO
    suggested_action: Optional[str] = None


class QueryResult(BaseModel):
    """Answer to a free-text question."""
    model_config = ConfigDict(frozen=True)

    answer: str
    suggested_actions: list[str] = Field(default_factory=list)


# =============================================================================
# SNAPSHOT
# =============================================================================

class StateSnapshot(BaseModel):
    """
    Everything the UI renders, captured at one instant.

    Observers always receive one of these - never a half-applied state.
    """
    model_config = ConfigDict(frozen=True)

    phase: AppPhase
    jars: tuple[Jar, ...] = ()
    goals: tuple[FinancialGoal, ...] = ()
    insights: tuple[SpendingInsight, ...] = ()

    @property
    def total_balance(self) -> Money:
        return sum_money(jar.balance for jar in self.jars)

    @property
    def incomplete_goals(self) -> tuple[FinancialGoal, ...]:
        return tuple(goal for goal in self.goals if not goal.is_completed)
