"""
Insight Engine

DESIGN DECISION: Insights are a pure function of (jars, goals).
No clock, no randomness, no counters: the same state always gives the
same insights, ids included. That keeps them testable against any
snapshot and lets the UI diff two lists by id.

This is the extension point for real analytics (trends, overspend
thresholds). New rules go here and must stay side-effect free.
"""

from decimal import Decimal
from typing import Iterable, Sequence
from uuid import UUID, uuid5

from mocha.models.ledger import (
    FinancialGoal,
    InsightSeverity,
    InsightType,
    Jar,
    SpendingInsight,
)


INSIGHT_NAMESPACE = UUID("6f0c7a52-3d0e-4a8e-9a57-1c2b9f4d8e31")

DEFAULT_NEAR_COMPLETION_RATIO = Decimal("0.75")


def insight_id(rule: str, subject_id: UUID) -> UUID:
    """Stable id for the insight a rule raises about one jar or goal."""
    return uuid5(INSIGHT_NAMESPACE, f"{rule}:{subject_id}")


def _jar_savings_insights(jars: Sequence[Jar]) -> Iterable[SpendingInsight]:
    for jar in jars:
        yield SpendingInsight(
            id=insight_id("jar_savings", jar.id),
            message=f"Consider adding more to {jar.name}",
            type=InsightType.SAVINGS_OPPORTUNITY,
            severity=InsightSeverity.INFO,
            suggested_action=f"Add money to {jar.name}",
        )


def _near_completion_insights(
    goals: Sequence[FinancialGoal],
    ratio: Decimal,
    currency_code: str,
) -> Iterable[SpendingInsight]:
    for goal in goals:
        if goal.is_completed or goal.progress < ratio:
            continue
        remaining = goal.remaining_amount.format(currency_code)
        yield SpendingInsight(
            id=insight_id("goal_near_completion", goal.id),
            message=f"You are close to reaching {goal.name}.",
            type=InsightType.GOAL_PROGRESS,
            severity=InsightSeverity.INFO,
            suggested_action=f"Add {remaining} more to complete your goal.",
        )


def _completed_goal_insights(goals: Sequence[FinancialGoal]) -> Iterable[SpendingInsight]:
    for goal in goals:
        if not goal.is_completed:
            continue
        yield SpendingInsight(
            id=insight_id("goal_completed", goal.id),
            message=f"You reached your {goal.name} goal!",
            type=InsightType.GOAL_PROGRESS,
            severity=InsightSeverity.INFO,
        )


def derive_insights(
    jars: Sequence[Jar],
    goals: Sequence[FinancialGoal],
    near_completion_ratio: Decimal = DEFAULT_NEAR_COMPLETION_RATIO,
    currency_code: str = "USD",
) -> tuple[SpendingInsight, ...]:
    """
    Build the insight list for a state.

    Order: one savings nudge per jar (jar order), then goals close to
    their target (goal order), then completed goals (goal order).
    """
    return (
        *_jar_savings_insights(jars),
        *_near_completion_insights(goals, near_completion_ratio, currency_code),
        *_completed_goal_insights(goals),
    )
