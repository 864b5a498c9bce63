"""
Goal Tracker

Owns the savings goals and their progress.

Progress only ever goes up. Once a goal reaches its target it is
completed for good and its amount is pinned to the target: any
overpayment is discarded, not carried over.
"""

from typing import NamedTuple, Optional
from uuid import UUID

from mocha.models.ledger import (
    CommandResult,
    FinancialGoal,
    GoalCategory,
    GoalError,
    ValidationError,
)
from mocha.models.money import Money


class ProgressOutcome(NamedTuple):
    """What an accepted add_progress call did."""
    goal: FinancialGoal
    just_completed: bool
    discarded: Money


class GoalTracker:
    """Ordered collection of goals, keyed by id."""

    def __init__(self, default_category: GoalCategory = GoalCategory.SHORT_TERM):
        self._goals: list[FinancialGoal] = []
        self._default_category = GoalCategory(default_category)

    @property
    def goals(self) -> tuple[FinancialGoal, ...]:
        """All goals in creation order."""
        return tuple(self._goals)

    def incomplete_goals(self) -> tuple[FinancialGoal, ...]:
        return tuple(goal for goal in self._goals if not goal.is_completed)

    def get(self, goal_id: UUID) -> Optional[FinancialGoal]:
        index = self._index_of(goal_id)
        return self._goals[index] if index is not None else None

    def __len__(self) -> int:
        return len(self._goals)

    def add_goal(
        self,
        name: str,
        target: Money,
        category: Optional[GoalCategory] = None,
    ) -> CommandResult:
        """Append a new, empty goal. The result carries the new goal's id."""
        if not name or not name.strip():
            return CommandResult.fail(
                ValidationError.EMPTY_NAME,
                "Goal name cannot be empty",
            )

        if not target.is_positive:
            return CommandResult.fail(
                ValidationError.NON_POSITIVE_TARGET,
                f"Goal target must be greater than zero (got {target})",
            )

        goal = FinancialGoal(
            name=name,
            target_amount=target,
            category=category or self._default_category,
        )
        self._goals.append(goal)
        return CommandResult.ok(entity_id=goal.id)

    def add_progress(self, goal_id: UUID, amount: Money) -> CommandResult:
        result, _ = self.apply_progress(goal_id, amount)
        return result

    def apply_progress(
        self,
        goal_id: UUID,
        amount: Money,
    ) -> tuple[CommandResult, Optional[ProgressOutcome]]:
        """
        Add money towards a goal.

        Returns the command result and, when accepted, a ProgressOutcome
        saying whether this call completed the goal and how much was
        discarded above the target.
        """
        index = self._index_of(goal_id)
        if index is None:
            return CommandResult.fail(
                GoalError.GOAL_NOT_FOUND,
                f"Goal {goal_id} does not exist",
            ), None

        if not amount.is_positive:
            return CommandResult.fail(
                GoalError.INVALID_AMOUNT,
                f"Progress must be greater than zero (got {amount})",
            ), None

        goal = self._goals[index]
        new_amount = goal.current_amount + amount
        discarded = Money.zero()
        just_completed = False

        if new_amount >= goal.target_amount:
            discarded = new_amount - goal.target_amount
            new_amount = goal.target_amount
            just_completed = not goal.is_completed

        updated = goal.model_copy(update={
            "current_amount": new_amount,
            "is_completed": goal.is_completed or new_amount >= goal.target_amount,
        })
        self._goals[index] = updated

        return CommandResult.ok(entity_id=goal_id), ProgressOutcome(
            goal=updated,
            just_completed=just_completed,
            discarded=discarded,
        )

    def _index_of(self, goal_id: UUID) -> Optional[int]:
        for index, goal in enumerate(self._goals):
            if goal.id == goal_id:
                return index
        return None
