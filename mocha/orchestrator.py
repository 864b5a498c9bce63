"""
Application State Facade for Mocha

This module ties the ledger components together and is the only
surface the UI calls. It defines the command flow:

    text from the UI -> parse -> ledger / tracker -> insights -> observers

DESIGN DECISION: The facade enforces the boundaries:
- Amount text is parsed here, never in the ledger
- A failed command changes nothing and notifies nobody
- Observers receive exactly one complete snapshot per successful command
- Every command is audited
"""

from typing import Callable, Optional
from uuid import UUID

import structlog

from mocha.audit import AuditLogger, create_correlation_id
from mocha.config import get_settings
from mocha.insights import derive_insights
from mocha.ledger import GoalTracker, JarLedger
from mocha.models.audit import AuditEventBuilder
from mocha.models.ledger import (
    AppPhase,
    CommandResult,
    GoalCategory,
    JarCategory,
    ParseError,
    QueryResult,
    SpendingInsight,
    StateSnapshot,
)
from mocha.models.money import Money
from mocha.queries import QueryResponder
from mocha.services.storage import InMemoryAuditStorage


Observer = Callable[[StateSnapshot], None]


class AppState:
    """
    Owns all session state and exposes the command API.

    Phases: ONBOARDING (initial) -> ACTIVE. The UI should only seed
    income and goals while onboarding; this is a usage contract, not a
    runtime block. Transfers and goal progress issued during onboarding
    still run but are audited with a warning.
    """

    def __init__(
        self,
        jar_ledger: Optional[JarLedger] = None,
        goal_tracker: Optional[GoalTracker] = None,
        query_responder: Optional[QueryResponder] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        settings = get_settings()
        ledger_settings = settings.ledger
        query_settings = settings.query

        self._jar_ledger = jar_ledger or JarLedger(
            default_jar_name=ledger_settings.default_jar_name,
            default_jar_category=JarCategory(ledger_settings.default_jar_category),
        )
        self._goal_tracker = goal_tracker or GoalTracker(
            default_category=GoalCategory(ledger_settings.default_goal_category),
        )
        self._query_responder = query_responder or QueryResponder(
            canned_answer=query_settings.canned_answer,
            suggested_actions=query_settings.suggested_actions,
        )
        self._audit_logger = audit_logger or AuditLogger()
        self._currency_code = ledger_settings.currency_code
        self._near_completion_ratio = ledger_settings.near_completion_ratio

        self._phase = AppPhase.ONBOARDING
        self._insights: tuple[SpendingInsight, ...] = ()
        self._observers: list[Observer] = []
        self._logger = structlog.get_logger("mocha.state")

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> AppPhase:
        return self._phase

    @property
    def currency_code(self) -> str:
        return self._currency_code

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def snapshot(self) -> StateSnapshot:
        """Current state as one immutable value."""
        return StateSnapshot(
            phase=self._phase,
            jars=self._jar_ledger.jars,
            goals=self._goal_tracker.goals,
            insights=self._insights,
        )

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer for state changes.

        Returns a function that unsubscribes it.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def complete_onboarding(self) -> None:
        """Move to ACTIVE. Calling again does nothing."""
        if self._phase is AppPhase.ACTIVE:
            return

        self._phase = AppPhase.ACTIVE
        self._audit_logger.log(
            AuditEventBuilder.onboarding_completed(create_correlation_id())
        )
        self._publish()

    # -------------------------------------------------------------------------
    # Jar commands
    # -------------------------------------------------------------------------

    def add_income(self, amount_text: str) -> None:
        """
        Deposit income typed by the user.

        Unparsable or non-positive amounts are ignored: no state change,
        no notification.
        """
        correlation_id = create_correlation_id()

        amount = Money.parse(amount_text)
        if amount is None or not amount.is_positive:
            reason = "unparsable amount" if amount is None else "amount must be greater than zero"
            self._audit_logger.log(
                AuditEventBuilder.income_ignored(
                    amount_text=amount_text or "",
                    reason=reason,
                    correlation_id=correlation_id,
                )
            )
            return

        created = len(self._jar_ledger) == 0
        jar = self._jar_ledger.add_income(amount)

        if created:
            self._audit_logger.log(
                AuditEventBuilder.jar_created(
                    jar_id=jar.id,
                    name=jar.name,
                    category=jar.category.value,
                    correlation_id=correlation_id,
                )
            )
        self._audit_logger.log(
            AuditEventBuilder.income_added(
                jar_id=jar.id,
                jar_name=jar.name,
                amount=str(amount.amount),
                correlation_id=correlation_id,
            )
        )
        self._publish()

    def create_jar(
        self,
        name: str,
        category: JarCategory = JarCategory.GENERAL,
        target_text: Optional[str] = None,
    ) -> CommandResult:
        """Create an empty jar, optionally with a target amount."""
        correlation_id = create_correlation_id()

        target = None
        if target_text is not None and target_text.strip():
            target = Money.parse(target_text)
            if target is None:
                result = CommandResult.fail(
                    ParseError.UNPARSABLE_AMOUNT,
                    f"Cannot read '{target_text}' as an amount",
                )
                self._audit_logger.log(
                    AuditEventBuilder.jar_rejected(
                        name=name or "",
                        error_code=result.error.value,
                        message=result.message,
                        correlation_id=correlation_id,
                    )
                )
                return result

        result = self._jar_ledger.create_jar(name, JarCategory(category), target)
        if not result:
            self._audit_logger.log(
                AuditEventBuilder.jar_rejected(
                    name=name or "",
                    error_code=result.error.value,
                    message=result.message,
                    correlation_id=correlation_id,
                )
            )
            return result

        jar = self._jar_ledger.get(result.entity_id)
        self._audit_logger.log(
            AuditEventBuilder.jar_created(
                jar_id=jar.id,
                name=jar.name,
                category=jar.category.value,
                correlation_id=correlation_id,
            )
        )
        self._publish()
        return result

    def transfer_funds(
        self,
        from_jar_id: UUID,
        to_jar_id: UUID,
        amount_text: str,
    ) -> CommandResult:
        """Move money between two jars. Both balances change or neither does."""
        correlation_id = create_correlation_id()
        self._warn_if_onboarding("transfer_funds", correlation_id)

        amount = Money.parse(amount_text)
        if amount is None:
            result = CommandResult.fail(
                ParseError.UNPARSABLE_AMOUNT,
                f"Cannot read '{amount_text}' as an amount",
            )
        else:
            result = self._jar_ledger.transfer(from_jar_id, to_jar_id, amount)

        if not result:
            self._audit_logger.log(
                AuditEventBuilder.transfer_rejected(
                    from_jar_id=from_jar_id,
                    to_jar_id=to_jar_id,
                    amount_text=amount_text or "",
                    error_code=result.error.value,
                    message=result.message,
                    correlation_id=correlation_id,
                )
            )
            return result

        self._audit_logger.log(
            AuditEventBuilder.transfer_completed(
                from_jar_id=from_jar_id,
                to_jar_id=to_jar_id,
                amount=str(amount.amount),
                correlation_id=correlation_id,
            )
        )
        self._publish()
        return result

    # -------------------------------------------------------------------------
    # Goal commands
    # -------------------------------------------------------------------------

    def create_goal(
        self,
        name: str,
        target_amount_text: str,
        category: Optional[GoalCategory] = None,
    ) -> CommandResult:
        """Create a goal. On success the result's entity_id is the goal id."""
        correlation_id = create_correlation_id()

        target = Money.parse(target_amount_text)
        if target is None:
            result = CommandResult.fail(
                ParseError.UNPARSABLE_AMOUNT,
                f"Cannot read '{target_amount_text}' as an amount",
            )
        else:
            result = self._goal_tracker.add_goal(name, target, category)

        if not result:
            self._audit_logger.log(
                AuditEventBuilder.goal_rejected(
                    name=name or "",
                    error_code=result.error.value,
                    message=result.message,
                    correlation_id=correlation_id,
                )
            )
            return result

        goal = self._goal_tracker.get(result.entity_id)
        self._audit_logger.log(
            AuditEventBuilder.goal_created(
                goal_id=goal.id,
                name=goal.name,
                target=str(goal.target_amount.amount),
                correlation_id=correlation_id,
            )
        )
        self._publish()
        return result

    def add_goal_progress(self, goal_id: UUID, amount_text: str) -> CommandResult:
        """
        Add money towards a goal.

        Progress past the target is discarded; the goal stays at its target.
        """
        correlation_id = create_correlation_id()
        self._warn_if_onboarding("add_goal_progress", correlation_id)

        amount = Money.parse(amount_text)
        outcome = None
        if amount is None:
            result = CommandResult.fail(
                ParseError.UNPARSABLE_AMOUNT,
                f"Cannot read '{amount_text}' as an amount",
            )
        else:
            result, outcome = self._goal_tracker.apply_progress(goal_id, amount)

        if not result:
            self._audit_logger.log(
                AuditEventBuilder.goal_progress_rejected(
                    goal_id=goal_id,
                    amount_text=amount_text or "",
                    error_code=result.error.value,
                    message=result.message,
                    correlation_id=correlation_id,
                )
            )
            return result

        self._audit_logger.log(
            AuditEventBuilder.goal_progress_added(
                goal_id=goal_id,
                amount=str(amount.amount),
                current=str(outcome.goal.current_amount.amount),
                correlation_id=correlation_id,
            )
        )
        if outcome.just_completed:
            self._audit_logger.log(
                AuditEventBuilder.goal_completed(
                    goal_id=goal_id,
                    name=outcome.goal.name,
                    discarded=str(outcome.discarded.amount),
                    correlation_id=correlation_id,
                )
            )
        self._publish()
        return result

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def ask_query(self, text: str) -> QueryResult:
        """
        Answer a free-text question.

        Read-only: the responder gets a snapshot taken before the first
        await, so an abandoned call leaves nothing behind.

        Raises:
            EmptyQueryError: If text is blank (the UI must not send it)
        """
        correlation_id = create_correlation_id()
        snapshot = self.snapshot()

        result = await self._query_responder.process_query(text, snapshot)

        self._audit_logger.log(
            AuditEventBuilder.query_answered(
                question_length=len(text),
                suggestion_count=len(result.suggested_actions),
                correlation_id=correlation_id,
            )
        )
        return result

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _warn_if_onboarding(self, command: str, correlation_id: UUID) -> None:
        if self._phase is AppPhase.ONBOARDING:
            self._audit_logger.log(
                AuditEventBuilder.command_during_onboarding(
                    command=command,
                    correlation_id=correlation_id,
                )
            )

    def _publish(self) -> None:
        """Recompute insights, then hand every observer the same snapshot."""
        self._insights = derive_insights(
            self._jar_ledger.jars,
            self._goal_tracker.goals,
            near_completion_ratio=self._near_completion_ratio,
            currency_code=self._currency_code,
        )
        snapshot = self.snapshot()

        # copy: an observer may unsubscribe while being notified
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception as e:
                self._logger.exception("observer_failed", observer=repr(observer))
                self._audit_logger.log(
                    AuditEventBuilder.observer_failed(
                        observer=repr(observer),
                        error_message=str(e),
                    )
                )


def create_app_state(audit_history: bool = True) -> AppState:
    """
    Factory function to create a ready-to-use AppState.

    Args:
        audit_history: Keep an in-memory audit trail the UI can read.
                      Set to False to only log.
    """
    storage = InMemoryAuditStorage() if audit_history else None
    return AppState(audit_logger=AuditLogger(storage))
