"""
Jar Ledger

Owns the jars and every change to their balances.

GUARANTEES:
- No jar balance ever goes below zero
- A transfer never changes the total across all jars
- A rejected transfer changes nothing
"""

from typing import Optional
from uuid import UUID

from mocha.models.ledger import (
    CommandResult,
    Jar,
    JarCategory,
    TransferError,
    ValidationError,
)
from mocha.models.money import Money, sum_money


class JarLedger:
    """
    Ordered collection of jars, keyed by id.

    Jars are frozen models: every balance change replaces the jar
    with an updated copy at the same position.
    """

    def __init__(
        self,
        default_jar_name: str = "Main Jar",
        default_jar_category: JarCategory = JarCategory.SAVINGS,
    ):
        self._jars: list[Jar] = []
        self._default_jar_name = default_jar_name
        self._default_jar_category = JarCategory(default_jar_category)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def jars(self) -> tuple[Jar, ...]:
        """All jars in creation order."""
        return tuple(self._jars)

    def get(self, jar_id: UUID) -> Optional[Jar]:
        index = self._index_of(jar_id)
        return self._jars[index] if index is not None else None

    def total_balance(self) -> Money:
        return sum_money(jar.balance for jar in self._jars)

    def __len__(self) -> int:
        return len(self._jars)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create_jar(
        self,
        name: str,
        category: JarCategory = JarCategory.GENERAL,
        target: Optional[Money] = None,
    ) -> CommandResult:
        """Add an empty jar at the end of the ledger."""
        if not name or not name.strip():
            return CommandResult.fail(
                ValidationError.EMPTY_NAME,
                "Jar name cannot be empty",
            )

        if target is not None and not target.is_positive:
            return CommandResult.fail(
                ValidationError.NON_POSITIVE_TARGET,
                f"Jar target must be greater than zero (got {target})",
            )

        jar = Jar(name=name, category=category, target=target)
        self._jars.append(jar)
        return CommandResult.ok(entity_id=jar.id)

    def add_income(self, amount: Money) -> Jar:
        """
        Deposit income.

        With no jars, creates the default jar holding the amount.
        Otherwise adds the amount to the first jar.

        Returns the jar that received the money.

        Raises:
            ValueError: If amount is not positive
        """
        if not amount.is_positive:
            raise ValueError(f"Income must be greater than zero (got {amount})")

        if not self._jars:
            jar = Jar(
                name=self._default_jar_name,
                category=self._default_jar_category,
                balance=amount,
            )
            self._jars.append(jar)
            return jar

        first = self._jars[0]
        updated = first.model_copy(update={"balance": first.balance + amount})
        self._jars[0] = updated
        return updated

    def transfer(self, from_id: UUID, to_id: UUID, amount: Money) -> CommandResult:
        """
        Move money between two jars.

        Checks run in a fixed order: amount, same jar, existence, funds.
        Both balances are replaced together, only after every check passed.
        """
        if not amount.is_positive:
            return CommandResult.fail(
                TransferError.INVALID_AMOUNT,
                f"Transfer amount must be greater than zero (got {amount})",
            )

        if from_id == to_id:
            return CommandResult.fail(
                TransferError.SAME_JAR,
                "Cannot transfer a jar to itself",
            )

        from_index = self._index_of(from_id)
        to_index = self._index_of(to_id)
        if from_index is None or to_index is None:
            missing = from_id if from_index is None else to_id
            return CommandResult.fail(
                TransferError.JAR_NOT_FOUND,
                f"Jar {missing} does not exist",
            )

        source = self._jars[from_index]
        destination = self._jars[to_index]
        if source.balance < amount:
            return CommandResult.fail(
                TransferError.INSUFFICIENT_FUNDS,
                f"{source.name} holds {source.balance}, cannot move {amount}",
            )

        new_source = source.model_copy(update={"balance": source.balance - amount})
        new_destination = destination.model_copy(
            update={"balance": destination.balance + amount}
        )
        self._jars[from_index] = new_source
        self._jars[to_index] = new_destination
        return CommandResult.ok()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _index_of(self, jar_id: UUID) -> Optional[int]:
        for index, jar in enumerate(self._jars):
            if jar.id == jar_id:
                return index
        return None
