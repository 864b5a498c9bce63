"""Tests for the Jar Ledger and Goal Tracker."""

import pytest
from uuid import uuid4

from mocha.ledger import GoalTracker, JarLedger
from mocha.models.ledger import (
    GoalCategory,
    GoalError,
    JarCategory,
    TransferError,
    ValidationError,
)
from mocha.models.money import Money


@pytest.fixture
def ledger():
    return JarLedger()


@pytest.fixture
def funded(ledger):
    """Ledger with A=100 and B=0."""
    a = ledger.create_jar("A").entity_id
    b = ledger.create_jar("B").entity_id
    ledger.add_income(Money("100"))
    return ledger, a, b


class TestJarLedgerIncome:
    """Tests for depositing income."""

    def test_first_income_creates_main_jar(self, ledger):
        jar = ledger.add_income(Money("50.00"))

        assert len(ledger) == 1
        assert jar.name == "Main Jar"
        assert jar.category == JarCategory.SAVINGS
        assert jar.balance == Money("50.00")

    def test_second_income_adds_to_first_jar(self, ledger):
        ledger.add_income(Money("50.00"))
        ledger.add_income(Money("25.50"))

        assert len(ledger) == 1
        assert ledger.jars[0].balance == Money("75.50")

    def test_income_goes_to_first_jar_only(self, funded):
        ledger, a, b = funded
        ledger.add_income(Money("5"))
        assert ledger.get(a).balance == Money("105")
        assert ledger.get(b).balance == Money("0")

    def test_custom_default_jar(self):
        ledger = JarLedger(default_jar_name="Wallet", default_jar_category=JarCategory.GENERAL)
        jar = ledger.add_income(Money("1"))
        assert jar.name == "Wallet"
        assert jar.category == JarCategory.GENERAL

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_non_positive_income_raises(self, ledger, amount):
        with pytest.raises(ValueError):
            ledger.add_income(Money(amount))
        assert len(ledger) == 0


class TestJarLedgerCreate:
    """Tests for explicit jar creation."""

    def test_create_jar(self, ledger):
        result = ledger.create_jar("Rent", JarCategory.BILLS, Money("800"))

        assert result
        jar = ledger.get(result.entity_id)
        assert jar.name == "Rent"
        assert jar.category == JarCategory.BILLS
        assert jar.balance == Money.zero()
        assert jar.target == Money("800")

    def test_jars_keep_creation_order(self, ledger):
        names = ["One", "Two", "Three"]
        for name in names:
            ledger.create_jar(name)
        assert [jar.name for jar in ledger.jars] == names

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, ledger, name):
        result = ledger.create_jar(name)
        assert result.error == ValidationError.EMPTY_NAME
        assert len(ledger) == 0

    def test_non_positive_target_rejected(self, ledger):
        result = ledger.create_jar("Rent", target=Money("0"))
        assert result.error == ValidationError.NON_POSITIVE_TARGET
        assert len(ledger) == 0


class TestJarLedgerTransfer:
    """Tests for transfers between jars."""

    def test_transfer_moves_exact_amount(self, funded):
        ledger, a, b = funded

        result = ledger.transfer(a, b, Money("40"))

        assert result
        assert ledger.get(a).balance == Money("60")
        assert ledger.get(b).balance == Money("40")

    def test_transfer_whole_balance(self, funded):
        ledger, a, b = funded
        assert ledger.transfer(a, b, Money("100"))
        assert ledger.get(a).balance == Money.zero()

    def test_insufficient_funds(self, funded):
        ledger, a, b = funded

        result = ledger.transfer(a, b, Money("1000"))

        assert result.error == TransferError.INSUFFICIENT_FUNDS
        assert ledger.get(a).balance == Money("100")
        assert ledger.get(b).balance == Money("0")

    def test_unknown_jar(self, funded):
        ledger, a, _ = funded
        assert ledger.transfer(a, uuid4(), Money("1")).error == TransferError.JAR_NOT_FOUND
        assert ledger.transfer(uuid4(), a, Money("1")).error == TransferError.JAR_NOT_FOUND

    def test_same_jar(self, funded):
        ledger, a, _ = funded
        assert ledger.transfer(a, a, Money("1")).error == TransferError.SAME_JAR

    @pytest.mark.parametrize("amount", ["0", "-10"])
    def test_invalid_amount(self, funded, amount):
        ledger, a, b = funded
        result = ledger.transfer(a, b, Money(amount))
        assert result.error == TransferError.INVALID_AMOUNT
        assert ledger.get(a).balance == Money("100")

    def test_conservation_and_non_negativity(self, funded):
        """Total never changes and no balance dips below zero, whatever the outcome."""
        ledger, a, b = funded
        c = ledger.create_jar("C").entity_id
        total = ledger.total_balance()

        moves = [
            (a, b, "33.33"), (b, c, "10.01"), (c, a, "50"), (a, c, "66.67"),
            (b, a, "23.32"), (c, b, "0.01"), (a, a, "5"), (b, c, "-1"),
            (c, a, "76.67"), (a, b, "100"), (b, c, "100.01"),
        ]
        for from_id, to_id, amount in moves:
            ledger.transfer(from_id, to_id, Money(amount))
            assert ledger.total_balance() == total
            assert all(not jar.balance.is_negative for jar in ledger.jars)


class TestGoalTracker:
    """Tests for goals and progress."""

    def test_add_goal(self):
        tracker = GoalTracker()
        result = tracker.add_goal("  Laptop ", Money("1200"))

        goal = tracker.get(result.entity_id)
        assert goal.name == "Laptop"
        assert goal.current_amount == Money.zero()
        assert goal.category == GoalCategory.SHORT_TERM
        assert goal.is_completed is False

    def test_add_goal_with_category(self):
        tracker = GoalTracker()
        result = tracker.add_goal("House", Money("50000"), GoalCategory.LONG_TERM)
        assert tracker.get(result.entity_id).category == GoalCategory.LONG_TERM

    def test_blank_name_rejected(self):
        tracker = GoalTracker()
        assert tracker.add_goal(" \t", Money("100")).error == ValidationError.EMPTY_NAME
        assert len(tracker) == 0

    @pytest.mark.parametrize("target", ["0", "-1"])
    def test_non_positive_target_rejected(self, target):
        tracker = GoalTracker()
        result = tracker.add_goal("Trip", Money(target))
        assert result.error == ValidationError.NON_POSITIVE_TARGET
        assert len(tracker) == 0

    def test_progress_accumulates(self):
        tracker = GoalTracker()
        goal_id = tracker.add_goal("Trip", Money("100")).entity_id

        tracker.add_progress(goal_id, Money("30"))
        tracker.add_progress(goal_id, Money("20.50"))

        goal = tracker.get(goal_id)
        assert goal.current_amount == Money("50.50")
        assert not goal.is_completed

    def test_reaching_target_completes_goal(self):
        tracker = GoalTracker()
        goal_id = tracker.add_goal("Laptop", Money("1200")).entity_id

        result, outcome = tracker.apply_progress(goal_id, Money("1200"))

        assert result
        assert outcome.just_completed
        assert outcome.discarded == Money.zero()
        assert tracker.get(goal_id).is_completed
        assert tracker.get(goal_id).current_amount == Money("1200")

    def test_overshoot_is_clamped(self):
        tracker = GoalTracker()
        goal_id = tracker.add_goal("Trip", Money("100")).entity_id

        _, outcome = tracker.apply_progress(goal_id, Money("130"))

        assert outcome.discarded == Money("30")
        assert tracker.get(goal_id).current_amount == Money("100")

    def test_progress_on_completed_goal_is_discarded(self):
        tracker = GoalTracker()
        goal_id = tracker.add_goal("Laptop", Money("1200")).entity_id
        tracker.add_progress(goal_id, Money("1200"))

        result, outcome = tracker.apply_progress(goal_id, Money("50"))

        assert result
        assert not outcome.just_completed
        assert outcome.discarded == Money("50")
        goal = tracker.get(goal_id)
        assert goal.current_amount == Money("1200")
        assert goal.is_completed

    def test_unknown_goal(self):
        tracker = GoalTracker()
        assert tracker.add_progress(uuid4(), Money("1")).error == GoalError.GOAL_NOT_FOUND

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_invalid_amount(self, amount):
        tracker = GoalTracker()
        goal_id = tracker.add_goal("Trip", Money("100")).entity_id
        assert tracker.add_progress(goal_id, Money(amount)).error == GoalError.INVALID_AMOUNT
        assert tracker.get(goal_id).current_amount == Money.zero()

    def test_monotonic_progress(self):
        """current_amount never decreases and completion never reverts."""
        tracker = GoalTracker()
        goal_id = tracker.add_goal("Bike", Money("300")).entity_id
        previous = tracker.get(goal_id)

        for amount in ["50", "-20", "0", "120", "200", "10", "-300"]:
            tracker.add_progress(goal_id, Money(amount))
            current = tracker.get(goal_id)
            assert current.current_amount >= previous.current_amount
            assert current.is_completed or not previous.is_completed
            previous = current

        assert previous.is_completed

    def test_incomplete_goals(self):
        tracker = GoalTracker()
        done = tracker.add_goal("Done", Money("10")).entity_id
        tracker.add_goal("Open", Money("10"))
        tracker.add_progress(done, Money("10"))

        assert [g.name for g in tracker.incomplete_goals()] == ["Open"]
        assert [g.name for g in tracker.goals] == ["Done", "Open"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
