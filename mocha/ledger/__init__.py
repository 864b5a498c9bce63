"""Ledger package: jars and goals."""

from mocha.ledger.goals import GoalTracker, ProgressOutcome
from mocha.ledger.jars import JarLedger

__all__ = ["GoalTracker", "JarLedger", "ProgressOutcome"]
