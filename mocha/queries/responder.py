"""
Query Responder

Answers free-text questions about the user's money.

DESIGN DECISION: The responder is async so a remote model can sit
behind it later without changing callers. Today it ignores the
question and returns a fixed answer.

BOUNDARY: The responder only ever sees an immutable StateSnapshot.
It cannot change jars or goals.
"""

import asyncio
from typing import Optional, Sequence

from mocha.models.ledger import QueryResult, StateSnapshot


class EmptyQueryError(ValueError):
    """Raised when a blank question reaches the responder."""
    pass


class QueryResponder:
    """Canned question answering."""

    def __init__(
        self,
        canned_answer: str = "AI says: You're doing great!",
        suggested_actions: Optional[Sequence[str]] = None,
    ):
        self._answer = canned_answer
        self._suggested_actions = list(
            suggested_actions
            if suggested_actions is not None
            else ["Check jars", "Add new goal"]
        )

    async def process_query(
        self,
        question: str,
        snapshot: Optional[StateSnapshot] = None,
    ) -> QueryResult:
        """
        Answer a question.

        Args:
            question: The user's question. Callers must reject blank
                     input before calling.
            snapshot: State the answer may draw on (unused for now)

        Raises:
            EmptyQueryError: If the question is blank
        """
        if not question or not question.strip():
            raise EmptyQueryError("Question cannot be blank")

        # yield once so callers always get a real suspension point
        await asyncio.sleep(0)

        return QueryResult(
            answer=self._answer,
            suggested_actions=list(self._suggested_actions),
        )
