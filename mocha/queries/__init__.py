"""Query answering package."""

from mocha.queries.responder import EmptyQueryError, QueryResponder

__all__ = ["EmptyQueryError", "QueryResponder"]
