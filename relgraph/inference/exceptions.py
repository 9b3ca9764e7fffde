"""Errors raised while inferring relationships from foreign keys.

All of them are recoverable at the granularity of a single foreign key: the
inferencer skips the offending constraint and carries on with the rest of
the graph.
"""

from __future__ import annotations

from typing import Sequence


class RelationshipInferenceError(Exception):
    """Base class for per-foreign-key inference errors."""

    def __init__(self, message: str, table: str | None = None, symbol: str | None = None):
        super().__init__(message)
        self.table = table
        self.symbol = symbol


class CompositeKeyUnsupported(RelationshipInferenceError):
    """Foreign key spans more than one source or referenced column."""


class DanglingForeignKey(RelationshipInferenceError):
    """Referenced table or column is absent from the schema graph."""


class AmbiguousEdgeName(RelationshipInferenceError):
    """Every candidate name for an edge is already used on the node."""

    def __init__(
        self,
        message: str,
        candidates: Sequence[str] = (),
        table: str | None = None,
        symbol: str | None = None,
    ):
        super().__init__(message, table=table, symbol=symbol)
        self.candidates = list(candidates)
