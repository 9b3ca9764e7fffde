"""Relationship inference over a whole schema graph.

The inferencer walks the tables of a :class:`SchemaGraph` in order and each
table's foreign keys in declaration order, turning every foreign key into a
forward/inverse edge pair merged into a :class:`MutationRegistry`.

Processing runs in two phases:

1. Planning: each foreign key is validated and classified. This phase only
   reads the graph and runs per table, concurrently when ``n_cores > 1``.
2. Merging: edges are named and upserted serially, in declaration order,
   so the output does not depend on how planning was scheduled.

Errors are isolated per foreign key: the constraint is skipped, logged and
recorded in the :class:`InferenceReport`, and the rest of the graph is still
processed (unless ``strict`` is set).

Example:
    >>> inferencer = RelationshipInferencer()
    >>> report = inferencer.infer(graph)
    >>> report.registry["videos"].edge_names
    ['poster', 'file', 'thumbnail']
"""

from __future__ import annotations

import asyncio
import logging
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field as PydanticField, PrivateAttr
from suthing import Timer

from relgraph.architecture.base import ConfigBaseModel
from relgraph.architecture.onto_sql import ForeignKey, SchemaGraph, Table
from relgraph.architecture.node import EdgeSlot
from relgraph.inference.builder import EdgeBuilder, EdgePair
from relgraph.inference.cardinality import CardinalityClassifier, Classification
from relgraph.inference.exceptions import (
    CompositeKeyUnsupported,
    DanglingForeignKey,
    RelationshipInferenceError,
)
from relgraph.inference.naming import DEFAULT_ID_SUFFIXES, EdgeNamer
from relgraph.inference.registry import MutationRegistry

logger = logging.getLogger(__name__)


class InferenceParams(BaseModel):
    """Parameters controlling an inference run.

    Attributes:
        n_cores: Number of tables planned concurrently; 1 runs everything inline
        strict: Raise the first per-foreign-key error instead of skipping it
        id_suffixes: Identifier suffixes stripped from foreign-key columns
            to derive edge names
    """

    n_cores: int = PydanticField(default=1, ge=1)
    strict: bool = False
    id_suffixes: tuple[str, ...] = DEFAULT_ID_SUFFIXES


class SkippedForeignKey(ConfigBaseModel):
    """A foreign key that produced no edges, and why."""

    table: str
    symbol: str
    error: str
    message: str

    @classmethod
    def from_error(
        cls, table: Table, fk: ForeignKey, error: RelationshipInferenceError
    ) -> SkippedForeignKey:
        return cls(
            table=table.name,
            symbol=fk.symbol,
            error=type(error).__name__,
            message=str(error),
        )


class InferenceReport(BaseModel):
    """Outcome of an inference run.

    Attributes:
        registry: Registry the edges were merged into
        edge_pairs: Number of distinct relationships inferred; constraints
            repeating an earlier one (same column, same target) count once
        skipped: Foreign keys skipped because of an error, in processing order
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    registry: MutationRegistry
    edge_pairs: int = 0
    skipped: list[SkippedForeignKey] = PydanticField(default_factory=list)

    # (table, forward slot) -> symbol of the first constraint producing it
    _relationships: dict[tuple[str, EdgeSlot], str] = PrivateAttr(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.skipped


class PlannedForeignKey(NamedTuple):
    fk: ForeignKey
    ref_table: Table
    classification: Classification


class TablePlan(NamedTuple):
    table: Table
    steps: list[PlannedForeignKey | tuple[ForeignKey, RelationshipInferenceError]]


class RelationshipInferencer:
    """Derives relationships from the foreign keys of a schema graph.

    Args:
        params: Run parameters; when None, built from ``kwargs``
        classifier: Cardinality classifier to use
        builder: Edge builder to use; by default one with an
            :class:`EdgeNamer` configured from ``params.id_suffixes``
        **kwargs: Fields of :class:`InferenceParams` (n_cores, strict, ...)
    """

    def __init__(
        self,
        params: InferenceParams | None = None,
        classifier: CardinalityClassifier | None = None,
        builder: EdgeBuilder | None = None,
        **kwargs,
    ):
        if params is None:
            params = InferenceParams(**kwargs)
        self.params = params
        self.classifier = classifier if classifier is not None else CardinalityClassifier()
        self.builder = (
            builder
            if builder is not None
            else EdgeBuilder(EdgeNamer(id_suffixes=params.id_suffixes))
        )

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    @staticmethod
    def validate(graph: SchemaGraph, table: Table, fk: ForeignKey) -> Table:
        """Check that ``fk`` can be turned into edges.

        Returns:
            The referenced table.

        Raises:
            CompositeKeyUnsupported: If the key spans several columns
            DanglingForeignKey: If a column or the referenced table is missing
        """
        if fk.is_composite:
            raise CompositeKeyUnsupported(
                f"Foreign key {fk} on '{table.name}' spans several columns",
                table=table.name,
                symbol=fk.symbol,
            )
        if not table.has_column(fk.columns[0]):
            raise DanglingForeignKey(
                f"Foreign key {fk} uses unknown column "
                f"'{fk.columns[0]}' of table '{table.name}'",
                table=table.name,
                symbol=fk.symbol,
            )
        ref_table = graph.table(fk.ref_table)
        if ref_table is None:
            raise DanglingForeignKey(
                f"Foreign key {fk} on '{table.name}' references unknown table "
                f"'{fk.ref_table}'",
                table=table.name,
                symbol=fk.symbol,
            )
        if not ref_table.has_column(fk.ref_columns[0]):
            raise DanglingForeignKey(
                f"Foreign key {fk} on '{table.name}' references unknown column "
                f"'{fk.ref_columns[0]}' of table '{ref_table.name}'",
                table=table.name,
                symbol=fk.symbol,
            )
        return ref_table

    def plan_table(self, graph: SchemaGraph, table: Table) -> TablePlan:
        steps: list[PlannedForeignKey | tuple[ForeignKey, RelationshipInferenceError]] = []
        for fk in table.foreign_keys:
            try:
                ref_table = self.validate(graph, table, fk)
            except RelationshipInferenceError as e:
                steps.append((fk, e))
                continue
            steps.append(
                PlannedForeignKey(fk, ref_table, self.classifier.classify(table, fk, ref_table))
            )
        return TablePlan(table, steps)

    async def _plan_concurrently(self, graph: SchemaGraph) -> list[TablePlan]:
        semaphore = asyncio.Semaphore(self.params.n_cores)

        async def plan(table: Table) -> TablePlan:
            async with semaphore:
                return await asyncio.to_thread(self.plan_table, graph, table)

        # gather keeps the order of the tables
        return await asyncio.gather(*[plan(table) for table in graph.tables])

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge_foreign_key(
        self, table: Table, planned: PlannedForeignKey, registry: MutationRegistry
    ) -> EdgePair:
        """Name and upsert the edge pair of one planned foreign key.

        Raises:
            AmbiguousEdgeName: If either edge cannot be named; nothing is written
        """
        fk = planned.fk
        with registry.locked(table.name, fk.ref_table) as (source_node, target_node):
            pair = self.builder.build(
                table, fk, planned.classification, source_node, target_node
            )
            registry.upsert(table.name, pair.forward)
            registry.upsert(fk.ref_table, pair.inverse)
        return pair

    def _skip(
        self,
        report: InferenceReport,
        table: Table,
        fk: ForeignKey,
        error: RelationshipInferenceError,
    ) -> None:
        if self.params.strict:
            raise error
        logger.warning(f"Skipping foreign key {fk} on '{table.name}': {error}")
        report.skipped.append(SkippedForeignKey.from_error(table, fk, error))

    def merge_plan(
        self, plan: TablePlan, registry: MutationRegistry, report: InferenceReport
    ) -> None:
        for step in plan.steps:
            if isinstance(step, PlannedForeignKey):
                try:
                    pair = self.merge_foreign_key(plan.table, step, registry)
                except RelationshipInferenceError as e:
                    self._skip(report, plan.table, step.fk, e)
                    continue
                key = (plan.table.name, pair.forward.slot)
                first = report._relationships.get(key)
                if first is not None:
                    logger.debug(
                        f"Constraint '{step.fk.symbol}' on '{plan.table.name}' repeats "
                        f"'{first}', merged into edge '{pair.forward.name}'"
                    )
                    continue
                report._relationships[key] = step.fk.symbol
                report.edge_pairs += 1
            else:
                fk, error = step
                self._skip(report, plan.table, fk, error)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def infer_async(
        self, graph: SchemaGraph, registry: MutationRegistry | None = None
    ) -> InferenceReport:
        """Infer edges for every table of ``graph`` into ``registry``.

        Args:
            graph: Schema graph to read
            registry: Registry to merge into; a new one when None. Passing the
                registry of a previous run updates it in place.

        Returns:
            InferenceReport with the registry and skipped foreign keys

        Raises:
            RelationshipInferenceError: Only when ``strict`` is set
        """
        if registry is None:
            registry = MutationRegistry()
        report = InferenceReport(registry=registry)

        with Timer() as klepsidra:
            for table in graph.tables:
                registry.node(table.name)

            if self.params.n_cores > 1:
                plans = await self._plan_concurrently(graph)
            else:
                plans = [self.plan_table(graph, table) for table in graph.tables]

            for plan in plans:
                self.merge_plan(plan, registry, report)

        logger.info(
            f"Inferred {report.edge_pairs} relationships over {len(graph)} tables "
            f"({len(report.skipped)} foreign keys skipped) "
            f"in {klepsidra.elapsed:.3f} sec"
        )
        return report

    def infer(
        self, graph: SchemaGraph, registry: MutationRegistry | None = None
    ) -> InferenceReport:
        """Synchronous entry point, see :meth:`infer_async`."""
        return asyncio.run(self.infer_async(graph, registry=registry))
