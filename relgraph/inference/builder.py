"""Construction of forward/inverse edge pairs from foreign keys."""

from __future__ import annotations

import logging
from typing import NamedTuple

from relgraph.architecture.node import Edge, EdgeSlot, SchemaNode
from relgraph.architecture.onto_sql import ForeignKey, Table
from relgraph.inference.cardinality import Classification
from relgraph.inference.naming import EdgeNamer
from relgraph.onto import EdgeOrientation

logger = logging.getLogger(__name__)


class EdgePair(NamedTuple):
    """Forward edge for the source table and its inverse for the referenced table."""

    forward: Edge
    inverse: Edge


class EdgeBuilder:
    """Combines classification and naming into a pair of edges.

    Names are resolved against the current edges of the source and referenced
    nodes, so the caller must hold both nodes' locks from ``build`` until the
    pair has been upserted. Nothing is written here: when either name is
    ambiguous, :class:`~relgraph.inference.exceptions.AmbiguousEdgeName`
    propagates and neither edge exists.
    """

    def __init__(self, namer: EdgeNamer | None = None):
        self.namer = namer if namer is not None else EdgeNamer()

    def build(
        self,
        table: Table,
        fk: ForeignKey,
        classification: Classification,
        source_node: SchemaNode,
        target_node: SchemaNode,
    ) -> EdgePair:
        column = fk.columns[0]
        forward_slot = EdgeSlot(EdgeOrientation.FORWARD, target_node.name, column)
        forward_name = self.namer.forward_name(
            table.name, fk, source_node.taken_names(forward_slot)
        )
        forward = Edge(
            name=forward_name,
            type=target_node.name,
            field=column,
            unique=classification.unique,
            required=not classification.source_optional,
            on_delete=fk.on_delete,
        )

        inverse_slot = EdgeSlot(EdgeOrientation.INVERSE, source_node.name, forward_name)
        taken = target_node.taken_names(inverse_slot)
        if target_node is source_node:
            taken.add(forward_name)
        inverse_name = self.namer.inverse_name(
            table.name, fk, forward_name, classification.unique, taken
        )
        inverse = Edge(
            name=inverse_name,
            type=source_node.name,
            ref_name=forward_name,
            inverse=True,
            # scoped by ref_name, so the inverse slot belongs to this forward edge alone
            unique=classification.unique,
            required=not classification.target_optional,
        )

        logger.debug(
            f"{table.name}.{column}: forward edge '{forward_name}' -> {forward.type}, "
            f"inverse edge '{inverse_name}' on {fk.ref_table} "
            f"({classification.cardinality})"
        )
        return EdgePair(forward, inverse)

