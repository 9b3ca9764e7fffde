"""Mutable schema nodes and the edges inferred onto them.

A :class:`SchemaNode` is the per-table unit of output handed to a renderer.
Its edges are created and updated by the
:class:`~relgraph.inference.registry.MutationRegistry`.

Key Components:
    - Edge: Named relationship from one schema node to another
    - EdgeSlot: Identity of the relationship an edge represents
    - SchemaNode: Ordered collection of edges for one table
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import Field as PydanticField

from relgraph.architecture.base import ConfigBaseModel
from relgraph.onto import EdgeOrientation, ReferentialAction


class EdgeSlot(NamedTuple):
    """Identity of a relationship on a node, independent of the edge name.

    Forward edges are identified by their target type and foreign-key column,
    inverse edges by their target type and the name of the paired forward edge.
    """

    orientation: EdgeOrientation
    type: str
    key: str | None


class Edge(ConfigBaseModel):
    """Directed, named relationship between two schema nodes.

    Attributes:
        name: Edge name, unique within its schema node
        type: Schema type name of the node the edge points to
        ref_name: On inverse edges, the name of the paired forward edge
        field: On forward edges, the foreign-key column the edge is stored in
        unique: True for the "one" side (the edge holds at most one node)
        inverse: True for the edge declared on the referenced table
        required: Whether the relationship must be set
        on_delete: On forward edges, the ON DELETE action of the foreign key
    """

    name: str
    type: str
    ref_name: str | None = None
    field: str | None = None
    unique: bool = False
    inverse: bool = False
    required: bool = False
    on_delete: ReferentialAction | None = None

    @property
    def orientation(self) -> EdgeOrientation:
        return EdgeOrientation.INVERSE if self.inverse else EdgeOrientation.FORWARD

    @property
    def slot(self) -> EdgeSlot:
        match self.orientation:
            case EdgeOrientation.FORWARD:
                return EdgeSlot(self.orientation, self.type, self.field)
            case EdgeOrientation.INVERSE:
                return EdgeSlot(self.orientation, self.type, self.ref_name)

    def assign(self, other: Edge) -> None:
        """Copy every attribute of ``other`` onto this edge in place."""
        for name in type(self).model_fields:
            setattr(self, name, getattr(other, name))


class SchemaNode(ConfigBaseModel):
    """Per-table container of edges.

    Attributes:
        table: Name of the table this node describes
        name: Schema type name (e.g. ``File`` for table ``files``)
        edges: Edges in the order they were first added
    """

    table: str
    name: str
    edges: list[Edge] = PydanticField(default_factory=list)

    def edge(self, name: str) -> Edge | None:
        for edge in self.edges:
            if edge.name == name:
                return edge
        return None

    @property
    def edge_names(self) -> list[str]:
        return [edge.name for edge in self.edges]

    @property
    def forward_edges(self) -> list[Edge]:
        return [e for e in self.edges if e.orientation == EdgeOrientation.FORWARD]

    @property
    def inverse_edges(self) -> list[Edge]:
        return [e for e in self.edges if e.orientation == EdgeOrientation.INVERSE]

    def find_slot(self, slot: EdgeSlot) -> Edge | None:
        for edge in self.edges:
            if edge.slot == slot:
                return edge
        return None

    def taken_names(self, slot: EdgeSlot | None = None) -> set[str]:
        """Names occupied by edges representing a relationship other than ``slot``."""
        return {edge.name for edge in self.edges if edge.slot != slot}
