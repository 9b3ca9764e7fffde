"""Data model: the read-only relational schema graph and the mutable schema nodes.

Key Components:
    - SchemaGraph, Table, Column, Index, ForeignKey: relational input model
    - SchemaNode, Edge: per-table output model
"""

from .node import Edge, EdgeSlot, SchemaNode
from .onto_sql import Column, ForeignKey, Index, SchemaGraph, Table

__all__ = [
    "Column",
    "Edge",
    "EdgeSlot",
    "ForeignKey",
    "Index",
    "SchemaGraph",
    "SchemaNode",
    "Table",
]
