"""relgraph: relationship inference from relational foreign keys.

relgraph reads a relational schema (tables, columns, keys and foreign keys)
and derives the object-graph edges its foreign keys imply. Every foreign key
becomes a forward edge on the table that owns it and an inverse edge on the
referenced table, each with a readable, collision-free name. Edges are merged
idempotently into per-table schema nodes, ready for a renderer.

Example:
    >>> from relgraph import RelationshipInferencer, SchemaGraph
    >>> graph = SchemaGraph.from_yaml("schema.yaml")
    >>> report = RelationshipInferencer().infer(graph)
    >>> print(report.registry.to_yaml_str())
"""

# --- Architecture ----------------------------------------------------------
from .architecture import (
    Column,
    Edge,
    ForeignKey,
    Index,
    SchemaGraph,
    SchemaNode,
    Table,
)

# --- Inference -------------------------------------------------------------
from .inference import (
    AmbiguousEdgeName,
    CardinalityClassifier,
    CompositeKeyUnsupported,
    DanglingForeignKey,
    EdgeBuilder,
    EdgeNamer,
    InferenceParams,
    InferenceReport,
    MutationRegistry,
    RelationshipInferenceError,
    RelationshipInferencer,
)

# --- Enums -----------------------------------------------------------------
from .onto import Cardinality, EdgeOrientation, ReferentialAction

__all__ = [
    # Architecture
    "Column",
    "Edge",
    "ForeignKey",
    "Index",
    "SchemaGraph",
    "SchemaNode",
    "Table",
    # Inference
    "CardinalityClassifier",
    "EdgeBuilder",
    "EdgeNamer",
    "InferenceParams",
    "InferenceReport",
    "MutationRegistry",
    "RelationshipInferencer",
    # Errors
    "AmbiguousEdgeName",
    "CompositeKeyUnsupported",
    "DanglingForeignKey",
    "RelationshipInferenceError",
    # Enums
    "Cardinality",
    "EdgeOrientation",
    "ReferentialAction",
]
