"""Relationship inference from foreign keys.

Key Components:
    - CardinalityClassifier: one-to-one versus one-to-many
    - EdgeNamer: collision-free edge names
    - EdgeBuilder: forward/inverse edge pairs
    - MutationRegistry: idempotent per-table upserts
    - RelationshipInferencer: drives the above over a schema graph
"""

from relgraph.inference.builder import EdgeBuilder, EdgePair
from relgraph.inference.cardinality import CardinalityClassifier, Classification
from relgraph.inference.engine import (
    InferenceParams,
    InferenceReport,
    RelationshipInferencer,
    SkippedForeignKey,
)
from relgraph.inference.exceptions import (
    AmbiguousEdgeName,
    CompositeKeyUnsupported,
    DanglingForeignKey,
    RelationshipInferenceError,
)
from relgraph.inference.naming import EdgeNamer, pluralize, singularize, type_name
from relgraph.inference.registry import MutationRegistry

__all__ = [
    "AmbiguousEdgeName",
    "CardinalityClassifier",
    "Classification",
    "CompositeKeyUnsupported",
    "DanglingForeignKey",
    "EdgeBuilder",
    "EdgeNamer",
    "EdgePair",
    "InferenceParams",
    "InferenceReport",
    "MutationRegistry",
    "RelationshipInferenceError",
    "RelationshipInferencer",
    "SkippedForeignKey",
    "pluralize",
    "singularize",
    "type_name",
]
