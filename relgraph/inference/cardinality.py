"""Cardinality classification of foreign keys."""

from __future__ import annotations

import logging

from relgraph.architecture.base import ConfigBaseModel
from relgraph.architecture.onto_sql import ForeignKey, Table
from relgraph.onto import Cardinality

logger = logging.getLogger(__name__)


class Classification(ConfigBaseModel):
    """Outcome of classifying one foreign key.

    Attributes:
        unique: The foreign-key column is unique on its table (one-to-one)
        source_optional: The foreign-key column is nullable
        target_optional: The inverse side may be empty
    """

    unique: bool
    source_optional: bool
    target_optional: bool

    @property
    def cardinality(self) -> Cardinality:
        return Cardinality.ONE_TO_ONE if self.unique else Cardinality.ONE_TO_MANY


class CardinalityClassifier:
    """Decides one-to-one versus one-to-many, and which sides are optional.

    The foreign key is expected to have been validated: a single source column
    present on ``table`` and a single referenced column present on
    ``ref_table``.
    """

    def classify(self, table: Table, fk: ForeignKey, ref_table: Table) -> Classification:
        column_name = fk.columns[0]
        column = table.column(column_name)
        ref_column = ref_table.column(fk.ref_columns[0])
        assert column is not None and ref_column is not None

        unique = table.is_unique_column(column_name)
        # the many side of a one-to-many can always be empty
        target_optional = ref_column.nullable if unique else True

        classification = Classification(
            unique=unique,
            source_optional=column.nullable,
            target_optional=target_optional,
        )
        logger.debug(
            f"Classified {table.name}.{column_name} -> {ref_table.name}: "
            f"{classification.cardinality}, source_optional={column.nullable}, "
            f"target_optional={target_optional}"
        )
        return classification
