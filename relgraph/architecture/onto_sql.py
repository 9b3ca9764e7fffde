"""Read-only relational schema model.

The schema graph is produced by an introspection collaborator and consumed by
the inference engine. All models here are frozen: tables, columns and foreign
keys are constructed once and never mutated.

Example:
    >>> graph = SchemaGraph.from_yaml_str('''
    ... tables:
    ... -   name: files
    ...     columns: [{name: id, type: text}]
    ...     primary_key: [id]
    ... ''')
    >>> graph.table("files").column("id").nullable
    False
"""

from __future__ import annotations

from pydantic import ConfigDict, Field as PydanticField, model_validator

from relgraph.architecture.base import ConfigBaseModel
from relgraph.onto import ReferentialAction


class FrozenModel(ConfigBaseModel):
    model_config = ConfigDict(frozen=True)


class Column(FrozenModel):
    """Column of a table."""

    name: str
    type: str = PydanticField(
        default="", description="Declared SQL type, kept opaque."
    )
    nullable: bool = False


class Index(FrozenModel):
    """Index over one or more columns of a table."""

    name: str
    columns: tuple[str, ...]
    unique: bool = False


class ForeignKey(FrozenModel):
    """Foreign key constraint owned by its source table.

    The referenced table is held by name and resolved through the
    :class:`SchemaGraph`.
    """

    symbol: str = PydanticField(default="", description="Constraint name.")
    columns: tuple[str, ...]
    ref_table: str
    ref_columns: tuple[str, ...]
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION
    on_update: ReferentialAction = ReferentialAction.NO_ACTION

    @property
    def is_composite(self) -> bool:
        return len(self.columns) != 1 or len(self.ref_columns) != 1

    def __str__(self) -> str:
        return (
            f"{self.symbol or '<unnamed>'}"
            f"({', '.join(self.columns)}) -> "
            f"{self.ref_table}({', '.join(self.ref_columns)})"
        )


class Table(FrozenModel):
    """Table with its columns, keys and foreign keys.

    Declaration order of ``columns`` and ``foreign_keys`` is preserved.
    """

    name: str
    columns: tuple[Column, ...] = ()
    primary_key: tuple[str, ...] = ()
    indexes: tuple[Index, ...] = ()
    foreign_keys: tuple[ForeignKey, ...] = ()

    @model_validator(mode="after")
    def _check_columns(self) -> Table:
        seen: set[str] = set()
        for column in self.columns:
            if column.name in seen:
                raise ValueError(
                    f"Duplicate column '{column.name}' in table '{self.name}'"
                )
            seen.add(column.name)
        for name in self.primary_key:
            if name not in seen:
                raise ValueError(
                    f"Primary key column '{name}' is not a column of table '{self.name}'"
                )
        return self

    def column(self, name: str) -> Column | None:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def has_column(self, name: str) -> bool:
        return self.column(name) is not None

    def is_unique_column(self, name: str) -> bool:
        """Whether the column alone forms a unique index on this table.

        A single-column primary key counts as a unique index.
        """
        if self.primary_key == (name,):
            return True
        return any(idx.unique and idx.columns == (name,) for idx in self.indexes)


class SchemaGraph(FrozenModel):
    """Immutable view over the tables of a relational schema."""

    tables: tuple[Table, ...] = ()

    @model_validator(mode="after")
    def _check_tables(self) -> SchemaGraph:
        names = [table.name for table in self.tables]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate tables in schema graph: {duplicates}")
        return self

    def table(self, name: str) -> Table | None:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.table(name) is not None

    def __len__(self) -> int:
        return len(self.tables)

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]
