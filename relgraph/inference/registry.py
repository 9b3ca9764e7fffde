"""Registry of schema nodes keyed by table name.

The registry is the only mutable state shared during an inference run. Every
node sits behind its own re-entrant lock; writers that must read a node's
edge names and then upsert (naming, pairing) take the lock with
:meth:`MutationRegistry.locked` for the whole sequence.

Example:
    >>> registry = MutationRegistry()
    >>> stored = registry.upsert("videos", Edge(name="file", type="File", field="fileId"))
    >>> registry["videos"].edge_names
    ['file']
"""

from __future__ import annotations

import logging
import threading
from contextlib import ExitStack, contextmanager
from typing import Any, Iterator

import yaml

from relgraph.architecture.node import Edge, SchemaNode
from relgraph.inference.naming import type_name

logger = logging.getLogger(__name__)


class MutationRegistry:
    """Mapping from table name to :class:`SchemaNode` with idempotent upserts.

    Nodes are created lazily on first reference and iterated in creation
    order. No operation removes an edge.
    """

    def __init__(self, nodes: list[SchemaNode] | None = None):
        self._nodes: dict[str, SchemaNode] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        for node in nodes or []:
            self._nodes[node.table] = node
            self._locks[node.table] = threading.RLock()

    def node(self, table_name: str) -> SchemaNode:
        """Return the node of ``table_name``, creating an empty one if needed."""
        with self._registry_lock:
            node = self._nodes.get(table_name)
            if node is None:
                node = SchemaNode(table=table_name, name=type_name(table_name))
                self._nodes[table_name] = node
                self._locks[table_name] = threading.RLock()
                logger.debug(f"Created schema node '{node.name}' for '{table_name}'")
            return node

    def get(self, table_name: str) -> SchemaNode | None:
        return self._nodes.get(table_name)

    def _lock(self, table_name: str) -> threading.RLock:
        self.node(table_name)
        return self._locks[table_name]

    @contextmanager
    def locked(self, *table_names: str) -> Iterator[list[SchemaNode]]:
        """Hold the locks of the given nodes, creating them if needed.

        Locks are acquired in sorted table-name order so concurrent writers
        touching the same pair of nodes cannot deadlock.

        Yields:
            The nodes, in the order the table names were given.
        """
        with ExitStack() as stack:
            for name in sorted(set(table_names)):
                stack.enter_context(self._lock(name))
            yield [self._nodes[name] for name in table_names]

    def upsert(self, table_name: str, edge: Edge) -> Edge:
        """Insert ``edge`` into the node of ``table_name`` or update it in place.

        An existing edge with the same name keeps its identity and position and
        takes every attribute of ``edge``.

        Returns:
            The edge stored on the node.
        """
        with self.locked(table_name) as (node,):
            existing = node.edge(edge.name)
            if existing is None:
                stored = edge.model_copy()
                node.edges.append(stored)
                logger.debug(f"Added edge '{edge.name}' to '{table_name}'")
                return stored
            if existing != edge:
                logger.debug(f"Updated edge '{edge.name}' on '{table_name}'")
            existing.assign(edge)
            return existing

    def __contains__(self, table_name: object) -> bool:
        return table_name in self._nodes

    def __getitem__(self, table_name: str) -> SchemaNode:
        return self._nodes[table_name]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def items(self) -> list[tuple[str, SchemaNode]]:
        return list(self._nodes.items())

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for a renderer: table name -> node dict."""
        return {name: node.to_dict() for name, node in self._nodes.items()}

    def to_yaml_str(self) -> str:
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)
