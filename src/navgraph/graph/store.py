"""Weighted undirected graph store.

GraphStore owns the identity table and the adjacency lists. Each vertex
identifier maps straight to its own adjacency list, so the identity table and
the adjacency table are one dict and cannot drift apart. There are no position
indices to remap when a vertex is deleted.

An edge ``(u, v, w)`` is stored twice: ``(v, w)`` in ``u``'s list and
``(u, w)`` in ``v``'s list. Lists keep insertion order, which fixes the
neighbor order seen by traversals. ``add_edge`` does not deduplicate, so
repeated calls leave parallel entries behind.

Absent vertices and edges are normal: mutations report them by returning
``False`` and queries by returning empty results.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from navgraph.graph.errors import ConfigError, InvalidWeightError
from navgraph.graph.models import Neighbor, VertexAdjacency
from navgraph.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator

    from navgraph.config import NavgraphConfig
    from navgraph.graph.models import LongestPath, SearchBudget, ShortestPaths

log = get_logger(__name__)


class UpdatePolicy(str, Enum):
    """How ``update_edge`` treats existing entries between two vertices.

    REPLACE_ALL drops every parallel entry and appends one fresh edge, which
    moves the edge to the end of both adjacency lists. REPLACE_FIRST rewrites
    the weight of the first matching entry on each side in place and leaves
    parallel entries alone.
    """

    REPLACE_ALL = "replace_all"
    REPLACE_FIRST = "replace_first"


def _check_weight(weight: Any, u: Hashable, v: Hashable) -> int:
    # bool is an int subclass but never a meaningful weight
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise InvalidWeightError(weight, u, v)
    return weight


def _coerce_policy(policy: Any) -> UpdatePolicy:
    try:
        return UpdatePolicy(policy)
    except ValueError as e:
        raise ConfigError("update_policy", policy, allowed=[p.value for p in UpdatePolicy]) from e


class GraphStore:
    """Mutable weighted undirected graph.

    Args:
        update_policy: Default policy for ``update_edge``.
        longest_path_budget: Default search budget for ``longest_path``.

    Raises:
        ConfigError: If *update_policy* is not an ``UpdatePolicy`` value.
    """

    def __init__(
        self,
        *,
        update_policy: UpdatePolicy = UpdatePolicy.REPLACE_ALL,
        longest_path_budget: SearchBudget | None = None,
    ) -> None:
        self._adj: dict[Hashable, list[tuple[Hashable, int]]] = {}
        self.update_policy = _coerce_policy(update_policy)
        self.longest_path_budget = longest_path_budget

    @classmethod
    def from_config(cls, config: NavgraphConfig) -> GraphStore:
        """Create an empty store using the defaults from *config*."""
        return cls(
            update_policy=config.update_policy,
            longest_path_budget=config.longest_path.to_budget(),
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_vertex(self, vertex: Hashable) -> bool:
        """Add a vertex with no edges.

        Returns:
            True if the vertex was created, False if it already existed.
        """
        if vertex in self._adj:
            return False
        self._adj[vertex] = []
        log.debug("vertex_added", vertex=vertex)
        return True

    def add_edge(self, u: Hashable, v: Hashable, weight: int) -> None:
        """Add an undirected edge, creating missing endpoints.

        Never deduplicates: adding the same pair twice leaves two parallel
        edges. Negative weights are stored as given.

        Raises:
            InvalidWeightError: If *weight* is not an integer.
        """
        weight = _check_weight(weight, u, v)
        self.add_vertex(u)
        self.add_vertex(v)
        self._adj[u].append((v, weight))
        self._adj[v].append((u, weight))
        log.debug("edge_added", u=u, v=v, weight=weight)

    def delete_edge(self, u: Hashable, v: Hashable) -> bool:
        """Remove every edge between *u* and *v*, parallel ones included.

        Returns:
            True if at least one edge was removed.
        """
        if u not in self._adj or v not in self._adj:
            return False
        before = len(self._adj[u])
        self._adj[u] = [entry for entry in self._adj[u] if entry[0] != v]
        if u != v:
            self._adj[v] = [entry for entry in self._adj[v] if entry[0] != u]
        removed = before - len(self._adj[u])
        if removed:
            log.debug("edge_deleted", u=u, v=v, entries=removed)
        return removed > 0

    def update_edge(
        self,
        u: Hashable,
        v: Hashable,
        weight: int,
        *,
        policy: UpdatePolicy | None = None,
    ) -> bool:
        """Change the weight of the edge between *u* and *v*.

        Args:
            u: One endpoint.
            v: The other endpoint.
            weight: New integer weight.
            policy: Overrides the store's ``update_policy`` for this call.

        Returns:
            True if an edge was updated. Updating an edge that does not
            exist is a no-op under both policies and returns False.

        Raises:
            InvalidWeightError: If *weight* is not an integer.
            ConfigError: If *policy* is not an ``UpdatePolicy`` value.
        """
        weight = _check_weight(weight, u, v)
        policy = _coerce_policy(policy) if policy is not None else self.update_policy
        if not self.has_edge(u, v):
            return False

        if policy is UpdatePolicy.REPLACE_ALL:
            self.delete_edge(u, v)
            self.add_edge(u, v, weight)
        else:
            self._rewrite_first(u, v, weight)
            if u != v:
                self._rewrite_first(v, u, weight)
            else:
                # a self-loop has its two mirrored entries in one list
                self._rewrite_first(u, u, weight, skip=1)

        log.debug("edge_updated", u=u, v=v, weight=weight, policy=policy.value)
        return True

    def _rewrite_first(self, u: Hashable, v: Hashable, weight: int, skip: int = 0) -> None:
        entries = self._adj[u]
        for i, (other, _) in enumerate(entries):
            if other == v:
                if skip:
                    skip -= 1
                    continue
                entries[i] = (v, weight)
                return

    def delete_vertex(self, vertex: Hashable) -> bool:
        """Remove a vertex and every edge incident to it.

        When this returns, no adjacency list refers to *vertex* any more.

        Returns:
            True if the vertex existed.
        """
        if vertex not in self._adj:
            return False
        incident = len(self._adj.pop(vertex))
        for other, entries in self._adj.items():
            if any(entry[0] == vertex for entry in entries):
                self._adj[other] = [entry for entry in entries if entry[0] != vertex]
        log.debug("vertex_deleted", vertex=vertex, incident_entries=incident)
        return True

    def clear(self) -> None:
        """Remove all vertices and edges."""
        self._adj.clear()
        log.debug("graph_cleared")

    # -------------------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------------------

    def has_vertex(self, vertex: Hashable) -> bool:
        return vertex in self._adj

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        if u not in self._adj or v not in self._adj:
            return False
        return any(other == v for other, _ in self._adj[u])

    def list_vertices(self) -> list[Hashable]:
        """Return all vertices in insertion order."""
        return list(self._adj)

    def neighbors(self, vertex: Hashable) -> list[Neighbor]:
        """Return the adjacency entries of *vertex*, empty if it is absent."""
        return [Neighbor(vertex=other, weight=w) for other, w in self._adj.get(vertex, [])]

    def edge_weights(self, u: Hashable, v: Hashable) -> list[int]:
        """Return the weights of every edge between *u* and *v*, in stored order."""
        if v not in self._adj:
            return []
        weights = [w for other, w in self._adj.get(u, []) if other == v]
        # each self-loop is stored twice in the same list
        return weights[::2] if u == v else weights

    def describe_graph(self) -> list[VertexAdjacency]:
        """Return the adjacency structure as data, one entry per vertex."""
        return [
            VertexAdjacency(vertex=vertex, neighbors=self.neighbors(vertex)) for vertex in self._adj
        ]

    def vertex_count(self) -> int:
        return len(self._adj)

    def edge_count(self) -> int:
        """Return the number of logical edges, parallel edges counted separately."""
        return sum(len(entries) for entries in self._adj.values()) // 2

    def adjacency(self, vertex: Hashable) -> list[tuple[Hashable, int]]:
        """Return the live ``(neighbor, weight)`` list of *vertex*.

        For use by the algorithms module, which must not mutate it.
        """
        return self._adj[vertex]

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._adj)

    def __repr__(self) -> str:
        return f"GraphStore(vertices={self.vertex_count()}, edges={self.edge_count()})"

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def bfs(self, start: Hashable) -> list[Hashable]:
        """Breadth-first visit order from *start* (empty if absent)."""
        from navgraph.graph.algorithms import bfs

        return bfs(self, start)

    def dfs(self, start: Hashable) -> list[Hashable]:
        """Depth-first pre-order from *start* (empty if absent)."""
        from navgraph.graph.algorithms import dfs

        return dfs(self, start)

    def dijkstra(self, source: Hashable) -> ShortestPaths:
        """Shortest distances from *source*. See :func:`algorithms.dijkstra`."""
        from navgraph.graph.algorithms import dijkstra

        return dijkstra(self, source)

    def longest_path(self, start: Hashable, *, budget: SearchBudget | None = None) -> LongestPath:
        """Longest simple path from *start*. See :func:`algorithms.longest_path`."""
        from navgraph.graph.algorithms import longest_path

        if budget is None:
            budget = self.longest_path_budget
        return longest_path(self, start, budget=budget)

    def check_integrity(self) -> None:
        """Raise GraphCorruptionError if the adjacency structure is inconsistent."""
        from navgraph.graph.validation import validate_store

        validate_store(self)
