"""Result models returned by graph queries.

The store hands these back instead of printing; rendering is the caller's job.
"""

from __future__ import annotations

import math
from collections.abc import Hashable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Vertex = Hashable


class Neighbor(BaseModel):
    """One adjacency entry: the vertex at the other end and the edge weight."""

    model_config = ConfigDict(frozen=True)

    vertex: Any
    weight: int


class VertexAdjacency(BaseModel):
    """A vertex together with its neighbors in stored order."""

    model_config = ConfigDict(frozen=True)

    vertex: Any
    neighbors: list[Neighbor] = Field(default_factory=list)


class ShortestPaths(BaseModel):
    """Single-source shortest distances.

    Every vertex of the graph appears in ``distances``; unreachable vertices
    map to ``math.inf``. ``predecessors`` holds the previous hop on the
    shortest path for every reachable vertex except the source.

    An empty result (no distances) means the source vertex did not exist.
    """

    model_config = ConfigDict(frozen=True)

    source: Any
    distances: dict[Any, int | float] = Field(default_factory=dict)
    predecessors: dict[Any, Any] = Field(default_factory=dict)

    def is_reachable(self, vertex: Vertex) -> bool:
        return self.distances.get(vertex, math.inf) != math.inf

    def distance(self, vertex: Vertex) -> int | float:
        """Shortest distance to *vertex*, ``math.inf`` if unreachable or unknown."""
        return self.distances.get(vertex, math.inf)

    def path_to(self, vertex: Vertex) -> list[Any]:
        """Reconstruct the vertex sequence from the source to *vertex*.

        Returns an empty list when *vertex* is unreachable.
        """
        if not self.is_reachable(vertex):
            return []
        path = [vertex]
        # Chain length is bounded by the vertex count; the guard catches a
        # hand-edited predecessor map that loops.
        for _ in range(len(self.distances)):
            if path[-1] == self.source:
                break
            path.append(self.predecessors[path[-1]])
        else:
            if path[-1] != self.source:
                msg = f"Predecessor chain for {vertex!r} does not reach {self.source!r}"
                raise ValueError(msg)
        path.reverse()
        return path


class LongestPath(BaseModel):
    """Outcome of a longest-simple-path search.

    Attributes:
        start: Source vertex.
        length: Largest edge-weight sum over the explored simple paths.
        path: First path found with that length, starting at ``start``.
        exhaustive: False when a depth limit pruned part of the search, in
            which case ``length`` is a lower bound.
        expansions: Number of vertex expansions performed.
    """

    model_config = ConfigDict(frozen=True)

    start: Any
    length: int = 0
    path: list[Any] = Field(default_factory=list)
    exhaustive: bool = True
    expansions: int = 0


class SearchBudget(BaseModel):
    """Limits for the exponential longest-path search.

    ``max_depth`` caps the number of edges on an explored path;
    ``max_expansions`` caps the total number of vertices expanded.
    ``None`` leaves a dimension unbounded.
    """

    model_config = ConfigDict(frozen=True)

    max_depth: int | None = Field(default=None, ge=0)
    max_expansions: int | None = Field(default=None, ge=1)

    @property
    def unbounded(self) -> bool:
        return self.max_depth is None and self.max_expansions is None
