"""Traversal and path algorithms over a GraphStore.

Pure functions that read the store without modifying it. Neighbors are always
visited in stored (insertion) order, so results are deterministic for a given
sequence of mutations.

DFS and the longest-path search keep an explicit stack of neighbor iterators
instead of recursing. Visit order matches the recursive formulation, and deep
graphs do not run into the interpreter's recursion limit.
"""

from __future__ import annotations

import heapq
import itertools
import math
from collections import deque
from typing import TYPE_CHECKING

from navgraph.graph.errors import NegativeWeightError, SearchBudgetExceededError
from navgraph.graph.models import LongestPath, SearchBudget, ShortestPaths
from navgraph.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator

    from navgraph.graph.store import GraphStore

log = get_logger(__name__)


def bfs(store: GraphStore, start: Hashable) -> list[Hashable]:
    """Breadth-first traversal from *start*.

    Vertices are marked when enqueued, so each one enters the queue at most
    once even when several frontier vertices point at it.

    Returns:
        Visit order, or an empty list if *start* is not in the graph.
    """
    if start not in store:
        return []

    visited = {start}
    queue = deque([start])
    order: list[Hashable] = []
    while queue:
        vertex = queue.popleft()
        order.append(vertex)
        for neighbor, _ in store.adjacency(vertex):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return order


def dfs(store: GraphStore, start: Hashable) -> list[Hashable]:
    """Depth-first pre-order traversal from *start*.

    A vertex is marked visited before any of its neighbors are explored.

    Returns:
        Visit order, or an empty list if *start* is not in the graph.
    """
    if start not in store:
        return []

    visited = {start}
    order = [start]
    stack: list[Iterator[tuple[Hashable, int]]] = [iter(store.adjacency(start))]
    while stack:
        for neighbor, _ in stack[-1]:
            if neighbor not in visited:
                visited.add(neighbor)
                order.append(neighbor)
                stack.append(iter(store.adjacency(neighbor)))
                break
        else:
            stack.pop()
    return order


def dijkstra(store: GraphStore, source: Hashable) -> ShortestPaths:
    """Single-source shortest distances over non-negative edge weights.

    Uses a binary heap with lazy deletion: an entry popped with a distance
    larger than the one already recorded is stale and skipped. Heap entries
    carry an insertion counter as tie-breaker so vertex identifiers never
    need to be comparable with each other.

    Args:
        store: Graph to search.
        source: Start vertex.

    Returns:
        Distances for every vertex (``math.inf`` when unreachable) and the
        predecessor of each reachable vertex. Empty if *source* is absent.

    Raises:
        NegativeWeightError: If a negative edge weight is reachable from
            *source*.
    """
    if source not in store:
        return ShortestPaths(source=source)

    dist: dict[Hashable, int | float] = dict.fromkeys(store, math.inf)
    dist[source] = 0
    predecessors: dict[Hashable, Hashable] = {}
    counter = itertools.count()
    heap: list[tuple[int | float, int, Hashable]] = [(0, next(counter), source)]

    while heap:
        d, _, vertex = heapq.heappop(heap)
        if d > dist[vertex]:
            continue
        for neighbor, weight in store.adjacency(vertex):
            if weight < 0:
                raise NegativeWeightError(vertex, neighbor, weight)
            candidate = d + weight
            if candidate < dist[neighbor]:
                dist[neighbor] = candidate
                predecessors[neighbor] = vertex
                heapq.heappush(heap, (candidate, next(counter), neighbor))

    reachable = sum(1 for d in dist.values() if d != math.inf)
    log.debug("dijkstra_complete", source=source, reachable=reachable, total=len(dist))
    return ShortestPaths(source=source, distances=dist, predecessors=predecessors)


def longest_path(
    store: GraphStore,
    start: Hashable,
    *,
    budget: SearchBudget | None = None,
) -> LongestPath:
    """Longest simple path from *start* by exhaustive backtracking.

    Every simple path starting at *start* is explored: a vertex is put on the
    current path when entered and taken off again once all its branches are
    done, so it can appear on other branches. The running maximum starts at
    0 (the path consisting of *start* alone). Worst-case cost is exponential
    in the number of vertices.

    Args:
        store: Graph to search.
        start: Start vertex.
        budget: Optional limits. ``max_depth`` prunes paths longer than that
            many edges and marks the result non-exhaustive. ``max_expansions``
            aborts the search once that many vertices have been entered.

    Returns:
        The maximum length and the first path reaching it. An absent *start*
        yields length 0 and an empty path.

    Raises:
        SearchBudgetExceededError: If ``budget.max_expansions`` runs out.
            The error carries the best result found so far.
    """
    if start not in store:
        return LongestPath(start=start)

    budget = budget or SearchBudget()
    on_path = {start}
    path = [start]
    best_length = 0
    best_path = [start]
    expansions = 1
    pruned = False

    stack: list[tuple[Hashable, Iterator[tuple[Hashable, int]], int]] = [
        (start, iter(store.adjacency(start)), 0)
    ]
    while stack:
        vertex, neighbors, length = stack[-1]
        for neighbor, weight in neighbors:
            if neighbor in on_path:
                continue
            # len(path) is the edge count once neighbor is appended
            if budget.max_depth is not None and len(path) > budget.max_depth:
                pruned = True
                continue
            expansions += 1
            if budget.max_expansions is not None and expansions > budget.max_expansions:
                best = LongestPath(
                    start=start,
                    length=best_length,
                    path=best_path,
                    exhaustive=False,
                    expansions=expansions - 1,
                )
                log.warning(
                    "longest_path_budget_exceeded",
                    start=start,
                    max_expansions=budget.max_expansions,
                    best=best_length,
                )
                raise SearchBudgetExceededError(start, budget.max_expansions, best)

            on_path.add(neighbor)
            path.append(neighbor)
            new_length = length + weight
            if new_length > best_length:
                best_length = new_length
                best_path = list(path)
            stack.append((neighbor, iter(store.adjacency(neighbor)), new_length))
            break
        else:
            # every branch below vertex is done: backtrack
            stack.pop()
            on_path.discard(vertex)
            path.pop()

    log.debug(
        "longest_path_complete",
        start=start,
        length=best_length,
        expansions=expansions,
        exhaustive=not pruned,
    )
    return LongestPath(
        start=start,
        length=best_length,
        path=best_path,
        exhaustive=not pruned,
        expansions=expansions,
    )
