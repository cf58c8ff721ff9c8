"""Graph package - weighted undirected graph store and algorithms.

GraphStore holds the vertices and adjacency lists and exposes every mutation
and query. The algorithms module provides the traversals and path searches as
pure functions; GraphStore's query methods delegate to it.
"""

from navgraph.graph.algorithms import bfs, dfs, dijkstra, longest_path
from navgraph.graph.errors import (
    ConfigError,
    GraphCorruptionError,
    InvalidWeightError,
    NavgraphError,
    NegativeWeightError,
    SearchBudgetExceededError,
)
from navgraph.graph.models import (
    LongestPath,
    Neighbor,
    SearchBudget,
    ShortestPaths,
    VertexAdjacency,
)
from navgraph.graph.samples import GONDAR_LANDMARKS, gondar_landmarks
from navgraph.graph.store import GraphStore, UpdatePolicy
from navgraph.graph.validation import find_violations, validate_store

__all__ = [
    "GONDAR_LANDMARKS",
    "ConfigError",
    "GraphCorruptionError",
    "GraphStore",
    "InvalidWeightError",
    "LongestPath",
    "NavgraphError",
    "NegativeWeightError",
    "Neighbor",
    "SearchBudget",
    "SearchBudgetExceededError",
    "ShortestPaths",
    "UpdatePolicy",
    "VertexAdjacency",
    "bfs",
    "dfs",
    "dijkstra",
    "find_violations",
    "gondar_landmarks",
    "longest_path",
    "validate_store",
]
