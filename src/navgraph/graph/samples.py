"""Built-in sample graphs."""

from __future__ import annotations

from navgraph.graph.store import GraphStore

# Landmarks around Gondar, weights are travel costs.
GONDAR_LANDMARKS: list[tuple[str, str, int]] = [
    ("Fasil Castle", "Debre Birhan Selassie Church", 10),
    ("Fasil Castle", "Gondar Castle", 5),
    ("Debre Birhan Selassie Church", "Gondar Castle", 2),
    ("Gondar Castle", "Bahir Dar Road", 1),
    ("Bahir Dar Road", "Lake Tana", 3),
    ("Lake Tana", "Simien Mountains", 9),
    ("Lake Tana", "Gondar Castle", 2),
    ("Simien Mountains", "Fasil Castle", 4),
]


def load_edges(store: GraphStore, edges: list[tuple[str, str, int]]) -> GraphStore:
    """Add *edges* to *store* in order and return the store."""
    for u, v, weight in edges:
        store.add_edge(u, v, weight)
    return store


def gondar_landmarks(store: GraphStore | None = None) -> GraphStore:
    """Return a store holding the Gondar landmark network.

    Args:
        store: Store to load into. A new default store is created if omitted.
    """
    if store is None:
        store = GraphStore()
    return load_edges(store, GONDAR_LANDMARKS)
