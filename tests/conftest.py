"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from navgraph.graph.store import GraphStore


@pytest.fixture(autouse=True)
def clear_navgraph_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep NAVGRAPH_* variables from the developer's shell out of tests."""
    for name in ("NAVGRAPH_VERTEX_TYPE", "NAVGRAPH_UPDATE_POLICY", "NAVGRAPH_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def triangle() -> GraphStore:
    """Vertices A, B, C with edges (A,B,1), (B,C,2), (A,C,5)."""
    store = GraphStore()
    store.add_edge("A", "B", 1)
    store.add_edge("B", "C", 2)
    store.add_edge("A", "C", 5)
    return store
