"""Tests for adjacency integrity checks."""

from __future__ import annotations

import pytest

from navgraph.graph.errors import GraphCorruptionError
from navgraph.graph.store import GraphStore
from navgraph.graph.validation import find_violations, validate_store


class TestFindViolations:
    """Tests for find_violations."""

    def test_consistent_graph(self, triangle: GraphStore) -> None:
        """A graph built through the public API has no violations."""
        assert find_violations(triangle) == []

    def test_empty_graph(self) -> None:
        """An empty graph is consistent."""
        assert find_violations(GraphStore()) == []

    def test_dangling_entry(self, triangle: GraphStore) -> None:
        """An entry pointing at an unknown vertex is reported."""
        triangle.adjacency("A").append(("ghost", 1))
        violations = find_violations(triangle)
        assert violations == ["'A': entry ('ghost', 1) is dangling"]

    def test_missing_mirror(self, triangle: GraphStore) -> None:
        """A one-sided entry is reported."""
        triangle.adjacency("A").append(("B", 4))
        violations = find_violations(triangle)
        assert len(violations) == 1
        assert "'A' -> 'B' weight 4" in violations[0]

    def test_weight_mismatch(self, triangle: GraphStore) -> None:
        """Mirrored entries must carry the same weight."""
        entries = triangle.adjacency("B")
        entries[0] = ("A", 99)
        violations = find_violations(triangle)
        assert len(violations) == 2

    def test_unpaired_self_loop(self) -> None:
        """A self-loop with a single entry is reported."""
        store = GraphStore()
        store.add_vertex("A")
        store.adjacency("A").append(("A", 2))
        assert find_violations(store) == ["'A': self-loop weight 2 has an odd number of entries"]


class TestValidateStore:
    """Tests for validate_store and GraphStore.check_integrity."""

    def test_passes_silently(self, triangle: GraphStore) -> None:
        """No exception for a consistent store."""
        validate_store(triangle)
        triangle.check_integrity()

    def test_raises_with_violations(self, triangle: GraphStore) -> None:
        """Violations are carried on the raised error."""
        triangle.adjacency("C").append(("ghost", 1))
        with pytest.raises(GraphCorruptionError) as exc_info:
            triangle.check_integrity()
        assert exc_info.value.violations == ["'C': entry ('ghost', 1) is dangling"]
        assert "Graph corruption detected" in str(exc_info.value)

    def test_error_message_truncates(self) -> None:
        """Long violation lists are truncated in the message."""
        error = GraphCorruptionError([f"v{i}" for i in range(8)])
        assert "... and 3 more" in str(error)
