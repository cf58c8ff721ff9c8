"""Tests for query result models."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from navgraph.graph.models import LongestPath, SearchBudget, ShortestPaths


class TestShortestPaths:
    """Tests for ShortestPaths helpers."""

    def test_path_reconstruction(self) -> None:
        """path_to follows predecessors back to the source."""
        result = ShortestPaths(
            source="A",
            distances={"A": 0, "B": 1, "C": 3, "D": math.inf},
            predecessors={"B": "A", "C": "B"},
        )
        assert result.path_to("C") == ["A", "B", "C"]
        assert result.path_to("A") == ["A"]
        assert result.path_to("D") == []
        assert result.path_to("unknown") == []

    def test_distances_keep_int_values(self) -> None:
        """Finite distances stay integers."""
        result = ShortestPaths(source="A", distances={"A": 0, "B": 4})
        assert isinstance(result.distances["B"], int)
        assert result.distance("B") == 4

    def test_cyclic_predecessors_rejected(self) -> None:
        """A predecessor loop that never reaches the source raises."""
        result = ShortestPaths(
            source="A",
            distances={"A": 0, "B": 1, "C": 2},
            predecessors={"B": "C", "C": "B"},
        )
        with pytest.raises(ValueError, match="does not reach"):
            result.path_to("B")


class TestImmutability:
    """Query results cannot be reassigned after the fact."""

    def test_shortest_paths_frozen(self) -> None:
        """ShortestPaths fields are read-only."""
        result = ShortestPaths(source="A", distances={"A": 0})
        with pytest.raises(ValidationError):
            result.source = "B"  # type: ignore[misc]

    def test_longest_path_frozen(self) -> None:
        """LongestPath fields are read-only."""
        result = LongestPath(start="A", length=3, path=["A", "B"])
        with pytest.raises(ValidationError):
            result.length = 9  # type: ignore[misc]


class TestSearchBudget:
    """Tests for SearchBudget."""

    def test_unbounded_default(self) -> None:
        """No limits by default."""
        assert SearchBudget().unbounded

    def test_bounded(self) -> None:
        """Any limit makes the budget bounded."""
        assert not SearchBudget(max_depth=3).unbounded

    @pytest.mark.parametrize(
        "kwargs", [{"max_depth": -1}, {"max_expansions": 0}, {"max_expansions": -5}]
    )
    def test_rejects_invalid_limits(self, kwargs: dict[str, int]) -> None:
        """Limits must be non-negative (depth) or positive (expansions)."""
        with pytest.raises(ValidationError):
            SearchBudget(**kwargs)


def test_longest_path_defaults() -> None:
    """An empty LongestPath is exhaustive with length 0."""
    result = LongestPath(start="A")
    assert result.length == 0
    assert result.path == []
    assert result.exhaustive
