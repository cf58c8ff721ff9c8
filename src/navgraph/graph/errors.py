"""Graph error types.

Absent vertices and absent edges are normal outcomes in navgraph: mutations
return ``False`` and queries return empty results. The exceptions here cover
input that is outside the contract (non-integer weights, negative weights
reaching Dijkstra), exhausted search budgets, invalid configuration, and
invariant breaches detected by :mod:`navgraph.graph.validation`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Hashable

    from navgraph.graph.models import LongestPath


class NavgraphError(Exception):
    """Base class for all navgraph errors."""


@dataclass
class InvalidWeightError(NavgraphError, ValueError):
    """Raised when an edge weight is not an integer.

    Attributes:
        weight: The rejected value.
        u: First endpoint of the edge being written.
        v: Second endpoint of the edge being written.
    """

    weight: Any
    u: Hashable = None
    v: Hashable = None

    def __post_init__(self) -> None:
        super().__init__(
            f"Edge weight must be an integer, got {type(self.weight).__name__} "
            f"{self.weight!r} for edge {self.u!r} - {self.v!r}"
        )


@dataclass
class NegativeWeightError(NavgraphError, ValueError):
    """Raised when Dijkstra reaches an edge with a negative weight.

    On an undirected graph a negative edge can be walked back and forth
    forever, so no shortest path exists once one is reachable.
    """

    u: Hashable
    v: Hashable
    weight: int

    def __post_init__(self) -> None:
        super().__init__(
            f"Negative weight {self.weight} on edge {self.u!r} - {self.v!r}; "
            "shortest paths require non-negative weights"
        )


@dataclass
class SearchBudgetExceededError(NavgraphError):
    """Raised when a longest-path search runs out of vertex expansions.

    Attributes:
        start: Source vertex of the search.
        max_expansions: The budget that was exceeded.
        best: Best path found before the search stopped. Its length is a
            lower bound on the true longest path.
    """

    start: Hashable
    max_expansions: int
    best: LongestPath

    def __post_init__(self) -> None:
        super().__init__(
            f"Longest path search from {self.start!r} exceeded {self.max_expansions} "
            f"expansions (best so far: {self.best.length})"
        )


@dataclass
class ConfigError(NavgraphError, ValueError):
    """Raised for an invalid configuration value."""

    key: str
    value: Any
    allowed: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        msg = f"Invalid value {self.value!r} for '{self.key}'"
        if self.allowed:
            msg += f" (expected one of: {', '.join(self.allowed)})"
        super().__init__(msg)


@dataclass
class GraphCorruptionError(NavgraphError):
    """Raised when integrity checks find a broken adjacency structure.

    This indicates a code bug rather than bad input: every public mutation
    keeps the store consistent, so a violation means internal state was
    modified behind the store's back.

    Attributes:
        violations: List of invariant violations found.
    """

    violations: list[str]

    def __post_init__(self) -> None:
        super().__init__(f"Graph corruption detected: {len(self.violations)} violation(s)")

    def __str__(self) -> str:
        lines = ["Graph corruption detected:"]
        for v in self.violations[:5]:
            lines.append(f"  - {v}")
        if len(self.violations) > 5:
            lines.append(f"  - ... and {len(self.violations) - 5} more")
        return "\n".join(lines)
