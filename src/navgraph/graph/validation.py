"""Integrity checks for the adjacency structure.

These detect code bugs, not bad input: public GraphStore mutations always
leave the store consistent. Tests run them after mutation sequences.

Invariants checked:
1. Every adjacency entry refers to a vertex that exists (no dangling entries).
2. Storage is symmetric: the entries ``(v, w)`` in ``u``'s list match the
   entries ``(u, w)`` in ``v``'s list one for one, weights included.
3. Self-loop entries come in pairs.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from navgraph.graph.errors import GraphCorruptionError

if TYPE_CHECKING:
    from collections.abc import Hashable

    from navgraph.graph.store import GraphStore


def find_violations(store: GraphStore) -> list[str]:
    """Return invariant violations found in *store* (empty if consistent)."""
    violations: list[str] = []
    # (u, v, w) -> number of entries in u's list pointing at v with weight w
    entries: Counter[tuple[Hashable, Hashable, int]] = Counter()

    for vertex in store:
        for neighbor, weight in store.adjacency(vertex):
            if neighbor not in store:
                violations.append(f"{vertex!r}: entry ({neighbor!r}, {weight}) is dangling")
                continue
            entries[(vertex, neighbor, weight)] += 1

    for (u, v, w), count in entries.items():
        if u == v:
            if count % 2:
                violations.append(f"{u!r}: self-loop weight {w} has an odd number of entries")
            continue
        mirrored = entries.get((v, u, w), 0)
        if mirrored != count:
            violations.append(
                f"{u!r} -> {v!r} weight {w}: {count} entry(ies) but {mirrored} mirrored"
            )

    return violations


def validate_store(store: GraphStore) -> None:
    """Raise GraphCorruptionError if *store* breaks any invariant."""
    violations = find_violations(store)
    if violations:
        raise GraphCorruptionError(violations)
