"""Text command driver for a GraphStore.

GraphShell turns one command line into one store call and turns the result
into something rich can print. Missing vertices, missing edges and unreachable
targets are ordinary results here and are rendered as messages.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from rich.table import Table
from rich.text import Text

from navgraph.config import NavgraphConfig
from navgraph.graph.errors import NavgraphError, SearchBudgetExceededError
from navgraph.graph.samples import gondar_landmarks
from navgraph.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence

    from rich.console import RenderableType

    from navgraph.graph.models import LongestPath
    from navgraph.graph.store import GraphStore

log = get_logger(__name__)

PROMPT = "navgraph> "


class ShellError(NavgraphError):
    """Raised for a command line that cannot be parsed."""


@dataclass
class ShellResult:
    """Outcome of one command line."""

    output: RenderableType | None
    ok: bool = True
    exit: bool = False


@dataclass(frozen=True)
class Command:
    name: str
    args: tuple[str, ...]
    help: str
    handler: Callable[[GraphShell, list[str]], RenderableType]

    @property
    def usage(self) -> str:
        return " ".join([self.name, *self.args])


def _fmt(vertex: Hashable) -> str:
    return str(vertex)


def _fmt_path(path: Sequence[Hashable]) -> str:
    return " -> ".join(_fmt(v) for v in path)


class GraphShell:
    """Execute text commands against a GraphStore.

    Args:
        store: Graph to operate on.
        config: Controls how vertex tokens are converted. Defaults apply if omitted.
    """

    def __init__(self, store: GraphStore, config: NavgraphConfig | None = None) -> None:
        self.store = store
        self.config = config or NavgraphConfig()

    def execute(self, line: str) -> ShellResult:
        """Run one command line and return its rendered result."""
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            return ShellResult(Text(f"Could not parse command: {e}", style="red"), ok=False)
        if not tokens:
            return ShellResult(None)

        name, args = tokens[0].lower(), tokens[1:]
        if name in ("exit", "quit"):
            return ShellResult(Text("Exiting..."), exit=True)

        command = COMMANDS.get(name)
        if command is None:
            return ShellResult(
                Text(f"Unknown command '{name}'. Type 'help' for a list.", style="red"),
                ok=False,
            )

        try:
            if len(args) != len(command.args):
                raise ShellError(f"Usage: {command.usage}")
            with structlog.contextvars.bound_contextvars(command=name):
                output = command.handler(self, args)
        except NavgraphError as e:
            log.info("command_failed", command=name, error=str(e))
            return ShellResult(Text(str(e), style="red"), ok=False)
        return ShellResult(output)

    # -------------------------------------------------------------------------
    # Argument conversion
    # -------------------------------------------------------------------------

    def _vertex(self, token: str) -> Hashable:
        try:
            return self.config.convert_vertex(token)
        except ValueError as e:
            expected = self.config.vertex_type
            raise ShellError(f"Invalid vertex '{token}' (expected {expected})") from e

    @staticmethod
    def _weight(token: str) -> int:
        try:
            return int(token)
        except ValueError as e:
            raise ShellError(f"Invalid weight '{token}' (expected an integer)") from e

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_vertex(self, args: list[str]) -> RenderableType:
        vertex = self._vertex(args[0])
        if self.store.add_vertex(vertex):
            return f"Vertex {_fmt(vertex)} added."
        return f"Vertex {_fmt(vertex)} already exists."

    def add_edge(self, args: list[str]) -> RenderableType:
        u, v, weight = self._vertex(args[0]), self._vertex(args[1]), self._weight(args[2])
        self.store.add_edge(u, v, weight)
        return f"Edge added between {_fmt(u)} and {_fmt(v)} with weight {weight}."

    def update_edge(self, args: list[str]) -> RenderableType:
        u, v, weight = self._vertex(args[0]), self._vertex(args[1]), self._weight(args[2])
        if self.store.update_edge(u, v, weight):
            return f"Edge between {_fmt(u)} and {_fmt(v)} updated to weight {weight}."
        return f"No edge between {_fmt(u)} and {_fmt(v)}."

    def delete_vertex(self, args: list[str]) -> RenderableType:
        vertex = self._vertex(args[0])
        if self.store.delete_vertex(vertex):
            return f"Vertex {_fmt(vertex)} deleted."
        return f"Vertex {_fmt(vertex)} does not exist."

    def delete_edge(self, args: list[str]) -> RenderableType:
        u, v = self._vertex(args[0]), self._vertex(args[1])
        if self.store.delete_edge(u, v):
            return f"Edge between {_fmt(u)} and {_fmt(v)} deleted."
        return f"No edge between {_fmt(u)} and {_fmt(v)}."

    def reset(self, args: list[str]) -> RenderableType:
        self.store.clear()
        return "Graph cleared."

    def sample(self, args: list[str]) -> RenderableType:
        gondar_landmarks(self.store)
        counts = f"{self.store.vertex_count()} vertices, {self.store.edge_count()} edges"
        return f"Sample loaded: {counts}."

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def vertices(self, args: list[str]) -> RenderableType:
        vertices = self.store.list_vertices()
        if not vertices:
            return "Graph is empty."
        return "Current vertices:\n" + "\n".join(_fmt(v) for v in vertices)

    def graph(self, args: list[str]) -> RenderableType:
        adjacency = self.store.describe_graph()
        if not adjacency:
            return "Graph is empty."
        table = Table(title="Graph")
        table.add_column("Vertex", style="cyan")
        table.add_column("Neighbors (vertex, weight)")
        for entry in adjacency:
            neighbors = " ".join(f"({_fmt(n.vertex)}, {n.weight})" for n in entry.neighbors)
            table.add_row(_fmt(entry.vertex), neighbors or "-")
        return table

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _missing(self, vertex: Hashable) -> RenderableType:
        return Text(f"Vertex {_fmt(vertex)} does not exist.", style="yellow")

    def bfs(self, args: list[str]) -> RenderableType:
        start = self._vertex(args[0])
        order = self.store.bfs(start)
        if not order:
            return self._missing(start)
        return "BFS traversal: " + ", ".join(_fmt(v) for v in order)

    def dfs(self, args: list[str]) -> RenderableType:
        start = self._vertex(args[0])
        order = self.store.dfs(start)
        if not order:
            return self._missing(start)
        return "DFS traversal: " + ", ".join(_fmt(v) for v in order)

    def dijkstra(self, args: list[str]) -> RenderableType:
        source = self._vertex(args[0])
        result = self.store.dijkstra(source)
        if not result.distances:
            return self._missing(source)

        table = Table(title=f"Shortest paths from {_fmt(source)}")
        table.add_column("Vertex", style="cyan")
        table.add_column("Distance", justify="right")
        table.add_column("Path")
        for vertex, distance in result.distances.items():
            if result.is_reachable(vertex):
                table.add_row(_fmt(vertex), str(distance), _fmt_path(result.path_to(vertex)))
            else:
                table.add_row(_fmt(vertex), "unreachable", "-", style="dim")
        return table

    def longest(self, args: list[str]) -> RenderableType:
        start = self._vertex(args[0])
        if start not in self.store:
            return self._missing(start)
        try:
            result = self.store.longest_path(start)
        except SearchBudgetExceededError as e:
            return Text(
                f"Search budget of {e.max_expansions} expansions exhausted. "
                f"Best length found: {_describe_longest(e.best)}",
                style="yellow",
            )
        text = f"Longest path length from {_fmt(start)}: {_describe_longest(result)}"
        if not result.exhaustive:
            text += " (depth-limited, lower bound)"
        return text

    def help(self, args: list[str]) -> RenderableType:
        table = Table(title="Commands", show_header=False)
        for command in COMMANDS.values():
            table.add_row(command.usage, command.help)
        table.add_row("exit", "Leave the shell")
        return table


def _describe_longest(result: LongestPath) -> str:
    if len(result.path) > 1:
        return f"{result.length} ({_fmt_path(result.path)})"
    return str(result.length)


COMMANDS: dict[str, Command] = {
    c.name: c
    for c in [
        Command("add-vertex", ("V",), "Add a vertex", GraphShell.add_vertex),
        Command("add-edge", ("U", "V", "W"), "Add an edge with weight W", GraphShell.add_edge),
        Command("update-edge", ("U", "V", "W"), "Set an edge weight", GraphShell.update_edge),
        Command("delete-vertex", ("V",), "Delete a vertex and its edges", GraphShell.delete_vertex),
        Command("delete-edge", ("U", "V"), "Delete edges between U and V", GraphShell.delete_edge),
        Command("vertices", (), "List vertices", GraphShell.vertices),
        Command("graph", (), "Show adjacency lists", GraphShell.graph),
        Command("bfs", ("V",), "Breadth-first traversal from V", GraphShell.bfs),
        Command("dfs", ("V",), "Depth-first traversal from V", GraphShell.dfs),
        Command("dijkstra", ("V",), "Shortest paths from V", GraphShell.dijkstra),
        Command("longest", ("V",), "Longest simple path from V", GraphShell.longest),
        Command("sample", (), "Load the Gondar landmark sample", GraphShell.sample),
        Command("reset", (), "Remove everything", GraphShell.reset),
        Command("help", (), "Show this list", GraphShell.help),
    ]
}
