"""navgraph - mutable weighted undirected graph with traversal and path queries."""

from navgraph.graph import GraphStore, UpdatePolicy

__version__ = "0.1.0"

__all__ = ["GraphStore", "UpdatePolicy", "__version__"]
