"""Configuration loading.

Settings come from an optional ``navgraph.yaml`` file. Environment variables
override the file:

- ``NAVGRAPH_VERTEX_TYPE``: how the shell converts vertex tokens (str or int)
- ``NAVGRAPH_UPDATE_POLICY``: default ``update_edge`` policy
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import TYPE_CHECKING, Any

from ruamel.yaml import YAML

from navgraph.graph.errors import ConfigError, NavgraphError
from navgraph.graph.models import SearchBudget
from navgraph.graph.store import UpdatePolicy

if TYPE_CHECKING:
    from collections.abc import Hashable
    from typing import TextIO

CONFIG_FILENAME = "navgraph.yaml"
DEFAULT_VERTEX_TYPE = "str"
VERTEX_TYPES: dict[str, type] = {"str": str, "int": int}


@dataclass
class LongestPathConfig:
    """Search budget for longest-path queries. ``None`` means unbounded."""

    max_depth: int | None = None
    max_expansions: int | None = None

    def to_budget(self) -> SearchBudget | None:
        budget = SearchBudget(max_depth=self.max_depth, max_expansions=self.max_expansions)
        return None if budget.unbounded else budget

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LongestPathConfig:
        max_depth = _optional_int(data.get("max_depth"), "longest_path.max_depth", minimum=0)
        max_expansions = _optional_int(
            data.get("max_expansions"), "longest_path.max_expansions", minimum=1
        )
        return cls(max_depth=max_depth, max_expansions=max_expansions)


def _optional_int(value: Any, key: str, minimum: int) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigError(key, value)
    return value


@dataclass
class NavgraphConfig:
    """Settings for a navgraph session.

    Attributes:
        vertex_type: ``"str"`` or ``"int"``; the shell converts vertex tokens
            with it. The store itself accepts any hashable identifier.
        update_policy: Default policy for ``GraphStore.update_edge``.
        longest_path: Default search budget for longest-path queries.
    """

    vertex_type: str = DEFAULT_VERTEX_TYPE
    update_policy: UpdatePolicy = UpdatePolicy.REPLACE_ALL
    longest_path: LongestPathConfig = field(default_factory=LongestPathConfig)

    def __post_init__(self) -> None:
        if self.vertex_type not in VERTEX_TYPES:
            raise ConfigError("vertex_type", self.vertex_type, allowed=list(VERTEX_TYPES))
        try:
            self.update_policy = UpdatePolicy(self.update_policy)
        except ValueError as e:
            allowed = [p.value for p in UpdatePolicy]
            raise ConfigError("update_policy", self.update_policy, allowed=allowed) from e

    def convert_vertex(self, token: str) -> Hashable:
        """Convert a raw token to a vertex identifier.

        Raises:
            ValueError: If the token is not valid for ``vertex_type``.
        """
        return VERTEX_TYPES[self.vertex_type](token)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NavgraphConfig:
        """Create config from a dictionary, applying environment overrides.

        Args:
            data: Mapping with optional ``vertex_type``, ``update_policy``
                and ``longest_path`` keys.

        Raises:
            ConfigError: If a value is invalid.
        """
        longest_path_data = data.get("longest_path") or {}
        if not isinstance(longest_path_data, dict):
            raise ConfigError("longest_path", longest_path_data)

        return cls(
            vertex_type=os.getenv("NAVGRAPH_VERTEX_TYPE")
            or data.get("vertex_type", DEFAULT_VERTEX_TYPE),
            update_policy=os.getenv("NAVGRAPH_UPDATE_POLICY")
            or data.get("update_policy", UpdatePolicy.REPLACE_ALL.value),
            longest_path=LongestPathConfig.from_dict(dict(longest_path_data)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "vertex_type": self.vertex_type,
            "update_policy": self.update_policy.value,
            "longest_path": {
                "max_depth": self.longest_path.max_depth,
                "max_expansions": self.longest_path.max_expansions,
            },
        }


class ConfigFileError(NavgraphError):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config at {path}: {reason}")


def load_config(path: Path | None = None) -> NavgraphConfig:
    """Load configuration.

    Args:
        path: YAML file to read. If omitted, ``navgraph.yaml`` in the current
            directory is used when present; otherwise defaults apply
            (environment overrides still do).

    Raises:
        ConfigFileError: If an explicitly given file is missing or unreadable.
        ConfigError: If a value in the file is invalid.
    """
    if path is None:
        default_path = Path(CONFIG_FILENAME)
        if not default_path.exists():
            return NavgraphConfig.from_dict({})
        path = default_path

    if not path.exists():
        raise ConfigFileError(path, "File not found")

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except Exception as e:
        raise ConfigFileError(path, str(e)) from e

    if data is None:
        return NavgraphConfig.from_dict({})
    if not isinstance(data, dict):
        raise ConfigFileError(path, "Top level must be a mapping")
    return NavgraphConfig.from_dict(data)


def dump_config(config: NavgraphConfig, stream: TextIO) -> None:
    """Write *config* as YAML to *stream*."""
    yaml = YAML()
    yaml.default_flow_style = False
    yaml.dump(config.to_dict(), stream)


def create_default_config() -> NavgraphConfig:
    """Create a configuration with default values (no environment overrides)."""
    return NavgraphConfig()
