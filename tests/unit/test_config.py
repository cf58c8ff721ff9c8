"""Tests for configuration loading."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from navgraph.config import (
    CONFIG_FILENAME,
    ConfigFileError,
    LongestPathConfig,
    NavgraphConfig,
    create_default_config,
    dump_config,
    load_config,
)
from navgraph.graph.errors import ConfigError
from navgraph.graph.models import SearchBudget
from navgraph.graph.store import GraphStore, UpdatePolicy

if TYPE_CHECKING:
    from pathlib import Path


class TestNavgraphConfig:
    """Tests for NavgraphConfig."""

    def test_defaults(self) -> None:
        """Default config uses string vertices and REPLACE_ALL."""
        config = create_default_config()
        assert config.vertex_type == "str"
        assert config.update_policy is UpdatePolicy.REPLACE_ALL
        assert config.longest_path.to_budget() is None

    def test_from_dict(self) -> None:
        """All keys are parsed."""
        config = NavgraphConfig.from_dict(
            {
                "vertex_type": "int",
                "update_policy": "replace_first",
                "longest_path": {"max_depth": 4, "max_expansions": 1000},
            }
        )
        assert config.vertex_type == "int"
        assert config.update_policy is UpdatePolicy.REPLACE_FIRST
        assert config.longest_path.to_budget() == SearchBudget(max_depth=4, max_expansions=1000)

    def test_invalid_vertex_type(self) -> None:
        """Unknown vertex types raise ConfigError listing the options."""
        with pytest.raises(ConfigError, match="expected one of: str, int"):
            NavgraphConfig.from_dict({"vertex_type": "float"})

    def test_invalid_update_policy(self) -> None:
        """Unknown policies raise ConfigError."""
        with pytest.raises(ConfigError, match="update_policy"):
            NavgraphConfig.from_dict({"update_policy": "merge"})

    @pytest.mark.parametrize(
        "longest_path",
        [{"max_depth": -1}, {"max_expansions": 0}, {"max_depth": "deep"}, {"max_depth": True}],
    )
    def test_invalid_budget(self, longest_path: dict[str, object]) -> None:
        """Budget values must be integers in range."""
        with pytest.raises(ConfigError, match="longest_path"):
            NavgraphConfig.from_dict({"longest_path": longest_path})

    def test_longest_path_must_be_mapping(self) -> None:
        """A scalar longest_path section is rejected."""
        with pytest.raises(ConfigError):
            NavgraphConfig.from_dict({"longest_path": 5})

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """NAVGRAPH_* variables win over file values."""
        monkeypatch.setenv("NAVGRAPH_VERTEX_TYPE", "int")
        monkeypatch.setenv("NAVGRAPH_UPDATE_POLICY", "replace_first")
        config = NavgraphConfig.from_dict({"vertex_type": "str", "update_policy": "replace_all"})
        assert config.vertex_type == "int"
        assert config.update_policy is UpdatePolicy.REPLACE_FIRST

    def test_budget_from_longest_path_section(self) -> None:
        """Only a section with no limits at all yields no budget."""
        assert LongestPathConfig().to_budget() is None
        assert LongestPathConfig(max_depth=0).to_budget() == SearchBudget(max_depth=0)
        assert LongestPathConfig(max_expansions=7).to_budget() == SearchBudget(max_expansions=7)

    def test_convert_vertex(self) -> None:
        """Tokens are converted according to vertex_type."""
        assert NavgraphConfig(vertex_type="int").convert_vertex("42") == 42
        assert NavgraphConfig().convert_vertex("42") == "42"
        with pytest.raises(ValueError):
            NavgraphConfig(vertex_type="int").convert_vertex("A")

    def test_store_from_config(self) -> None:
        """GraphStore.from_config applies policy and budget."""
        config = NavgraphConfig(
            update_policy=UpdatePolicy.REPLACE_FIRST,
            longest_path=LongestPathConfig(max_depth=2),
        )
        store = GraphStore.from_config(config)
        assert store.update_policy is UpdatePolicy.REPLACE_FIRST
        assert store.longest_path_budget == SearchBudget(max_depth=2)

    def test_store_uses_config_budget(self) -> None:
        """The configured budget applies when longest_path gets none."""
        config = NavgraphConfig(longest_path=LongestPathConfig(max_depth=1))
        store = GraphStore.from_config(config)
        store.add_edge("A", "B", 1)
        store.add_edge("B", "C", 1)
        result = store.longest_path("A")
        assert result.length == 1
        assert not result.exhaustive
        assert store.longest_path("A", budget=SearchBudget()).length == 2


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_yaml(self, tmp_path: Path) -> None:
        """Values are read from a YAML file."""
        path = tmp_path / "custom.yaml"
        path.write_text(
            "vertex_type: int\nupdate_policy: replace_first\nlongest_path:\n  max_depth: 3\n"
        )
        config = load_config(path)
        assert config.vertex_type == "int"
        assert config.update_policy is UpdatePolicy.REPLACE_FIRST
        assert config.longest_path.max_depth == 3
        assert config.longest_path.max_expansions is None

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """An explicitly requested file must exist."""
        with pytest.raises(ConfigFileError, match="File not found"):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """An empty file is the same as no settings."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == NavgraphConfig()

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        """The top level must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigFileError, match="mapping"):
            load_config(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        """YAML syntax errors are wrapped in ConfigFileError."""
        path = tmp_path / "bad.yaml"
        path.write_text("vertex_type: [unclosed\n")
        with pytest.raises(ConfigFileError):
            load_config(path)

    def test_default_file_in_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """navgraph.yaml in the working directory is picked up."""
        (tmp_path / CONFIG_FILENAME).write_text("vertex_type: int\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().vertex_type == "int"

    def test_no_file_gives_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without any file the defaults apply."""
        monkeypatch.chdir(tmp_path)
        assert load_config() == NavgraphConfig()


def test_dump_config_round_trips(tmp_path: Path) -> None:
    """Dumped YAML loads back to the same config."""
    config = NavgraphConfig(
        vertex_type="int",
        update_policy=UpdatePolicy.REPLACE_FIRST,
        longest_path=LongestPathConfig(max_expansions=50),
    )
    buffer = io.StringIO()
    dump_config(config, buffer)
    assert "update_policy: replace_first" in buffer.getvalue()

    path = tmp_path / "dumped.yaml"
    path.write_text(buffer.getvalue())
    assert load_config(path) == config
