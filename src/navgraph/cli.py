"""navgraph CLI - typer application entry point."""

from __future__ import annotations

import atexit
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from rich.console import Console

from navgraph import __version__
from navgraph.config import ConfigFileError, dump_config, load_config
from navgraph.graph.errors import ConfigError
from navgraph.graph.samples import gondar_landmarks
from navgraph.graph.store import GraphStore
from navgraph.observability import close_file_logging, configure_logging, get_logger
from navgraph.shell import COMMANDS, PROMPT, GraphShell

if TYPE_CHECKING:
    from collections.abc import Callable

# Load environment variables (NAVGRAPH_*) from .env file
load_dotenv()

app = typer.Typer(
    name="navgraph",
    help="navgraph: weighted graph editing and path queries.",
    no_args_is_help=True,
)
console = Console()
log = get_logger(__name__)

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML config file (default: ./navgraph.yaml if present).",
        envvar="NAVGRAPH_CONFIG",
    ),
]
SampleOption = Annotated[
    bool,
    typer.Option("--sample", help="Preload the Gondar landmark sample graph."),
]


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log_dir: Annotated[
        Path | None,
        typer.Option("--log-dir", help="Also write JSONL debug logs to this directory."),
    ] = None,
) -> None:
    """navgraph: weighted graph editing and path queries."""
    configure_logging(verbosity=verbose, log_dir=log_dir)
    if log_dir is not None:
        atexit.register(close_file_logging)


def _is_interactive_tty() -> bool:
    """Check if running in an interactive terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def _line_reader() -> Callable[[], str]:
    """Return a function that reads one command line.

    A terminal gets a prompt_toolkit session with history and command-name
    completion; piped input is read through the rich console.
    """
    if not _is_interactive_tty():
        return lambda: console.input(PROMPT)

    completer = WordCompleter([*COMMANDS, "exit", "quit"], sentence=True)
    session: PromptSession[str] = PromptSession(completer=completer)
    return lambda: session.prompt(PROMPT)


def _build_shell(config_path: Path | None, sample: bool) -> GraphShell:
    try:
        config = load_config(config_path)
    except (ConfigFileError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    store = GraphStore.from_config(config)
    if sample:
        gondar_landmarks(store)
    log.info(
        "shell_started",
        vertex_type=config.vertex_type,
        update_policy=config.update_policy.value,
        vertices=store.vertex_count(),
    )
    return GraphShell(store, config)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"navgraph v{__version__}")


@app.command("config")
def show_config(config_path: ConfigOption = None) -> None:
    """Print the effective configuration as YAML."""
    try:
        config = load_config(config_path)
    except (ConfigFileError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    dump_config(config, sys.stdout)


@app.command()
def shell(config_path: ConfigOption = None, sample: SampleOption = False) -> None:
    """Start the interactive command shell."""
    graph_shell = _build_shell(config_path, sample)
    console.print("[bold]navgraph shell[/bold]. Type 'help' for commands, 'exit' to quit.")
    read_line = _line_reader()

    while True:
        try:
            line = read_line()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        result = graph_shell.execute(line)
        if result.output is not None:
            console.print(result.output)
        if result.exit:
            break


@app.command()
def run(
    script: Annotated[Path, typer.Argument(help="File with one command per line.")],
    config_path: ConfigOption = None,
    sample: SampleOption = False,
    keep_going: Annotated[
        bool,
        typer.Option("--keep-going", "-k", help="Continue after a failing command."),
    ] = False,
) -> None:
    """Run shell commands from a file."""
    if not script.exists():
        console.print(f"[red]Error:[/red] Script not found: {script}")
        raise typer.Exit(1)

    graph_shell = _build_shell(config_path, sample)
    failures = 0
    for lineno, line in enumerate(script.read_text(encoding="utf-8").splitlines(), start=1):
        result = graph_shell.execute(line)
        if result.output is not None:
            console.print(result.output)
        if result.exit:
            break
        if not result.ok:
            failures += 1
            log.warning("script_command_failed", script=str(script), line=lineno)
            if not keep_going:
                raise typer.Exit(1)

    if failures:
        raise typer.Exit(1)
