"""
Command-line interface for bun-why.
"""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.text import Text

from bun_why import __version__
from bun_why.config import (
    get_lockfile_path,
    is_verbose_enabled,
    set_lockfile_path,
    set_project_root,
    set_verbose,
)
from bun_why.formatter import iter_report_lines, why_to_dict
from bun_why.lockfile import Lockfile, LockfileError, load_lockfile
from bun_why.specs import InvalidSpecError
from bun_why.why import Why, explain

PROG_NAME = "bun-why"

# --- Typer App ---
app = typer.Typer(add_completion=False)
console = Console(highlight=False)
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("bun_why")
    logger.handlers = [RichHandler(console=err_console, show_path=False)]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


def render_report(result: list[Why], lockfile: Lockfile) -> Text:
    """Build the report as rich Text with location lines dimmed."""
    text = Text()
    for index, line in enumerate(iter_report_lines(result, lockfile)):
        if index:
            text.append("\n")
        text.append(line.text, style="dim" if line.is_path else None)
    return text


@app.command()
def main(
    specs: list[str] | None = typer.Argument(
        None,
        help="Package names, lockfile locations or name@range specs (e.g. esbuild, semver@6, foo/bar).",
    ),
    lockfile: Path | None = typer.Option(
        None,
        "--lockfile",
        "-l",
        help="Path to bun.lock (default: bun.lock in the project root).",
    ),
    cwd: Path | None = typer.Option(
        None,
        "--cwd",
        help="Project root used for configuration and relative paths (default: current directory).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the dependents trees as JSON.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging. If not specified, uses config file default.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    Explain why packages are installed.

    Example:
        bun-why esbuild
        bun-why semver@6
        bun-why node_modules/foo/node_modules/bar
    """
    if cwd is not None and not cwd.is_dir():
        console.print(f"[red]Directory not found: {escape(str(cwd))}[/red]")
        raise typer.Exit(code=1)
    set_project_root(cwd.resolve() if cwd is not None else None)
    set_lockfile_path(lockfile)
    set_verbose(verbose)

    try:
        _configure_logging(is_verbose_enabled())
        lockfile_path = get_lockfile_path()
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    if not specs:
        err_console.print(f"Usage: {PROG_NAME} <package-spec>")
        raise typer.Exit(code=1)

    if not lockfile_path.exists():
        console.print(
            f"[red]Lockfile not found: {escape(str(lockfile_path))}[/red]"
        )
        raise typer.Exit(code=1)

    try:
        model = load_lockfile(lockfile_path)
        result = explain(specs, lockfile=model)
    except (LockfileError, InvalidSpecError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    if as_json:
        typer.echo(json.dumps([why_to_dict(why) for why in result], indent=2))
        return

    if not result:
        console.print(
            f"[yellow]No installed packages match: {escape(' '.join(specs))}[/yellow]"
        )
        return

    console.print(render_report(result, model), soft_wrap=True)


if __name__ == "__main__":
    app()
