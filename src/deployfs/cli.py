"""CLI commands using Typer."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from deployfs.context import AppContext

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from deployfs import __version__
from deployfs.context import create_context
from deployfs.ctx import Context, ContextError
from deployfs.resource import ResourceError, parse_configs, save_as_configs

app = typer.Typer(
    name="deployfs",
    help="Prepare Kubernetes configs through a substitutable filesystem service",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"deployfs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Enable debug logging")] = False,
) -> None:
    """Prepare Kubernetes configs through a substitutable filesystem service."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


def _show_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}")


@app.command("prepare")
def prepare(
    configs: Annotated[str, typer.Option("--filename", "-f", help="Config file or directory")],
    output: Annotated[str, typer.Option("--output", "-o", help="Output directory")],
    recursive: Annotated[
        bool, typer.Option("--recursive", "-R", help="Descend into sub-directories")
    ] = False,
    _context=None,
) -> None:
    """Parse configs and save each object to its own file."""
    app_context: AppContext = _context or create_context()
    ctx = Context.background()

    try:
        objs = parse_configs(ctx, configs, app_context.oss, recursive=recursive)
        written = save_as_configs(ctx, objs, output, app_context.oss)
    except (ResourceError, ContextError) as e:
        _show_error(str(e))
        raise typer.Exit(1) from e

    for path in written:
        console.print(f"[green]✓[/green] {path}")
    console.print(f"Wrote {len(written)} config(s) to {output}")


@app.command("ls")
def list_dir(
    path: Annotated[str, typer.Argument(help="Directory to list")],
    _context=None,
) -> None:
    """List a directory through the filesystem service."""
    app_context: AppContext = _context or create_context()
    ctx = Context.background()

    try:
        entries = app_context.oss.read_dir(ctx, path)
    except (OSError, ContextError) as e:
        _show_error(f"cannot list {path}: {e}")
        raise typer.Exit(1) from e

    for entry in entries:
        console.print(entry.name + os.sep if entry.is_dir() else entry.name, markup=False)
