"""Root Typer app: global options and command registration."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.logging import RichHandler

from halforms import __version__
from halforms.client.errors import err_console
from halforms.commands import browse, config_cmd

app = typer.Typer(
    name="halforms",
    help="Browse HAL and HAL-FORMS hypermedia APIs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"halforms {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and parsing details."),
) -> None:
    """HAL-FORMS browser: fetch documents, follow links, invoke templates."""
    configure_logging(verbose)


browse.register(app)
app.add_typer(config_cmd.app, name="config")


def main() -> None:
    app()
