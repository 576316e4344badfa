"""Config commands: manage service profiles."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from halforms.client.errors import error_handler
from halforms.config.manager import ConfigManager
from halforms.config.models import ServiceProfile
from halforms.output.formatter import output

app = typer.Typer(name="config", help="Manage service profiles.")
console = Console()


def _get_manager() -> ConfigManager:
    return ConfigManager()


def _parse_headers(pairs: list[str] | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition(":")
        if not sep or not key.strip():
            raise ValueError(f"Expected 'Name: value' header, got {pair!r}")
        headers[key.strip()] = value.strip()
    return headers


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    url: Annotated[str, typer.Option("--url", "-u", help="Service entry point URL")],
    header: Annotated[
        Optional[list[str]],
        typer.Option("--header", "-H", help="Extra header as 'Name: value' (repeatable)"),
    ] = None,
    timeout: Annotated[Optional[float], typer.Option("--timeout", help="Request timeout in seconds")] = None,
    no_verify_ssl: Annotated[bool, typer.Option("--no-verify-ssl", help="Disable SSL verification")] = False,
    set_default: Annotated[bool, typer.Option("--default", help="Set as default profile")] = False,
) -> None:
    """Add a service profile."""
    mgr = _get_manager()
    fields: dict = {"name": name, "url": url, "verify_ssl": not no_verify_ssl, "headers": _parse_headers(header)}
    if timeout is not None:
        fields["timeout"] = timeout
    mgr.add_profile(ServiceProfile(**fields))
    if set_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """List all configured profiles."""
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'halforms config add' to get started.[/]")
        return

    default = mgr.config.default_profile
    rows = [
        [name, p.url, p.timeout, "yes" if p.verify_ssl else "no", "*" if name == default else ""]
        for name, p in profiles.items()
    ]
    output(
        {"profiles": [p.model_dump() for p in profiles.values()]},
        fmt,
        columns=["Name", "URL", "Timeout", "Verify SSL", "Default"],
        rows=rows,
        title="Service Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """Show profile details."""
    profile = _get_manager().get_profile(name)
    if not profile:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)
    output(profile.model_dump(), fmt, kv=True, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default service profile."""
    if _get_manager().set_default(name):
        console.print(f"[green]Default profile set to '{name}'.[/]")
    else:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Remove a service profile."""
    mgr = _get_manager()
    if not mgr.get_profile(name):
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    if not force and not Confirm.ask(f"Remove profile '{name}'?"):
        console.print("Cancelled.")
        return

    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
