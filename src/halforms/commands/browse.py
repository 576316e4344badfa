"""Browsing commands: fetch documents, list links, follow links, invoke templates."""

from __future__ import annotations

import json
from typing import Annotated, Optional

import typer
from rich.console import Console

from halforms.client.errors import MonovaluedLinkError, error_handler
from halforms.client.response import HalResponse
from halforms.commands._common import (
    LINK_COLUMNS,
    FormatOpt,
    ProfileOpt,
    UrlOpt,
    ensure_success,
    link_rows,
    make_client,
    parse_variables,
    render_resource,
)
from halforms.config.constants import NO_BODY_STATUSES
from halforms.hal.link import Link
from halforms.hal.resource import Resource
from halforms.output.formatter import output

console = Console()

TargetArg = Annotated[
    Optional[str],
    typer.Argument(help="URL of the document, relative to the service URL"),
]


def _render_response(response: HalResponse, fmt: str) -> None:
    ensure_success(response)
    if response.status_code in NO_BODY_STATUSES:
        console.print("[green]No content.[/]")
        return
    render_resource(response.hal(), fmt)


def register(app: typer.Typer) -> None:
    """Attach the browsing commands to the root app."""
    app.command("get")(get)
    app.command("links")(links)
    app.command("follow")(follow)
    app.command("invoke")(invoke)


@error_handler
def get(
    target: TargetArg = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Fetch a document and show its content, links, embedded resources and templates."""
    with make_client(profile, url) as client:
        _render_response(client.fetch(target), fmt)


@error_handler
def links(
    target: TargetArg = None,
    rel: Annotated[Optional[str], typer.Option("--rel", "-r", help="Only links with this relation")] = None,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Only links with this name")] = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List the links of a document."""
    with make_client(profile, url) as client:
        resource = ensure_success(client.fetch(target)).hal()
    found = _select_links(resource, rel, name)
    if not found:
        console.print("[yellow]No matching links.[/]")
        return
    output(
        [link.model_dump(mode="json", exclude_none=True) for link in found],
        fmt,
        columns=LINK_COLUMNS,
        rows=link_rows(found),
        title="Links",
    )


def _select_links(resource: Resource, rel: str | None, name: str | None) -> list[Link]:
    if rel is None:
        return [link for link in resource.links() or [] if name is None or link.name == name]
    try:
        return resource.links(rel, name) or []
    except MonovaluedLinkError:
        link = resource.link(rel, name)
        return [link] if link is not None else []


@error_handler
def follow(
    target: Annotated[str, typer.Argument(help="URL of the document holding the link")],
    rel: Annotated[str, typer.Argument(help="Relation of the link to follow")],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Name of the link")] = None,
    var: Annotated[
        Optional[list[str]],
        typer.Option("--var", help="URI template variable as key=value (repeatable)"),
    ] = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Follow a link of a document and show the document it leads to."""
    variables = parse_variables(var)
    with make_client(profile, url) as client:
        resource = ensure_success(client.fetch(target)).hal()
        link = resource.link(rel, name)
        if link is None:
            console.print(f"[red]No link with rel '{rel}'.[/]")
            raise typer.Exit(1)
        _render_response(link.follow(variables), fmt)


@error_handler
def invoke(
    target: Annotated[str, typer.Argument(help="URL of the document holding the template")],
    key: Annotated[str, typer.Argument(help="Key of the template to invoke")],
    data: Annotated[Optional[str], typer.Option("--data", "-d", help="JSON payload")] = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Invoke a template of a document and show the response."""
    payload = json.loads(data) if data else None
    with make_client(profile, url) as client:
        resource = ensure_success(client.fetch(target)).hal()
        template = resource.template(key)
        if template is None:
            console.print(f"[red]No template '{key}'.[/]")
            raise typer.Exit(1)
        _render_response(template.invoke(payload), fmt)
