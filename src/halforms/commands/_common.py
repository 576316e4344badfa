"""Shared helpers for CLI commands: client factory, options, resource rendering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any

import typer
from rich.console import Console

from halforms.client.errors import HalRequestError
from halforms.client.hal_client import HalClient
from halforms.client.response import HalResponse
from halforms.config.manager import ConfigManager
from halforms.hal.link import Link
from halforms.hal.resource import Resource
from halforms.output.formatter import output
from halforms.output.tables import make_table

_console = Console()

# Shared Typer option type aliases
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Service profile"),
]
UrlOpt = Annotated[
    str | None,
    typer.Option("--url", help="Service URL override"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (table, json, yaml)"),
]


def make_client(profile: str | None, url: str | None) -> HalClient:
    """Create a HalClient from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    return HalClient.from_profile(mgr.resolve_profile(profile_name=profile, url=url))


def ensure_success(response: HalResponse) -> HalResponse:
    """Raise HalRequestError for non-2xx responses, with the body as detail."""
    if response.is_success:
        return response
    detail = response.text.strip()
    raise HalRequestError(
        f"{response.base} returned {response.status_code} {response.reason_phrase}"
        + (f": {detail}" if detail else "")
    )


def parse_variables(pairs: list[str] | None) -> dict[str, str]:
    """Parse ``key=value`` pairs given on the command line."""
    variables: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        variables[key] = value
    return variables


LINK_COLUMNS = ["Rel", "Name", "Href", "URL", "Title"]


def link_rows(links: Iterable[Link]) -> list[list[Any]]:
    # Templated hrefs need variables before they can be resolved
    return [
        [link.rel, link.name, link.href, "" if link.templated else link.expand(), link.title]
        for link in links
    ]


def resource_to_dict(resource: Resource) -> dict[str, Any]:
    """Plain data view of a resource, for JSON and YAML output."""
    data: dict[str, Any] = {"rel": resource.rel, "self": resource.self_href()}
    if resource.content is not None:
        data["content"] = resource.content
    links = resource.links()
    if links:
        data["links"] = [link.model_dump(mode="json", exclude_none=True) for link in links]
    embedded = resource.embeddeds()
    if embedded:
        data["embedded"] = [resource_to_dict(item) for item in embedded]
    templates = resource.templates()
    if templates:
        data["templates"] = [t.model_dump(mode="json", exclude_none=True) for t in templates]
    return data


def render_resource(resource: Resource, fmt: str) -> None:
    """Print a resource: content, links, embedded resources and templates."""
    if fmt != "table":
        output(resource_to_dict(resource), fmt)
        return

    if isinstance(resource.content, dict) and resource.content:
        output(resource.content, fmt, kv=True, title=resource.self_href())
    elif resource.content is not None:
        _console.print(resource.content)

    rows = link_rows(resource.links() or [])
    if rows:
        _console.print(make_table("Links", LINK_COLUMNS, rows))

    embedded = resource.embeddeds()
    if embedded:
        _console.print(make_table(
            "Embedded",
            ["Rel", "Self", "Fields"],
            [[item.rel, item.self_href(), _field_names(item.content)] for item in embedded],
        ))

    templates = resource.templates()
    if templates:
        rows = [
            [t.key, t.method, t.resolved_url, t.content_type, ", ".join(p.name for p in t.properties)]
            for t in templates
        ]
        _console.print(make_table(
            "Templates", ["Key", "Method", "URL", "Content-Type", "Properties"], rows,
        ))


def _field_names(content: Any) -> str:
    if isinstance(content, dict):
        return ", ".join(content)
    return "" if content is None else str(content)
