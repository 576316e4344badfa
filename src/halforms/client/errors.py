"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
import json
from typing import Any, Callable, TypeVar

import httpx
from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class HalFormsError(Exception):
    """Base exception for halforms."""

    exit_code: int = 1


class HalRequestError(HalFormsError):
    """The request could not be performed or returned an error status."""

    exit_code = 2


class CardinalityError(HalFormsError):
    """A relation was accessed with the wrong single/array assumption."""

    exit_code = 4
    kind = "Link"
    shape = "multivalued"

    def __init__(self, rel: str) -> None:
        self.rel = rel
        super().__init__(f"{self.kind} {rel} is {self.shape}")


class MultivaluedLinkError(CardinalityError):
    """``link()`` was called on a relation declared as an array."""


class MonovaluedLinkError(CardinalityError):
    """``links()`` was called on a relation declared as a single object."""

    shape = "monovalued"


class MultivaluedEmbeddedError(CardinalityError):
    """``embedded()`` was called on a relation declared as an array."""

    kind = "Embedded"


class MonovaluedEmbeddedError(CardinalityError):
    """``embeddeds()`` was called on a relation declared as a single object."""

    kind = "Embedded"
    shape = "monovalued"


class AmbiguousNameError(HalFormsError):
    """More than one entry matches a (rel, name) lookup."""

    exit_code = 4

    def __init__(self, rel: str, name: str, count: int) -> None:
        self.rel = rel
        self.name = name
        self.count = count
        super().__init__(f"{count} entries of {rel} are named {name!r}")


class MissingClientError(HalFormsError):
    """No client is available to follow a link or invoke a template."""

    exit_code = 5


class ConfigurationError(HalFormsError):
    """No usable service configuration."""

    exit_code = 6


def error_handler(func: F) -> F:
    """Decorator that turns known failures into user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HalFormsError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except httpx.HTTPError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(HalRequestError.exit_code)
        except json.JSONDecodeError as exc:
            err_console.print(f"[bold red]Error:[/] Response is not a JSON document: {exc}")
            raise SystemExit(1)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
