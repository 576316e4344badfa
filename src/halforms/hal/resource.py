"""HAL-FORMS resource: a node of the hypermedia graph."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from itertools import chain
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel

from halforms.client.errors import (
    AmbiguousNameError,
    MonovaluedEmbeddedError,
    MonovaluedLinkError,
    MultivaluedEmbeddedError,
    MultivaluedLinkError,
)
from halforms.hal.cardinality import Cardinal, Many, One
from halforms.hal.link import Link
from halforms.hal.template import Template

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


class Resource:
    """A resource as per the HAL-FORMS definition.

    Links and embedded resources keep the shape they had in the document: a
    relation declared as an array is only reachable through ``links()`` /
    ``embeddeds()``, a relation declared as a single object only through
    ``link()`` / ``embedded()`` (unless narrowed down by ``name``).
    """

    __slots__ = ("_rel", "_content", "_self_href", "_links", "_embedded", "_templates")

    def __init__(
        self,
        *,
        rel: str,
        self_href: str,
        content: Any = None,
        links: Mapping[str, Cardinal[Link]] | None = None,
        embedded: Mapping[str, Cardinal[Resource]] | None = None,
        templates: Mapping[str, Template] | None = None,
    ) -> None:
        self._rel = rel
        self._self_href = self_href
        self._content = content
        self._links = MappingProxyType(dict(links or {}))
        self._embedded = MappingProxyType(dict(embedded or {}))
        self._templates = MappingProxyType(dict(templates or {}))

    @property
    def rel(self) -> str:
        """Relation under which this resource was reached (``self`` for the root)."""
        return self._rel

    @property
    def content(self) -> Any:
        """Application payload, without ``_links``, ``_embedded`` and ``_templates``."""
        return self._content

    def self_href(self) -> str:
        """Absolute URL of this resource."""
        return self._self_href

    def content_as(self, model: type[M]) -> M:
        """Validate ``content`` into a pydantic *model*."""
        return model.model_validate(self._content)

    def link(self, rel: str, name: str | None = None) -> Link | None:
        """Return the link with relation *rel*.

        Without *name* the relation must have been declared as a single
        object. With *name*, at most one link of the relation may carry it.
        """
        value = self._links.get(rel)
        if value is None:
            return None
        if name is not None:
            return _single_named(rel, name, value.items(), _link_name)
        if isinstance(value, Many):
            raise MultivaluedLinkError(rel)
        return value.value

    def links(self, rel: str | None = None, name: str | None = None) -> list[Link] | None:
        """Return the links of an array relation, or every link when *rel* is omitted.

        Never returns an empty list: no match is ``None``.
        """
        if not self._links:
            return None
        if rel is None:
            return list(chain.from_iterable(v.items() for v in self._links.values())) or None
        value = self._links.get(rel)
        if value is None:
            return None
        if isinstance(value, One):
            raise MonovaluedLinkError(rel)
        return _filter_named(value.values, name, _link_name)

    def embedded(self, rel: str, name: str | None = None) -> Resource | None:
        """Return the embedded resource with relation *rel* (same rules as ``link``)."""
        value = self._embedded.get(rel)
        if value is None:
            return None
        if name is not None:
            return _single_named(rel, name, value.items(), _resource_name)
        if isinstance(value, Many):
            raise MultivaluedEmbeddedError(rel)
        return value.value

    def embeddeds(self, rel: str | None = None, name: str | None = None) -> list[Resource] | None:
        """Return embedded resources of an array relation, or all of them (same rules as ``links``)."""
        if not self._embedded:
            return None
        if rel is None:
            return list(chain.from_iterable(v.items() for v in self._embedded.values())) or None
        value = self._embedded.get(rel)
        if value is None:
            return None
        if isinstance(value, One):
            raise MonovaluedEmbeddedError(rel)
        return _filter_named(value.values, name, _resource_name)

    def template(self, key: str) -> Template | None:
        return self._templates.get(key)

    def templates(self) -> list[Template] | None:
        return list(self._templates.values()) or None

    def __repr__(self) -> str:
        return f"Resource(rel={self._rel!r}, self_href={self._self_href!r})"


def _link_name(link: Link) -> str | None:
    return link.name


def _resource_name(resource: Resource) -> str | None:
    # Embedded resources are named after their own self link
    self_link = resource._links.get("self")
    if isinstance(self_link, One):
        return self_link.value.name
    return None


def _filter_named(
    items: Iterable[T],
    name: str | None,
    get_name: Callable[[T], str | None],
) -> list[T] | None:
    if name is not None:
        items = [item for item in items if get_name(item) == name]
    return list(items) or None


def _single_named(
    rel: str,
    name: str,
    items: Iterable[T],
    get_name: Callable[[T], str | None],
) -> T | None:
    matches = [item for item in items if get_name(item) == name]
    if len(matches) > 1:
        raise AmbiguousNameError(rel, name, len(matches))
    return matches[0] if matches else None
