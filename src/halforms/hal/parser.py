"""Builds a ``Resource`` graph out of a decoded HAL-FORMS document.

Relative URLs are resolved the following way:

* the ``self`` link of a resource is relative to the URL the resource was
  reached from (the request URL for the root, the parent's self URL for an
  embedded resource);
* every other link, embedded resource and template of a resource is relative
  to that resource's own self URL.

The base is threaded through the recursion as an argument, so parsing keeps
no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from halforms.hal.cardinality import Cardinal, Many, One
from halforms.hal.link import Link
from halforms.hal.resource import Resource
from halforms.hal.template import Property, Template
from halforms.utils.url import absolutize

if TYPE_CHECKING:
    from halforms.client.hal_client import HalClient

logger = logging.getLogger(__name__)

LINKS = "_links"
EMBEDDED = "_embedded"
TEMPLATES = "_templates"
SELF = "self"


def parse_hal(base: str, document: Any, client: HalClient | None = None) -> Resource:
    """Parse *document* fetched from *base* into the root ``Resource``.

    *client* becomes the default client used by ``Link.follow`` and
    ``Template.invoke``. The document itself is left untouched.
    """
    return _parse_resource(base, SELF, document, client)


def empty_resource(base: str) -> Resource:
    """Root resource of a response without a body."""
    return Resource(rel=SELF, self_href=base)


def _parse_resource(base: str, rel: str, body: Any, client: HalClient | None) -> Resource:
    if not isinstance(body, Mapping):
        return Resource(rel=rel, self_href=base, content=body)

    content = dict(body)
    raw_links = _as_mapping(content.pop(LINKS, None), LINKS)
    raw_embedded = _as_mapping(content.pop(EMBEDDED, None), EMBEDDED)
    raw_templates = _as_mapping(content.pop(TEMPLATES, None), TEMPLATES)

    self_href = base
    raw_self = raw_links.get(SELF)
    if isinstance(raw_self, Mapping) and isinstance(raw_self.get("href"), str):
        self_href = absolutize(raw_self["href"], base)

    links = _parse_links(base, self_href, raw_links, client)
    return Resource(
        rel=rel,
        self_href=self_href,
        content=content,
        links=links,
        embedded=_parse_embedded(self_href, raw_embedded, client),
        templates=_parse_templates(self_href, links, raw_templates, client),
    )


def _as_mapping(value: Any, field: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        logger.warning("Ignoring %s since it is not an object", field)
        return {}
    return value


def _parse_links(
    base: str,
    self_href: str,
    raw_links: Mapping[str, Any],
    client: HalClient | None,
) -> dict[str, Cardinal[Link]]:
    result: dict[str, Cardinal[Link]] = {}
    for rel, raw in raw_links.items():
        effective_base = base if rel == SELF else self_href
        if isinstance(raw, list):
            converted = (_convert_link(rel, effective_base, item, client) for item in raw)
            result[rel] = Many(tuple(link for link in converted if link is not None))
            continue
        link = _convert_link(rel, effective_base, raw, client)
        if link is not None:
            result[rel] = One(link)
    return result


def _convert_link(rel: str, base: str, raw: Any, client: HalClient | None) -> Link | None:
    if not isinstance(raw, Mapping) or not raw.get("href"):
        logger.warning("Ignoring link with rel %s since it has no href", rel)
        return None
    fields = {k: v for k, v in raw.items() if v is not None}
    fields.update(rel=rel, base=base)
    try:
        return Link.model_validate(fields, context={"client": client})
    except ValidationError as exc:
        logger.warning("Ignoring malformed link with rel %s: %s", rel, exc)
        return None


def _parse_embedded(
    base: str,
    raw_embedded: Mapping[str, Any],
    client: HalClient | None,
) -> dict[str, Cardinal[Resource]]:
    result: dict[str, Cardinal[Resource]] = {}
    for rel, body in raw_embedded.items():
        if isinstance(body, list):
            result[rel] = Many(tuple(_parse_resource(base, rel, item, client) for item in body))
        else:
            result[rel] = One(_parse_resource(base, rel, body, client))
    return result


def _parse_templates(
    self_href: str,
    links: Mapping[str, Cardinal[Link]],
    raw_templates: Mapping[str, Any],
    client: HalClient | None,
) -> dict[str, Template]:
    result: dict[str, Template] = {}
    for key, raw in raw_templates.items():
        if raw is None:
            continue
        template = _convert_template(key, self_href, links, raw, client)
        if template is not None:
            result[key] = template
    return result


def _resolve_target(self_href: str, links: Mapping[str, Cardinal[Link]], target: Any) -> str:
    # target may either name one of the links or be a URI
    if not isinstance(target, str):
        return self_href
    link = links.get(target)
    if link is not None:
        return absolutize(link.items()[0].href, self_href) if link.items() else self_href
    return absolutize(target, self_href)


def _convert_template(
    key: str,
    self_href: str,
    links: Mapping[str, Cardinal[Link]],
    raw: Any,
    client: HalClient | None,
) -> Template | None:
    if not isinstance(raw, Mapping):
        logger.warning("Ignoring template %s since it is not an object", key)
        return None
    fields = {k: v for k, v in raw.items() if v is not None and k != "properties"}
    fields.update(
        rel=key,
        resolved_url=_resolve_target(self_href, links, raw.get("target")),
        properties=_parse_properties(key, raw.get("properties")),
    )
    try:
        return Template.model_validate(fields, context={"client": client})
    except ValidationError as exc:
        logger.warning("Ignoring malformed template %s: %s", key, exc)
        return None


def _parse_properties(key: str, raw: Any) -> tuple[Property, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        logger.warning("Ignoring properties of template %s since they are not an array", key)
        return ()
    converted = (_convert_property(key, item) for item in raw)
    return tuple(prop for prop in converted if prop is not None)


def _convert_property(key: str, raw: Any) -> Property | None:
    if not isinstance(raw, Mapping) or not raw.get("name"):
        logger.warning("Ignoring property of template %s since it has no name", key)
        return None
    fields = {k: v for k, v in raw.items() if v is not None or k == "value"}
    try:
        return Property.model_validate(fields)
    except ValidationError as exc:
        logger.warning("Ignoring malformed property of template %s: %s", key, exc)
        return None
