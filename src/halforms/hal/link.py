"""HAL link model."""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator
from uritemplate import URITemplate

from halforms.client.errors import MissingClientError
from halforms.utils.url import absolutize

if TYPE_CHECKING:
    from halforms.client.hal_client import HalClient
    from halforms.client.response import HalResponse

logger = logging.getLogger(__name__)

UriVariables = Mapping[str, Union[str, int, float, Sequence[Union[str, int, float]]]]


def truthy_flag(value: Any) -> bool:
    """HAL flags are false unless literally ``true`` or ``"true"``."""
    return value is True or value == "true"


def bound_client(ref: Any, client: HalClient | None, what: str) -> HalClient:
    """Pick *client* or, failing that, the client that produced the document."""
    if client is None and ref is not None:
        client = ref()
    if client is None:
        raise MissingClientError(f"No client available for {what}")
    return client


class Link(BaseModel):
    """Link as per the HAL specification.

    ``href`` is kept exactly as declared (possibly relative or templated);
    ``base`` is the URL it is resolved against when followed.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    href: str
    rel: str
    base: str
    templated: bool = False
    type: str | None = None
    deprecation: str | None = None
    name: str | None = None
    profile: str | None = None
    title: str | None = None
    hreflang: str | None = None

    _uri_template: Any = PrivateAttr(default=None)
    _client_ref: Any = PrivateAttr(default=None)

    @field_validator("templated", mode="before")
    @classmethod
    def coerce_templated(cls, v: Any) -> bool:
        return truthy_flag(v)

    def model_post_init(self, context: Any) -> None:
        self._uri_template = URITemplate(self.href)
        client = context.get("client") if isinstance(context, dict) else None
        if client is not None:
            self._client_ref = weakref.ref(client)

    def expand(self, variables: UriVariables | None = None) -> str:
        """Return the absolute URL this link points to."""
        if self.templated:
            target = self._uri_template.expand(dict(variables or {}))
        else:
            target = self.href
        return absolutize(target, self.base)

    def follow(
        self,
        variables: UriVariables | None = None,
        client: HalClient | None = None,
    ) -> HalResponse:
        """Fetch the target of this link.

        *client* defaults to the client that fetched the enclosing document.
        """
        if self.deprecation is not None:
            logger.warning(
                "Following deprecated link with rel %s, more information at %s",
                self.rel,
                self.deprecation,
            )
        target = self.expand(variables)
        return bound_client(self._client_ref, client, f"link {self.rel}").fetch(target)
