"""Response returned by ``HalClient.fetch``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from halforms.config.constants import NO_BODY_STATUSES
from halforms.hal.parser import empty_resource, parse_hal
from halforms.hal.resource import Resource

if TYPE_CHECKING:
    from halforms.client.hal_client import HalClient


class HalResponse:
    """An ``httpx.Response`` that can parse itself as a HAL-FORMS document.

    Everything a plain response offers stays available (directly for the
    common readers, through ``wrapped`` for the rest), so non-HAL answers
    such as errors or binary downloads are handled as usual.
    """

    def __init__(self, wrapped: httpx.Response, base: str, client: HalClient) -> None:
        self.wrapped = wrapped
        self.base = base
        self.client = client

    @property
    def status_code(self) -> int:
        return self.wrapped.status_code

    @property
    def reason_phrase(self) -> str:
        return self.wrapped.reason_phrase

    @property
    def headers(self) -> httpx.Headers:
        return self.wrapped.headers

    @property
    def url(self) -> httpx.URL:
        return self.wrapped.url

    @property
    def is_success(self) -> bool:
        return self.wrapped.is_success

    @property
    def content(self) -> bytes:
        return self.wrapped.content

    @property
    def text(self) -> str:
        return self.wrapped.text

    def read(self) -> bytes:
        return self.wrapped.read()

    def json(self, **kwargs: Any) -> Any:
        return self.wrapped.json(**kwargs)

    def raise_for_status(self) -> HalResponse:
        self.wrapped.raise_for_status()
        return self

    def hal(self) -> Resource:
        """Parse the body as a HAL-FORMS document.

        Responses that never carry a body (204, 205, 304) give an empty
        resource. Raises ``json.JSONDecodeError`` if the body is not JSON.
        """
        if self.status_code in NO_BODY_STATUSES:
            return empty_resource(self.base)
        return parse_hal(self.base, self.json(), self.client)

    def __repr__(self) -> str:
        return f"<HalResponse [{self.status_code}] {self.base}>"
