"""HAL-FORMS HTTP client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from halforms.client.filters import Filter, FilterChain
from halforms.client.response import HalResponse
from halforms.config.constants import ACCEPTED_CONTENT_TYPES, DEFAULT_TIMEOUT
from halforms.config.models import ServiceProfile
from halforms.hal.resource import Resource
from halforms.utils.url import absolutize

logger = logging.getLogger(__name__)


def build_accept_header(content_types: tuple[str, ...] = ACCEPTED_CONTENT_TYPES) -> str:
    """List *content_types* by decreasing preference (q=1, q=0.9, ...)."""
    return ", ".join(
        f"{content_type};q={(10 - index) / 10:g}"
        for index, content_type in enumerate(content_types)
    )


class HalClient:
    """Synchronous client for HAL-FORMS capable backends.

    Every request goes through the filter chain before reaching the
    transport, which lets callers plug in credentials handling, logging,
    canned responses and the like.
    """

    def __init__(
        self,
        base_href: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_href = base_href
        self.filter_chain = FilterChain()
        if not verify:
            logger.warning("TLS certificate verification is disabled")
        self._client = httpx.Client(
            verify=verify,
            timeout=timeout,
            transport=transport,
            headers=dict(headers or {}),
        )

    @classmethod
    def from_profile(cls, profile: ServiceProfile) -> HalClient:
        return cls(
            profile.url,
            timeout=profile.timeout,
            verify=profile.verify_ssl,
            headers=profile.headers,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HalClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def append_filter(self, filter_: Filter) -> None:
        """Add a filter run after the ones already registered."""
        self.filter_chain.append_filter(filter_)

    def prepend_filter(self, filter_: Filter) -> None:
        """Add a filter run before the ones already registered."""
        self.filter_chain.prepend_filter(filter_)

    def build_request(
        self,
        target: str | httpx.Request | None = None,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Request:
        """Build the request ``fetch`` would send, Accept header included.

        A relative *target* is resolved against ``base_href``; no target
        means ``base_href`` itself. An ``httpx.Request`` is used as built:
        *method*, *headers* and the extra keyword arguments are ignored.
        """
        if isinstance(target, httpx.Request):
            if "accept" not in target.headers:
                target.headers["accept"] = build_accept_header()
            return target
        url = self.base_href if target is None else absolutize(target, self.base_href)
        caller_headers = httpx.Headers(headers or {})
        if "accept" not in caller_headers:
            caller_headers["accept"] = build_accept_header()
        return self._client.build_request(method, url, headers=caller_headers, **kwargs)

    def fetch(
        self,
        target: str | httpx.Request | None = None,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> HalResponse:
        """Send a request through the filter chain.

        Extra keyword arguments (``params``, ``content``, ``data``, ``files``,
        ``json``) are handed to httpx when building the request.
        """
        request = self.build_request(target, method=method, headers=headers, **kwargs)
        logger.debug("%s %s", request.method, request.url)
        response = self.filter_chain.process(self, request)
        return HalResponse(response, str(request.url), self)

    def fetch_hal(self, target: str | httpx.Request | None = None, **kwargs: Any) -> Resource:
        """Fetch *target* and parse it as a HAL-FORMS document."""
        return self.fetch(target, **kwargs).hal()

    def send(self, request: httpx.Request) -> httpx.Response:
        """Hand *request* over to the transport, following redirects."""
        return self._client.send(request, follow_redirects=True)
