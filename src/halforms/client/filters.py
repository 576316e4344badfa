"""Request/response filter chain run by ``HalClient``.

A filter receives ``FilterParams`` and returns the response. It may change
the request before calling ``params.next``, change or replace the response it
gets back, call ``next`` several times to replay the rest of the chain, or
never call it at all and answer on its own::

    def add_language(params: FilterParams) -> httpx.Response:
        params.request.headers["accept-language"] = "fr"
        return params.next(params.request)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol

import httpx

if TYPE_CHECKING:
    from halforms.client.hal_client import HalClient

NextFilter = Callable[[httpx.Request], httpx.Response]


@dataclass(frozen=True)
class FilterParams:
    """What a filter gets to work with."""

    client: HalClient
    request: httpx.Request
    next: NextFilter


class Filter(Protocol):
    def __call__(self, params: FilterParams) -> httpx.Response: ...


class FilterChain:
    """Ordered filters ending with the transport call.

    Filters must all be registered before the chain is first processed.
    """

    def __init__(self) -> None:
        self._filters: tuple[Filter, ...] = ()

    def __len__(self) -> int:
        return len(self._filters)

    def append_filter(self, filter_: Filter) -> None:
        """Add *filter_* at the end of the chain."""
        self._filters = (*self._filters, filter_)

    def prepend_filter(self, filter_: Filter) -> None:
        """Insert *filter_* at the beginning of the chain."""
        self._filters = (filter_, *self._filters)

    def process(self, client: HalClient, request: httpx.Request) -> httpx.Response:
        """Run *request* through every filter, then through ``client.send``."""
        return _run(self._filters, 0, client, request)


def _run(
    stages: tuple[Filter, ...],
    index: int,
    client: HalClient,
    request: httpx.Request,
) -> httpx.Response:
    if index == len(stages):
        return client.send(request)

    def next_(processed: httpx.Request) -> httpx.Response:
        return _run(stages, index + 1, client, processed)

    return stages[index](FilterParams(client=client, request=request, next=next_))
