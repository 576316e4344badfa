"""Client for HAL and HAL-FORMS hypermedia APIs."""

from halforms.client.errors import (
    AmbiguousNameError,
    CardinalityError,
    HalFormsError,
    MissingClientError,
    MonovaluedEmbeddedError,
    MonovaluedLinkError,
    MultivaluedEmbeddedError,
    MultivaluedLinkError,
)
from halforms.client.filters import Filter, FilterChain, FilterParams, NextFilter
from halforms.client.hal_client import HalClient
from halforms.client.response import HalResponse
from halforms.hal import Link, Property, Resource, Template, parse_hal
from halforms.utils.url import absolutize

__version__ = "0.1.0"

__all__ = [
    "AmbiguousNameError",
    "CardinalityError",
    "Filter",
    "FilterChain",
    "FilterParams",
    "HalClient",
    "HalFormsError",
    "HalResponse",
    "Link",
    "MissingClientError",
    "MonovaluedEmbeddedError",
    "MonovaluedLinkError",
    "MultivaluedEmbeddedError",
    "MultivaluedLinkError",
    "NextFilter",
    "Property",
    "Resource",
    "Template",
    "absolutize",
    "parse_hal",
]
