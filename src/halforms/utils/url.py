"""URL helpers."""

from __future__ import annotations

import re
from urllib.parse import urljoin

# Stand-in origin used to resolve against bases that are not absolute URIs.
SYNTHETIC_ORIGIN = "https://halforms.invalid"

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)


def is_absolute(url: str | None) -> bool:
    """Return True if *url* starts with a URI scheme."""
    return url is not None and _SCHEME_RE.match(url) is not None


def absolutize(url: str, base: str | None = None) -> str:
    """Resolve *url* against *base* following RFC 3986 reference resolution.

    When *base* is missing or relative, resolution still happens against a
    synthetic origin which is stripped from the result, so the outcome is a
    normalized path (``absolutize("test", "/hello/") == "/hello/test"``).
    """
    if not is_absolute(base):
        base = urljoin(f"{SYNTHETIC_ORIGIN}/", base or "")
    return urljoin(base, url).replace(SYNTHETIC_ORIGIN, "")
