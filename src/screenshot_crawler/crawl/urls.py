"""URL helpers shared by the crawl engine, link extractor and screenshot writer."""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import quote, urlparse

DEFAULT_PORTS = {"http": 80, "https": 443}
# Characters a browser leaves unescaped in a URL path.
PATH_SAFE_CHARS = "!$%&'()*+,/:;=@[]^|~"


def encode_path(path: str) -> str:
    """Percent-encode ``path`` the way a browser serializes it."""

    return quote(path, safe=PATH_SAFE_CHARS)


def normalize(url: str) -> str:
    """Drop the fragment component (``#...``) by truncation."""

    head, _sep, _fragment = url.partition("#")
    return head


def location_of(url: str) -> str:
    """Return ``scheme://host/path`` for ``url``.

    Query and fragment are discarded, the default port is omitted and the path
    is percent-encoded, so ``/my page`` and ``/my%20page`` share one location.
    When the URL cannot be parsed the input is returned unchanged, so malformed
    URLs are deduplicated on their raw text only.
    """

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        port = parsed.port
    except ValueError:
        return url

    if not parsed.scheme or not hostname:
        return url

    host = f"[{hostname}]" if ":" in hostname else hostname
    if port is not None and DEFAULT_PORTS.get(parsed.scheme) != port:
        host = f"{host}:{port}"
    path = encode_path(parsed.path) or "/"
    return f"{parsed.scheme}://{host}{path}"


def hostname_of(url: str) -> Optional[str]:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    return hostname or None


def is_same_domain(url: str, base_origin: str) -> bool:
    """Exact hostname match; subdomains count as different domains."""

    hostname = hostname_of(url)
    if hostname is None:
        return False
    return hostname == hostname_of(base_origin)


def has_excluded_extension(url: str, extensions: Iterable[str]) -> bool:
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        return False
    return any(path.endswith(extension) for extension in extensions)


def origin_of(url: str) -> str:
    """Return ``scheme://netloc`` for a start URL."""

    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"
