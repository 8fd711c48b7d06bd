"""
Canonicalizes free-text user input into an absolute http(s) URL.
"""

from __future__ import annotations

import re
from urllib.parse import SplitResult, urlsplit, urlunsplit

from .exceptions import InvalidURL

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

# Characters a host may not contain (IPv6 literals are checked separately).
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#%/:<>?@[\\]^|")


def _split(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        # Accessing .port validates it; urlsplit is lazy about ports.
        parts.port
    except ValueError as e:
        raise InvalidURL(url, str(e)) from e
    return parts


def _validate_host(url: str, parts: SplitResult) -> None:
    hostname = parts.hostname
    if not hostname:
        raise InvalidURL(url, "missing host")

    host_port = parts.netloc.rpartition("@")[2]
    if host_port.startswith("["):
        # IPv6 literal; urlsplit has already checked the brackets
        return
    if any(ch in _FORBIDDEN_HOST_CHARS for ch in hostname):
        raise InvalidURL(url, "forbidden character in host")
    if host_port.count(":") > 1:
        raise InvalidURL(url, "malformed port")


def normalize(value: str) -> str:
    """Normalize user input into an absolute URL with a root path.

    Inputs without an ``http://`` or ``https://`` prefix get ``https://``.
    When the parsed path is empty, ``/`` is inserted right after the
    authority, so ``example.com`` becomes ``https://example.com/``.

    Raises:
        InvalidURL: if the value cannot be parsed as a URL.
    """
    url = value.strip()
    if not _SCHEME_RE.match(url):
        url = "https://" + url

    parts = _split(url)
    _validate_host(url, parts)

    if parts.path == "":
        authority_end = len(parts.scheme) + len("://") + len(parts.netloc)
        url = url[:authority_end] + "/" + url[authority_end:]
    return url


def origin(url: str) -> str:
    """Return ``scheme://host[:port]`` for ``url``, omitting default ports."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is None or (scheme, port) in {("http", 80), ("https", 443)}:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def canonicalize(url: str) -> str:
    """Lowercase scheme and host of an http(s) URL and drop its default port.

    Other URLs, and URLs whose authority cannot be parsed, are returned
    unchanged. Userinfo, path, query and fragment are kept as written.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return url
    scheme = parts.scheme.lower()
    if scheme not in ("http", "https") or not parts.hostname:
        return url

    userinfo, at, _ = parts.netloc.rpartition("@")
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    netloc = f"{userinfo}{at}{host}"
    if port is not None and (scheme, port) not in {("http", 80), ("https", 443)}:
        netloc = f"{netloc}:{port}"
    return urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))
