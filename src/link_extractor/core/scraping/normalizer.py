"""URL normalizer utilities.

Helpers to canonicalize raw URLs before they reach a resolver: strip the
mobile/www subdomains, unwrap Google search redirects, derive the
``scheme://host`` base URL and read decoded query values.
"""

from __future__ import annotations

import re
from typing import Optional, Union
from urllib.parse import SplitResult, parse_qsl, quote_plus, unquote_plus, urlsplit

from link_extractor.exceptions import MalformedUrlError

HTTP = "http://"
HTTPS = "https://"

DEFAULT_PORTS = {"http": 80, "https": 443}

_M_RE = re.compile(r"^(https?)?://m\.", re.IGNORECASE)
_WWW_RE = re.compile(r"^(https?)?://www\.", re.IGNORECASE)

# Google wraps result links as /url?url=<target> (older pages use q=).
_GOOGLE_REDIRECT_PARAMS = ("url", "q")

UrlLike = Union[str, SplitResult]


def encode_url_utf8(raw: str) -> str:
    return quote_plus(raw, encoding="utf-8")


def decode_url_utf8(raw: str) -> str:
    return unquote_plus(raw, encoding="utf-8")


def remove_utf8_bom(text: str) -> str:
    return text.strip("\ufeff")


def replace_http_with_https(url: Optional[str]) -> Optional[str]:
    if url is not None and url.startswith(HTTP):
        return HTTPS + url[len(HTTP) :]
    return url


def remove_m_and_www_from_url(url: str) -> str:
    """Drop a leading ``m.`` and then a leading ``www.`` subdomain."""
    url = _M_RE.sub(lambda m: f"{m.group(1) or ''}://", url)
    return _WWW_RE.sub(lambda m: f"{m.group(1) or ''}://", url)


def string_to_url(raw: str) -> SplitResult:
    """Split ``raw``; a string without a scheme is read as ``https://``.

    Raises MalformedUrlError when the netloc cannot be split (e.g. an
    unclosed ``[``).
    """
    try:
        parts = urlsplit(raw)
        if not parts.scheme or not parts.netloc:
            parts = urlsplit(HTTPS + raw)
    except ValueError as exc:
        raise MalformedUrlError(raw) from exc
    return parts


def _as_parts(url: UrlLike) -> SplitResult:
    return url if isinstance(url, SplitResult) else urlsplit(url)


def get_host(url: UrlLike) -> str:
    try:
        return (_as_parts(url).hostname or "").lower()
    except ValueError:
        return ""


def get_query_value(url: UrlLike, name: str) -> Optional[str]:
    """Return the first decoded value of query parameter ``name`` or None."""
    query = _as_parts(url).query
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key == name:
            return value
    return None


def is_http(url: UrlLike) -> bool:
    """True for http(s) URLs that use the default port of their protocol."""
    parts = _as_parts(url)
    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        return False
    try:
        port = parts.port
    except ValueError:
        return False
    return port is None or port == DEFAULT_PORTS[scheme]


def get_base_url(url: str) -> str:
    """Return ``scheme://host`` for ``url``."""
    parts = string_to_url(url)
    return f"{parts.scheme}://{get_host(parts)}"


def follow_google_redirect_if_needed(url: str) -> str:
    """Unwrap ``https://www.google.<tld>/url?url=<target>`` links.

    Anything that is not a Google redirect (or cannot be parsed) is
    returned unchanged.
    """
    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
    except ValueError:
        return url

    if "google" not in host or parts.path != "/url":
        return url

    for key in _GOOGLE_REDIRECT_PARAMS:
        target = get_query_value(parts, key)
        if target and target.startswith("http"):
            return target
    return url
