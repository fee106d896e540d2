"""Host dispatch table for YouTube stream URLs.

Each domain family reads the video reference from a different place. The
rules are checked in order, the first one whose host set contains the
URL's host wins, and its candidate is final: there is no fall-through to
later rules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple
from urllib.parse import SplitResult, urljoin

from link_extractor.core.scraping.normalizer import get_query_value
from link_extractor.services.youtube.parsing_helper import (
    HOOKTUBE_HOST,
    INVIDIOUS_URLS,
    Y2UBE_HOST,
    YOUTUBE_BASE_URL,
    YOUTUBE_NOCOOKIE_HOST,
    YOUTUBE_SHORT_HOST,
    YOUTUBE_URLS,
)

logger = logging.getLogger(__name__)

SUBPATHS = ("embed/", "live/", "shorts/", "watch/", "v/", "w/")


@dataclass(frozen=True)
class HostRule:
    """Where to look for the video reference on one family of hosts.

    Lookup order: the redirect page (``destination_path``), the query
    parameter when ``query_first``, the path prefixes, the query
    parameter, then the bare path when ``bare_path_fallback``.
    """

    name: str
    hosts: FrozenSet[str]
    path_prefixes: Tuple[str, ...] = ()
    query_param: Optional[str] = None
    query_first: bool = False
    bare_path_fallback: bool = False
    destination_path: Optional[str] = None
    destination_param: Optional[str] = None

    def matches(self, host: str) -> bool:
        return host.lower() in self.hosts

    def candidate(self, parts: SplitResult) -> Optional[str]:
        """Return the raw reference this rule finds in ``parts``, or None."""
        path = parts.path[1:] if parts.path.startswith("/") else parts.path

        if self.destination_path is not None and path == self.destination_path:
            # e.g. /attribution_link?u=/watch%3Fv%3D<id>%26feature%3Dshare
            destination = get_query_value(parts, self.destination_param or "")
            if destination is None:
                return None
            try:
                nested = urljoin(YOUTUBE_BASE_URL, destination)
                return get_query_value(nested, self.query_param or "v")
            except ValueError:
                # u= decoded to an unsplittable URL, e.g. "//[x"
                return None

        if self.query_first and self.query_param:
            value = get_query_value(parts, self.query_param)
            if value is not None:
                return value

        for prefix in self.path_prefixes:
            if path.startswith(prefix):
                return path[len(prefix) :]

        if self.query_param and not self.query_first:
            value = get_query_value(parts, self.query_param)
            if value is not None:
                return value

        if self.bare_path_fallback:
            return path
        return None


DISPATCH_TABLE: Tuple[HostRule, ...] = (
    HostRule(
        name="nocookie",
        hosts=frozenset({YOUTUBE_NOCOOKIE_HOST}),
        path_prefixes=("embed/",),
    ),
    # No bare-path fallback here: /feed/..., /results, /@handle would
    # otherwise be read as 11 character ids.
    HostRule(
        name="canonical",
        hosts=YOUTUBE_URLS,
        path_prefixes=SUBPATHS,
        query_param="v",
        destination_path="attribution_link",
        destination_param="u",
    ),
    HostRule(
        name="short_link",
        hosts=frozenset({YOUTUBE_SHORT_HOST, Y2UBE_HOST}),
        query_param="v",
        query_first=True,
        bare_path_fallback=True,
    ),
    HostRule(
        name="mirror",
        hosts=frozenset({HOOKTUBE_HOST}) | INVIDIOUS_URLS,
        path_prefixes=SUBPATHS,
        query_param="v",
        bare_path_fallback=True,
    ),
)

OWNED_HOSTS: FrozenSet[str] = frozenset().union(*(r.hosts for r in DISPATCH_TABLE))


def resolve_rule(host: str) -> Optional[HostRule]:
    for rule in DISPATCH_TABLE:
        if rule.matches(host):
            return rule
    return None


def apply_rule(rule: HostRule, parts: SplitResult) -> Optional[str]:
    candidate = rule.candidate(parts)
    logger.debug("Rule %s on %s -> %r", rule.name, parts.hostname, candidate)
    return candidate


def find_candidate(host: str, parts: SplitResult) -> Optional[str]:
    """Apply the first matching rule for ``host``; None when nothing fits."""
    rule = resolve_rule(host)
    if rule is None:
        return None
    return apply_rule(rule, parts)
