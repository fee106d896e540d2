"""Resolve YouTube video URLs (and their mirrors) to the 11 character id."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from link_extractor.core.interfaces import LinkHandlerFactory
from link_extractor.core.scraping.normalizer import get_host, is_http
from link_extractor.exceptions import (
    AdDetectedError,
    IdentifierNotFoundError,
    MalformedUrlError,
    ParsingError,
)
from link_extractor.services.youtube.dispatch import OWNED_HOSTS, find_candidate
from link_extractor.services.youtube.parsing_helper import AD_HOSTS

logger = logging.getLogger(__name__)

YOUTUBE_VIDEO_ID_REGEX = re.compile(r"^([a-zA-Z0-9_-]{11})")

# Android intent schemes used by the official app.
DEEP_LINK_SCHEMES = ("vnd.youtube", "vnd.youtube.launch")

WATCH_URL = "https://www.youtube.com/watch?v="


def extract_id(candidate: Optional[str]) -> Optional[str]:
    """First 11 id characters of ``candidate``; anything after is dropped."""
    if candidate is None:
        return None
    match = YOUTUBE_VIDEO_ID_REGEX.match(candidate)
    return match.group(1) if match else None


def assert_is_id(candidate: Optional[str]) -> str:
    extracted = extract_id(candidate)
    if extracted is None:
        raise IdentifierNotFoundError(
            f"The given string is not a YouTube video ID: {candidate}"
        )
    return extracted


def _split_strict(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        # .port raises ValueError for non numeric / out of range ports
        parts.port
    except ValueError as exc:
        raise MalformedUrlError(url) from exc
    if not parts.scheme or not parts.hostname:
        raise MalformedUrlError(url)
    return parts


class YoutubeStreamLinkHandlerFactory(LinkHandlerFactory):
    """Stream resolver for youtube.com, youtu.be, the nocookie embed host,
    hooktube and the Invidious instances.

    get_id order: deep-link shortcut, strict parse, ownership (ad hosts are
    reported separately), then the host dispatch table and id validation.
    """

    def get_id(self, url: str) -> str:
        url_string = url

        scheme, sep, rest = url.partition(":")
        if sep and scheme.lower() in DEEP_LINK_SCHEMES:
            if rest.startswith("//"):
                extracted = extract_id(rest[2:])
                if extracted is not None:
                    return extracted
                url_string = "https:" + rest
            else:
                extracted = extract_id(rest)
                if extracted is not None:
                    return extracted
                url_string = "https://" + rest

        parts = _split_strict(url_string)
        host = get_host(parts)

        if not (is_http(parts) and host in OWNED_HOSTS):
            if host in AD_HOSTS:
                raise AdDetectedError(url_string)
            raise IdentifierNotFoundError(f"The URL is not a YouTube URL: {url_string}")

        candidate = find_candidate(host, parts)
        if candidate is None:
            raise IdentifierNotFoundError(f"Error: no suitable URL: {url_string}")
        return assert_is_id(candidate)

    def get_url(self, id: str, base_url: Optional[str] = None) -> str:
        return WATCH_URL + id

    def on_accept_url(self, url: str) -> bool:
        try:
            self.get_id(url)
        except AdDetectedError:
            raise
        except ParsingError as exc:
            logger.debug("Rejected %s: %s", url, exc)
            return False
        return True


stream_link_handler_factory = YoutubeStreamLinkHandlerFactory()
