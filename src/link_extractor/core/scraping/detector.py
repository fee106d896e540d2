"""Detect what kind of content a URL points at.

Provides a small LinkType enum and `detect_link_type` helper.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Mapping

from link_extractor.core.scraping.normalizer import follow_google_redirect_if_needed

if TYPE_CHECKING:
    from link_extractor.core.interfaces import LinkHandlerFactory


# Tipos de conteúdo que um serviço sabe reconhecer.
class LinkType(str, Enum):
    NONE = "none"
    STREAM = "stream"
    CHANNEL = "channel"
    PLAYLIST = "playlist"


def detect_link_type(
    url: str, factories: Mapping[LinkType, LinkHandlerFactory]
) -> LinkType:
    """Ask each factory, in mapping order, whether it accepts ``url``.

    Google redirects are unwrapped first. AdDetectedError from a factory
    propagates.
    """
    polished = follow_google_redirect_if_needed(url)
    for link_type, factory in factories.items():
        if factory.accept_url(polished):
            return link_type
    return LinkType.NONE
