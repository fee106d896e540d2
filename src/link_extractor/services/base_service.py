"""Base class for streaming services.

A service bundles its identity with the resolvers it offers. Only the
stream resolver is required.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from link_extractor.core.config import (
    DEFAULT_CONTENT_COUNTRY,
    DEFAULT_LOCALIZATION,
    ContentCountry,
    Localization,
)
from link_extractor.core.handlers import LinkHandler, SearchQueryHandler
from link_extractor.core.interfaces import LinkHandlerFactory, SearchQueryHandlerFactory
from link_extractor.core.scraping.detector import LinkType, detect_link_type
from link_extractor.exceptions import UnsupportedOperationError


class MediaCapability(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
    LIVE = "live"
    COMMENTS = "comments"


class StreamingService:
    """Identity plus capabilities of one streaming site.

    Subclasses set ``stream_lh_factory`` and, when the site has a search
    page, ``search_qh_factory``.
    """

    name: str = ""
    base_url: str = ""
    capabilities: Tuple[MediaCapability, ...] = ()
    supported_localizations: Tuple[Localization, ...] = (DEFAULT_LOCALIZATION,)
    supported_countries: Tuple[ContentCountry, ...] = (DEFAULT_CONTENT_COUNTRY,)

    stream_lh_factory: LinkHandlerFactory
    search_qh_factory: Optional[SearchQueryHandlerFactory] = None

    def __init__(self, service_id: int):
        self.service_id = service_id

    def __repr__(self) -> str:
        return f"{self.service_id}:{self.name}"

    # Links ------------------------------------------------------------

    def link_factories(self) -> Dict[LinkType, LinkHandlerFactory]:
        return {LinkType.STREAM: self.stream_lh_factory}

    def get_link_type_by_url(self, url: str) -> LinkType:
        return detect_link_type(url, self.link_factories())

    def get_stream_link_handler(self, url: str) -> LinkHandler:
        return self.stream_lh_factory.from_url(url)

    def get_search_query_handler(
        self,
        query: str,
        content_filters: Sequence[str] = (),
        sort_filter: Optional[str] = None,
    ) -> SearchQueryHandler:
        if self.search_qh_factory is None:
            raise UnsupportedOperationError(f"Service {self.name} has no search")
        return self.search_qh_factory.from_query(query, content_filters, sort_filter)

    # Localisation -----------------------------------------------------

    def pick_localization(self, preferred: Optional[Localization]) -> Localization:
        """Return ``preferred`` when supported.

        Falls back to a supported locale in the same language, then to the
        default locale.
        """
        if preferred is None:
            return DEFAULT_LOCALIZATION
        if preferred in self.supported_localizations:
            return preferred
        for supported in self.supported_localizations:
            if supported.language_code == preferred.language_code:
                return supported
        return DEFAULT_LOCALIZATION

    def pick_content_country(self, preferred: Optional[ContentCountry]) -> ContentCountry:
        if preferred is not None and preferred in self.supported_countries:
            return preferred
        return DEFAULT_CONTENT_COUNTRY
