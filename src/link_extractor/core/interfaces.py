from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from link_extractor.core.handlers import (
    LinkHandler,
    ListLinkHandler,
    SearchQueryHandler,
)
from link_extractor.core.scraping.normalizer import (
    follow_google_redirect_if_needed,
    get_base_url,
)
from link_extractor.exceptions import MalformedUrlError, UrlRejectedError

logger = logging.getLogger(__name__)


class LinkHandlerFactory(ABC):
    """
    Contrato base de resolução: URL -> id, id -> URL e teste de aceitação.

    Implementations hold no state, so one instance can be shared by every
    caller. Any method may raise ParsingError, or UnsupportedOperationError
    when a direction has no mapping for this resolver.
    """

    @abstractmethod
    def get_id(self, url: str) -> str:
        raise NotImplementedError()

    @abstractmethod
    def get_url(self, id: str, base_url: Optional[str] = None) -> str:
        raise NotImplementedError()

    @abstractmethod
    def on_accept_url(self, url: str) -> bool:
        raise NotImplementedError()

    def accept_url(self, url: str) -> bool:
        return self.on_accept_url(url)

    def from_url(self, url: str, base_url: Optional[str] = None) -> LinkHandler:
        """Build a LinkHandler from a URL.

        Called with only ``url``, Google search redirects are unwrapped and
        the base URL is derived before resolving. Callers passing
        ``base_url`` themselves must hand in an already unwrapped URL.
        """
        if not url:
            raise MalformedUrlError(url or "")
        if base_url is None:
            polished = follow_google_redirect_if_needed(url)
            return self._from_polished_url(polished, get_base_url(polished))
        return self._from_polished_url(url, base_url)

    def _from_polished_url(self, url: str, base_url: str) -> LinkHandler:
        if not self.accept_url(url):
            raise UrlRejectedError(url)
        id = self.get_id(url)
        logger.debug("Resolved %s -> %s", url, id)
        return LinkHandler(url, self.get_url(id, base_url), id)

    def from_id(self, id: str, base_url: Optional[str] = None) -> LinkHandler:
        url = self.get_url(id, base_url)
        return LinkHandler(url, url, id)


class ListQueryFactory(ABC):
    """Extension capability: build list URLs from caller-supplied queries.

    ``available_content_filter`` / ``available_sort_filter`` only describe
    what the service understands; ``from_query`` does not check filters
    against them.
    """

    available_content_filter: Tuple[str, ...] = ()
    available_sort_filter: Tuple[str, ...] = ()

    @abstractmethod
    def get_list_url(
        self,
        id: str,
        content_filters: Sequence[str],
        sort_filter: Optional[str],
        base_url: Optional[str] = None,
    ) -> str:
        raise NotImplementedError()

    def from_query(
        self,
        id: str,
        content_filters: Sequence[str] = (),
        sort_filter: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> ListLinkHandler:
        url = self.get_list_url(id, content_filters, sort_filter, base_url)
        return ListLinkHandler(url, url, id, tuple(content_filters), sort_filter)


class ListLinkHandlerFactory(ListQueryFactory, LinkHandlerFactory):
    """A resolver that also answers list queries.

    The plain ``get_url`` delegates to ``get_list_url`` with no filters, so
    a list resolver can stand wherever a LinkHandlerFactory is expected.
    """

    def get_url(self, id: str, base_url: Optional[str] = None) -> str:
        return self.get_list_url(id, [], "", base_url)

    def from_url(self, url: str, base_url: Optional[str] = None) -> ListLinkHandler:
        return ListLinkHandler.from_link_handler(super().from_url(url, base_url))

    def from_id(self, id: str, base_url: Optional[str] = None) -> ListLinkHandler:
        return ListLinkHandler.from_link_handler(super().from_id(id, base_url))


class SearchQueryHandlerFactory(ListLinkHandlerFactory):
    """List resolver whose id is the search string itself.

    Search resolvers never claim a URL and do not read ids out of URLs.
    """

    def get_search_string(self, url: str) -> str:
        return ""

    def get_id(self, url: str) -> str:
        return self.get_search_string(url)

    def on_accept_url(self, url: str) -> bool:
        return False

    def from_query(
        self,
        query: str,
        content_filters: Sequence[str] = (),
        sort_filter: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> SearchQueryHandler:
        return SearchQueryHandler.from_list_handler(
            super().from_query(query, content_filters, sort_filter, base_url)
        )
