"""Immutable values describing a resolved content reference."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from link_extractor.core.scraping.normalizer import get_base_url


@dataclass(frozen=True)
class LinkHandler:
    """Original URL, canonical URL and identifier of one content item."""

    original_url: str
    url: str
    id: str

    @property
    def base_url(self) -> str:
        return get_base_url(self.url)


@dataclass(frozen=True)
class ListLinkHandler(LinkHandler):
    """LinkHandler plus the content filters and sort filter of a list query.

    ``content_filters`` keeps the caller's order, duplicates included.
    """

    content_filters: Tuple[str, ...] = field(default_factory=tuple)
    sort_filter: Optional[str] = None

    def __post_init__(self) -> None:
        # accept any iterable but store an immutable tuple
        object.__setattr__(self, "content_filters", tuple(self.content_filters))

    @classmethod
    def from_link_handler(
        cls,
        handler: LinkHandler,
        content_filters: Iterable[str] = (),
        sort_filter: Optional[str] = "",
    ) -> "ListLinkHandler":
        return cls(
            handler.original_url,
            handler.url,
            handler.id,
            tuple(content_filters),
            sort_filter,
        )


@dataclass(frozen=True)
class SearchQueryHandler(ListLinkHandler):
    """List handler whose id is the raw search string."""

    @property
    def search_string(self) -> str:
        return self.id

    @classmethod
    def from_list_handler(cls, handler: ListLinkHandler) -> "SearchQueryHandler":
        return cls(
            handler.original_url,
            handler.url,
            handler.id,
            handler.content_filters,
            handler.sort_filter,
        )
