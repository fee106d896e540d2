"""Turn ``videoRenderer`` objects from ``ytInitialData`` into stream items.

Each renderer gets its own StreamInfoItemExtractor. StreamItemsCollector
keeps the items that parsed, records the ones that did not, and hands the
result to pandas.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterator, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from link_extractor.core.interfaces import LinkHandlerFactory
from link_extractor.core.scraping.json_navigator import get_string, opt_value
from link_extractor.exceptions import AdDetectedError, ExtractionError, ParsingError
from link_extractor.services.youtube.parsing_helper import (
    get_text_from_object,
    get_url_from_navigation_endpoint,
    parse_duration_string,
)
from link_extractor.services.youtube.stream_link_handler import (
    stream_link_handler_factory,
)

logger = logging.getLogger(__name__)

_UPLOADER_KEYS = ("longBylineText", "ownerText", "shortBylineText")

# Renderers that only carry ads in search results.
_AD_RENDERERS = ("adSlotRenderer", "promotedSparklesWebRenderer", "searchPyvRenderer")


class StreamType(str, Enum):
    VIDEO_STREAM = "video_stream"
    LIVE_STREAM = "live_stream"


class StreamInfoItem(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    service_id: int
    url: str
    name: str
    duration: int
    uploader_name: str
    uploader_url: Optional[str] = None
    stream_type: StreamType = StreamType.VIDEO_STREAM
    view_count_text: Optional[str] = None


COLUMNS = list(StreamInfoItem.model_fields)


def iter_video_renderers(initial_data: dict) -> Iterator[dict]:
    """Yield every ``videoRenderer`` of a search results page, in order.

    Ad slots are yielded as they are; StreamInfoItemExtractor flags them.
    """
    sections = opt_value(
        initial_data,
        "contents.twoColumnSearchResultsRenderer.primaryContents"
        ".sectionListRenderer.contents",
        [],
    )
    for section in sections or []:
        if not isinstance(section, dict):
            continue
        for item in opt_value(section, "itemSectionRenderer.contents", []) or []:
            if not isinstance(item, dict):
                continue
            if isinstance(item.get("videoRenderer"), dict):
                yield item["videoRenderer"]
            elif any(key in item for key in _AD_RENDERERS):
                yield item


class StreamInfoItemExtractor:
    """Reads the fields of one ``videoRenderer``."""

    def __init__(
        self,
        renderer: dict,
        factory: LinkHandlerFactory = stream_link_handler_factory,
    ):
        self.renderer = renderer
        self.factory = factory
        self._stream_type: Optional[StreamType] = None

    def is_ad(self) -> bool:
        return any(key in self.renderer for key in _AD_RENDERERS)

    def get_stream_type(self) -> StreamType:
        if self._stream_type is not None:
            return self._stream_type

        self._stream_type = StreamType.VIDEO_STREAM
        for badge in self.renderer.get("badges") or []:
            if not isinstance(badge, dict):
                continue
            badge_renderer = badge.get("metadataBadgeRenderer") or {}
            if (
                badge_renderer.get("style") == "BADGE_STYLE_TYPE_LIVE_NOW"
                or badge_renderer.get("label") == "LIVE NOW"
            ):
                self._stream_type = StreamType.LIVE_STREAM
                return self._stream_type

        for overlay in self.renderer.get("thumbnailOverlays") or []:
            if not isinstance(overlay, dict):
                continue
            style = opt_value(overlay, "thumbnailOverlayTimeStatusRenderer.style", "")
            if str(style).upper() == "LIVE":
                self._stream_type = StreamType.LIVE_STREAM
                break
        return self._stream_type

    def get_url(self) -> str:
        try:
            return self.factory.get_url(get_string(self.renderer, "videoId"))
        except ExtractionError as exc:
            raise ParsingError("Could not get url") from exc

    def get_name(self) -> str:
        name = get_text_from_object(self.renderer.get("title"))
        if not name:
            raise ParsingError("Could not get name")
        return name

    def get_duration(self) -> int:
        if self.get_stream_type() == StreamType.LIVE_STREAM:
            return -1

        duration = get_text_from_object(self.renderer.get("lengthText"))
        if not duration:
            # playlists carry lengthSeconds instead
            duration = self.renderer.get("lengthSeconds")
        if not duration:
            for overlay in self.renderer.get("thumbnailOverlays") or []:
                if isinstance(overlay, dict) and "thumbnailOverlayTimeStatusRenderer" in overlay:
                    duration = get_text_from_object(
                        opt_value(overlay, "thumbnailOverlayTimeStatusRenderer.text")
                    )
                    break
        if not duration:
            if "upcomingEventData" in self.renderer:
                return -1
            raise ParsingError("Could not get duration")
        return parse_duration_string(str(duration))

    def get_uploader_name(self) -> str:
        for key in _UPLOADER_KEYS:
            name = get_text_from_object(self.renderer.get(key))
            if name:
                return name
        raise ParsingError("Could not get uploader name")

    def get_uploader_url(self) -> Optional[str]:
        for key in _UPLOADER_KEYS:
            runs = opt_value(self.renderer, f"{key}.runs", []) or []
            if not runs or not isinstance(runs[0], dict):
                continue
            url = get_url_from_navigation_endpoint(runs[0].get("navigationEndpoint"))
            if url:
                return url
        return None

    def get_view_count_text(self) -> Optional[str]:
        return get_text_from_object(self.renderer.get("viewCountText"))

    def extract(self, service_id: int = 0) -> StreamInfoItem:
        if self.is_ad():
            raise AdDetectedError(str(self.renderer.get("videoId", "")))
        return StreamInfoItem(
            service_id=service_id,
            url=self.get_url(),
            name=self.get_name(),
            duration=self.get_duration(),
            uploader_name=self.get_uploader_name(),
            uploader_url=self.get_uploader_url(),
            stream_type=self.get_stream_type(),
            view_count_text=self.get_view_count_text(),
        )


class StreamItemsCollector:
    """Collects items; a broken item never stops the rest of the page."""

    def __init__(self, service_id: int = 0):
        self.service_id = service_id
        self.items: List[StreamInfoItem] = []
        self.errors: List[ParsingError] = []

    def commit(self, extractor: Any) -> None:
        try:
            self.items.append(extractor.extract(self.service_id))
        except AdDetectedError:
            logger.debug("Skipping ad item")
        except ParsingError as exc:
            logger.warning("Could not extract stream item: %s", exc)
            self.errors.append(exc)

    def commit_all(self, renderers) -> "StreamItemsCollector":
        for renderer in renderers:
            self.commit(StreamInfoItemExtractor(renderer))
        return self

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([item.model_dump() for item in self.items], columns=COLUMNS)
