"""Registry of the streaming services this package can resolve links for.

Services are keyed by their numeric id; lookups for unknown keys raise
ExtractionError, like an unregistered extractor would.
"""

from __future__ import annotations

from typing import Dict, List

from link_extractor.core.scraping.normalizer import follow_google_redirect_if_needed
from link_extractor.exceptions import ExtractionError

from .base_service import MediaCapability, StreamingService
from .youtube.service import YoutubeService

YOUTUBE = YoutubeService(0)

_REGISTRY: Dict[int, StreamingService] = {
    YOUTUBE.service_id: YOUTUBE,
}


def all_services() -> List[StreamingService]:
    return list(_REGISTRY.values())


def get_service(service_id: int) -> StreamingService:
    service = _REGISTRY.get(service_id)
    if service is None:
        raise ExtractionError(f"There's no service with the id = \"{service_id}\"")
    return service


def get_service_by_name(name: str) -> StreamingService:
    for service in _REGISTRY.values():
        if service.name.lower() == name.strip().lower():
            return service
    raise ExtractionError(f"There's no service with the name = \"{name}\"")


def get_service_by_url(url: str) -> StreamingService:
    """First service whose stream resolver accepts ``url``.

    AdDetectedError raised by a resolver is not caught.
    """
    polished = follow_google_redirect_if_needed(url)
    for service in _REGISTRY.values():
        if service.stream_lh_factory.accept_url(polished):
            return service
    raise ExtractionError(f"No service can handle the url = \"{url}\"")


__all__ = [
    "YOUTUBE",
    "MediaCapability",
    "StreamingService",
    "all_services",
    "get_service",
    "get_service_by_name",
    "get_service_by_url",
]
