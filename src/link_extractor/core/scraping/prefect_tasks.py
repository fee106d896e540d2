"""Tarefas Prefect que usam os componentes de scraping.

Adapts the fetcher, the link resolvers and the ``ytInitialData`` parser to
Prefect's execution model: each task gets retries and logs through the
run logger.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from prefect import get_run_logger, task

from link_extractor.core.config import ExtractorConfig
from link_extractor.core.scraping.fetcher import Fetcher
from link_extractor.exceptions import ExtractionError
from link_extractor.services import get_service_by_name
from link_extractor.services.youtube.parsing_helper import get_initial_data


@task(name="fetch_page", retries=2, retry_delay_seconds=3)
def fetch_page_task(url: str, config: Optional[ExtractorConfig] = None) -> str:
    logger = get_run_logger()
    config = config or ExtractorConfig()
    logger.info("Fetching URL: %s (%s)", url, config.localization.localization_code)
    text = Fetcher(config).fetch_text(url, config=config)
    logger.info("Fetched %s (%d chars)", url, len(text))
    return text


@task(name="resolve_link", retries=0)
def resolve_link_task(url: str, service_name: str = "YouTube") -> Dict[str, Any]:
    """Resolve one URL; failures become a row with ``error`` set."""
    logger = get_run_logger()
    row: Dict[str, Any] = {
        "original_url": url,
        "url": None,
        "id": None,
        "accepted": False,
        "error": None,
    }
    service = get_service_by_name(service_name)
    try:
        handler = service.get_stream_link_handler(url)
    except ExtractionError as exc:
        logger.warning("Could not resolve %s: %s", url, exc)
        row["error"] = f"{type(exc).__name__}: {exc}"
        return row

    row.update(url=handler.url, id=handler.id, accepted=True)
    logger.info("Resolved %s -> %s", url, handler.id)
    return row


@task(name="extract_initial_data", retries=0)
def extract_initial_data_task(page_html: str) -> dict:
    logger = get_run_logger()
    data = get_initial_data(page_html)
    logger.info("ytInitialData found (%d top-level keys)", len(data))
    return data
