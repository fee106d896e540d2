"""
Flow de busca: monta a URL de pesquisa, baixa a página de resultados,
extrai ``ytInitialData`` e devolve os vídeos encontrados como DataFrame.
"""

from __future__ import annotations

import pandas as pd
from prefect import flow, get_run_logger

from link_extractor.core.config import SearchJobConfig, configure_logging
from link_extractor.core.scraping.prefect_tasks import (
    extract_initial_data_task,
    fetch_page_task,
)
from link_extractor.extractors.stream_items import (
    StreamItemsCollector,
    iter_video_renderers,
)
from link_extractor.services import get_service_by_name


@flow(name="Search Streams")
def search_flow(config_dict: dict) -> pd.DataFrame:
    logger = get_run_logger()

    try:
        config = SearchJobConfig(**config_dict)
    except Exception as e:
        logger.error("Configuração inválida: %s", e)
        raise

    configure_logging(config.extractor)
    service = get_service_by_name(config.service)
    handler = service.get_search_query_handler(
        config.query, config.content_filters, config.sort_filter
    )
    logger.info("Searching %s: %s", service.name, handler.url)

    page = fetch_page_task(handler.url, config.extractor)
    initial_data = extract_initial_data_task(page)

    collector = StreamItemsCollector(service.service_id)
    collector.commit_all(iter_video_renderers(initial_data))
    if collector.errors:
        logger.warning("%d item(s) could not be read", len(collector.errors))

    logger.info("Collected %d item(s)", len(collector.items))
    return collector.to_dataframe()


if __name__ == "__main__":
    payload = {
        "job_name": "search_demo",
        "query": "lofi hip hop",
        "content_filters": ["videos"],
    }
    print(search_flow(payload))
