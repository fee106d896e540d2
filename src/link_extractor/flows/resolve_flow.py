"""
Flow de resolução de links.

Recebe um dicionário (JSON) com uma lista de URLs, valida o contrato com
pydantic e resolve cada URL para o link canônico do serviço. Uma URL que
falha não derruba o job: vira uma linha com ``error`` preenchido.
"""

from __future__ import annotations

import pandas as pd
from prefect import flow, get_run_logger

from link_extractor.core.config import ResolveJobConfig, configure_logging
from link_extractor.core.scraping.prefect_tasks import resolve_link_task

RESULT_COLUMNS = ["original_url", "url", "id", "accepted", "error"]


@flow(name="Resolve Links")
def resolve_links_flow(config_dict: dict) -> pd.DataFrame:
    logger = get_run_logger()

    try:
        config = ResolveJobConfig(**config_dict)
    except Exception as e:
        logger.error("Configuração inválida: %s", e)
        raise

    configure_logging(config.extractor)
    logger.info("Job %s: %d URL(s) for %s", config.job_name, len(config.urls), config.service)

    rows = [resolve_link_task(url, config.service) for url in config.urls]
    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)

    logger.info("Resolved %d of %d", int(df["accepted"].sum()), len(df))
    return df


if __name__ == "__main__":
    payload = {
        "job_name": "resolve_demo",
        "urls": [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ?t=42",
            "https://example.com/not-a-video",
        ],
    }
    print(resolve_links_flow(payload))
