"""HTTP fetcher with retries and per-call localisation headers.

This is the downloader collaborator: it turns a URL into page text. The
link resolution code never calls it.
"""

from __future__ import annotations

from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from link_extractor.core.config import ExtractorConfig


class Fetcher:
    """Small HTTP client with sensible defaults for scraping.

    Usage:
        f = Fetcher()
        html = f.fetch_text(url, config=ExtractorConfig(...))
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ExtractorConfig()
        self.session = session or requests.Session()
        retry = Retry(
            total=self.config.retries,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset(["GET", "HEAD", "POST"]),
            backoff_factor=self.config.backoff_factor,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def _headers(
        self,
        config: ExtractorConfig,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, str]:
        base = {
            "User-Agent": config.user_agent,
            "Accept-Language": config.accept_language,
            "Cookie": config.consent_cookie,
        }
        if headers:
            base.update(headers)
        return base

    def get(
        self,
        url: str,
        config: Optional[ExtractorConfig] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        # config per call: the fetcher itself keeps no locale state
        config = config or self.config
        return self.session.get(
            url,
            headers=self._headers(config, headers),
            timeout=config.timeout,
            **kwargs,
        )

    def fetch_text(
        self,
        url: str,
        config: Optional[ExtractorConfig] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        resp = self.get(url, config=config, headers=headers)
        resp.raise_for_status()
        return resp.text
