"""O fetcher é testado com uma sessão falsa: nenhum acesso à rede."""

import pytest
import requests

from link_extractor.core.config import ExtractorConfig, Localization
from link_extractor.core.scraping.fetcher import Fetcher


class FakeResponse:
    def __init__(self, text="<html></html>", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None):
        self.response = response or FakeResponse()
        self.calls = []
        self.mounted = {}

    def mount(self, prefix, adapter):
        self.mounted[prefix] = adapter

    def get(self, url, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        return self.response


def test_fetcher_mounts_retry_adapter():
    session = FakeSession()
    Fetcher(ExtractorConfig(retries=5), session=session)
    assert set(session.mounted) == {"https://", "http://"}
    retry = session.mounted["https://"].max_retries
    assert retry.total == 5
    assert 429 in retry.status_forcelist


def test_headers_come_from_call_config():
    session = FakeSession()
    fetcher = Fetcher(session=session)
    cfg = ExtractorConfig(
        localization=Localization(language_code="pt", country_code="BR"),
        consent_accepted=True,
        timeout=7,
    )

    fetcher.get("https://www.youtube.com/results?search_query=x", config=cfg)
    call = session.calls[-1]
    assert call["headers"]["Accept-Language"] == "pt-BR, pt;q=0.9"
    assert call["headers"]["Cookie"] == "SOCS=CAISAiAD"
    assert call["timeout"] == 7

    # a later call without config goes back to the fetcher's own default
    fetcher.get("https://www.youtube.com/")
    assert session.calls[-1]["headers"]["Accept-Language"] == "en-GB, en;q=0.9"


def test_extra_headers_override():
    session = FakeSession()
    Fetcher(session=session).get("https://a.com", headers={"User-Agent": "test-agent"})
    assert session.calls[-1]["headers"]["User-Agent"] == "test-agent"


def test_fetch_text():
    session = FakeSession(FakeResponse(text="hello"))
    assert Fetcher(session=session).fetch_text("https://a.com") == "hello"


def test_fetch_text_raises_for_status():
    session = FakeSession(FakeResponse(status_code=503))
    with pytest.raises(requests.HTTPError):
        Fetcher(session=session).fetch_text("https://a.com")
