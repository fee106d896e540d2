"""Testes dos flows Prefect; a busca usa uma página falsa no lugar da rede."""

import json

import pandas as pd
import pytest

from link_extractor.flows.resolve_flow import RESULT_COLUMNS, resolve_links_flow
from link_extractor.flows.search_flow import search_flow


def test_resolve_links_flow_returns_one_row_per_url():
    cfg = {
        "job_name": "test_job",
        "urls": [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://example.com/nope",
        ],
    }
    df = resolve_links_flow(cfg)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == RESULT_COLUMNS
    assert len(df) == 3
    assert df["accepted"].tolist() == [True, True, False]
    assert df.loc[0, "id"] == "dQw4w9WgXcQ"
    assert df.loc[2, "error"].startswith("UrlRejectedError")


def test_resolve_links_flow_keeps_going_after_malformed_url():
    cfg = {
        "job_name": "test_job",
        "urls": [
            "https://youtu.be/dQw4w9WgXcQ",
            "http://[youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/attribution_link?u=%2F%2F%5Bx",
        ],
    }
    df = resolve_links_flow(cfg)
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 3
    assert df["accepted"].tolist() == [True, False, False]
    assert df.loc[1, "error"].startswith("MalformedUrlError")
    assert df.loc[2, "error"].startswith("UrlRejectedError")


def test_resolve_links_flow_rejects_bad_config():
    with pytest.raises(Exception):
        resolve_links_flow({"job_name": "has space", "urls": ["https://youtu.be/x"]})


def test_search_flow_collects_items(monkeypatch):
    initial_data = {
        "contents": {
            "twoColumnSearchResultsRenderer": {
                "primaryContents": {
                    "sectionListRenderer": {
                        "contents": [
                            {
                                "itemSectionRenderer": {
                                    "contents": [
                                        {
                                            "videoRenderer": {
                                                "videoId": "dQw4w9WgXcQ",
                                                "title": {"runs": [{"text": "Song"}]},
                                                "lengthText": {"simpleText": "3:33"},
                                                "ownerText": {"runs": [{"text": "Rick"}]},
                                            }
                                        },
                                        {"videoRenderer": {"videoId": "broken"}},
                                    ]
                                }
                            }
                        ]
                    }
                }
            }
        }
    }
    page = "<script>var ytInitialData = " + json.dumps(initial_data) + ";</script>"
    fetched = []

    def fake_fetch(url, config=None):
        fetched.append(url)
        return page

    monkeypatch.setattr("link_extractor.flows.search_flow.fetch_page_task", fake_fetch)

    df = search_flow({"job_name": "busca", "query": "rick astley", "content_filters": ["videos"]})
    assert fetched == [
        "https://www.youtube.com/results?search_query=rick+astley&sp=EgIQAfABAQ%253D%253D"
    ]
    assert len(df) == 1
    assert df.loc[0, "name"] == "Song"
    assert df.loc[0, "uploader_name"] == "Rick"
    assert df.loc[0, "duration"] == 213
