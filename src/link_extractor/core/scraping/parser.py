"""HTML parsing helpers: pull JSON blobs assigned inside ``<script>`` tags.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence

from bs4 import BeautifulSoup

from link_extractor.core.scraping.json_navigator import to_json_object
from link_extractor.core.scraping.patterns import (
    PatternLike,
    match_group1_multiple_patterns,
)
from link_extractor.exceptions import RegexError


def iter_script_texts(html: str) -> Iterator[str]:
    """Yield the body of every inline ``<script>`` tag, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script"):
        if script.get("src"):
            continue
        text = script.string or script.get_text() or ""
        if text.strip():
            yield text


def extract_json_assignment(html: str, patterns: Sequence[PatternLike]) -> dict:
    """Find the first script where one of ``patterns`` captures a JSON object.

    Each script is tried against all patterns (first pattern first). If no
    script matches, the error from the first attempt is raised, as
    ``match_multiple_patterns`` does; if the page has no inline scripts the
    whole document is searched.
    """
    scripts: List[str] = list(iter_script_texts(html)) or [html]
    first_error = None
    for text in scripts:
        try:
            raw = match_group1_multiple_patterns(patterns, text)
        except RegexError as exc:
            if first_error is None:
                first_error = exc
            continue
        return to_json_object(raw)
    if first_error is None:
        raise RegexError("No script to search")
    raise first_error
