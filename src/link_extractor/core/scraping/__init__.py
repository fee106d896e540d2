"""Core scraping primitives exported for reuse across services and flows.

Fetcher, link type detection, URL helpers, pattern matching, the JSON
navigator and the script parser. Prefect task wrappers live in
``prefect_tasks`` and are imported from there.
"""

from .detector import LinkType, detect_link_type
from .fetcher import Fetcher
from .json_navigator import get_as, get_value, get_values, opt_value
from .normalizer import follow_google_redirect_if_needed, get_base_url, get_host
from .parser import extract_json_assignment, iter_script_texts
from .patterns import (
    match_group,
    match_group1,
    match_group1_multiple_patterns,
    match_multiple_patterns,
)

__all__ = [
    "Fetcher",
    "LinkType",
    "detect_link_type",
    "extract_json_assignment",
    "iter_script_texts",
    "follow_google_redirect_if_needed",
    "get_base_url",
    "get_host",
    "get_value",
    "get_as",
    "get_values",
    "opt_value",
    "match_group",
    "match_group1",
    "match_multiple_patterns",
    "match_group1_multiple_patterns",
]
