"""Regex helpers with deterministic multi-pattern fallback.

Patterns may be given as strings or compiled ``re.Pattern`` objects.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Sequence, Union

from link_extractor.core.scraping.normalizer import decode_url_utf8
from link_extractor.exceptions import RegexError

# Inputs longer than this are left out of error messages.
MAX_INPUT_IN_MESSAGE = 1024

PatternLike = Union[str, re.Pattern[str]]


def _compile(pattern: PatternLike) -> re.Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def _failure(pattern: re.Pattern[str], text: str) -> RegexError:
    if len(text) > MAX_INPUT_IN_MESSAGE:
        return RegexError(f'Failed to find pattern "{pattern.pattern}"')
    return RegexError(f'Failed to find pattern "{pattern.pattern}" inside of "{text}"')


def match_group(pattern: PatternLike, text: str, group: int) -> str:
    """Return capture ``group`` of the first match of ``pattern`` in ``text``.

    Raises RegexError when nothing matches or the group does not exist.
    A group that exists but did not take part in the match yields "".
    """
    compiled = _compile(pattern)
    match = compiled.search(text)
    if match is not None and 0 <= group <= compiled.groups:
        return match.group(group) or ""
    raise _failure(compiled, text)


def match_group1(pattern: PatternLike, text: str) -> str:
    return match_group(pattern, text, 1)


def match_multiple_patterns(
    patterns: Sequence[PatternLike], text: str
) -> re.Match[str]:
    """Try ``patterns`` in order and return the first match.

    If every pattern fails, the error built for the first pattern is raised,
    so the message does not depend on how many fallbacks were configured.
    """
    first_error = None
    for pattern in patterns:
        compiled = _compile(pattern)
        match = compiled.search(text)
        if match is not None:
            return match
        if first_error is None:
            first_error = _failure(compiled, text)

    if first_error is None:
        raise RegexError("Empty patterns array passed to match_multiple_patterns")
    raise first_error


def match_group1_multiple_patterns(patterns: Sequence[PatternLike], text: str) -> str:
    match = match_multiple_patterns(patterns, text)
    if match.re.groups < 1:
        raise _failure(match.re, text)
    return match.group(1) or ""


def is_match(pattern: PatternLike, text: str) -> bool:
    return _compile(pattern).search(text) is not None


def get_string_result_from_regex_array(
    text: str, patterns: Iterable[PatternLike], group: int = 0
) -> str:
    """Return ``group`` from the first pattern that matches and has that group."""
    for pattern in patterns:
        compiled = _compile(pattern)
        match = compiled.search(text)
        if match is not None and group <= compiled.groups:
            return match.group(group) or ""
    raise RegexError(f"No regex matched the input on group {group}")


def compat_parse_map(query: str) -> Dict[str, str]:
    """Parse ``a=1&b=2`` into a dict; the last duplicate key wins."""
    result: Dict[str, str] = {}
    for pair in query.split("&"):
        key, sep, value = pair.partition("=")
        if not sep:
            continue
        result[key] = decode_url_utf8(value)
    return result
