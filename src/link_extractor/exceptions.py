"""Typed errors raised while resolving links and reading page data."""

from __future__ import annotations

from typing import Any, Optional


class ExtractionError(Exception):
    """Base exception for link_extractor."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ParsingError(ExtractionError):
    """Input could be read but not understood."""

    pass


class MalformedUrlError(ParsingError, ValueError):
    """The input is not a parseable URL."""

    def __init__(self, url: str, context: Optional[dict[str, Any]] = None):
        super().__init__(f"The given URL is not valid: {url}", context)
        self.url = url


class UrlRejectedError(ParsingError):
    """The URL parses, but the resolver does not accept it."""

    def __init__(self, url: str, context: Optional[dict[str, Any]] = None):
        super().__init__(f"URL not accepted: {url}", context)
        self.url = url


class AdDetectedError(ParsingError):
    """The host is a known ad server.

    Kept apart from the other parsing errors: `on_accept_url` re-raises it
    instead of answering False.
    """

    def __init__(self, url: str, context: Optional[dict[str, Any]] = None):
        super().__init__(f"Error: found ad: {url}", context)
        self.url = url


class IdentifierNotFoundError(ParsingError):
    """No dispatch rule produced a valid identifier."""

    pass


class RegexError(ParsingError):
    """None of the supplied patterns matched."""

    pass


class PathNotFoundError(ParsingError):
    """A dot-path key is missing from a parsed tree."""

    def __init__(self, path: str, context: Optional[dict[str, Any]] = None):
        super().__init__(f"Unable to get {path}", context)
        self.path = path


class TypeMismatchError(ParsingError, TypeError):
    """A value in a parsed tree has an unexpected type."""

    def __init__(
        self,
        path: str,
        expected: str,
        actual: str,
        context: Optional[dict[str, Any]] = None,
    ):
        message = (
            f"Wrong data type at path '{path}' - expected {expected}, got {actual}"
        )
        super().__init__(message, context)
        self.path = path
        self.expected = expected
        self.actual = actual


class ContentNotAvailableError(ParsingError):
    """The page was fetched but the content it points at is gone."""

    pass


class UnsupportedOperationError(ExtractionError, NotImplementedError):
    """A resolver variant has no mapping for the requested direction."""

    pass


__all__ = [
    "ExtractionError",
    "ParsingError",
    "MalformedUrlError",
    "UrlRejectedError",
    "AdDetectedError",
    "IdentifierNotFoundError",
    "RegexError",
    "PathNotFoundError",
    "TypeMismatchError",
    "ContentNotAvailableError",
    "UnsupportedOperationError",
]
