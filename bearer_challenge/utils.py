"""Validation of URI references, as used for the `error_uri` parameter."""

from __future__ import annotations

from typing import Iterator

from furl import furl  # type: ignore[import-untyped]


def uri_reference_errors(uri: str) -> Iterator[str]:
    """Iterate over the reasons why `uri` is not a valid URI reference.

    A URI reference may be absolute (`https://as.local/errors`) or relative (`/errors#expired`).
    Any text that `furl` can parse is accepted, including text with spaces or non-ASCII characters
    that is then read as a relative reference. Only text that `furl` rejects, like a non-numeric
    port or an unterminated IPv6 literal, is invalid.

    Args:
        uri: the candidate URI reference

    Yields:
        a description of each error, as str. Nothing is yielded for a valid URI reference.

    """
    try:
        furl(uri)
    except ValueError as exc:
        yield f"unparseable URI ({exc})"


def is_uri_reference(uri: str) -> bool:
    """Return `True` if `uri` is a valid absolute or relative URI."""
    return next(uri_reference_errors(uri), None) is None
