"""Parsers for the auth-param list of a challenge, and for the space-delimited `scope` value.

Both parsers consume their whole input, and reject duplicates using an ASCII case-insensitive
comparison.

"""

from __future__ import annotations

from typing import Callable, Iterable

import pyparsing as pp
from requests.structures import CaseInsensitiveDict

from .enums import ChallengeErrorKind
from .grammar import OWS, QUOTED_STRING, SCOPE_TOKEN, TOKEN, ParseResult, parse_with, rule

# auth-param = token BWS "=" BWS ( token / quoted-string )
AUTH_PARAM = rule(pp.Group(TOKEN + OWS + pp.Suppress("=") + OWS + (TOKEN | QUOTED_STRING)), "auth-param")

AUTH_PARAM_LIST = rule(
    pp.Opt(pp.DelimitedList(AUTH_PARAM, delim=pp.Suppress(OWS + pp.Literal(",") + OWS))) + pp.StringEnd(),
    "auth-param-list",
)

SCOPE_LIST = rule(
    pp.Opt(pp.DelimitedList(SCOPE_TOKEN, delim=pp.Suppress(pp.White(" ")))) + pp.StringEnd(),
    "scope-list",
)


def find_duplicate(items: Iterable[str], normalize: Callable[[str], str] = str.lower) -> str | None:
    """Return the first item that is equal to a previous one, or `None` if there are no duplicates.

    Args:
        items: the items to check
        normalize: the comparison strategy; items are equal when their normalized forms are

    """
    seen: set[str] = set()
    for item in items:
        normalized = normalize(item)
        if normalized in seen:
            return item
        seen.add(normalized)
    return None


def parse_auth_params(text: str) -> ParseResult[CaseInsensitiveDict[str]]:
    """Parse a comma-separated list of auth-params into a case-insensitive mapping.

    An empty `text` produces an empty mapping. Values keep their exact case, and quoted-string
    values are returned with their quotes removed and escapes resolved.

    Args:
        text: a challenge-parameter string, such as `realm="example", error="invalid_token"`

    Returns:
        a `ParseResult`, successful if `text` is a valid list without duplicate keys

    """
    result = parse_with(AUTH_PARAM_LIST, text)
    if not result.success:
        return result  # type: ignore[return-value]
    pairs = [(key, value) for key, value in result.value]  # type: ignore[union-attr]
    duplicate = find_duplicate(key for key, _ in pairs)
    if duplicate is not None:
        return ParseResult.failure(
            f"duplicate auth-param '{duplicate}'",
            fragment=duplicate,
            kind=ChallengeErrorKind.DUPLICATE_PARAMETER,
        )
    return ParseResult.ok(CaseInsensitiveDict(pairs))


def parse_scope(text: str) -> ParseResult[tuple[str, ...]]:
    """Parse a list of scope tokens, separated by one or more spaces."""
    result = parse_with(SCOPE_LIST, text)
    if not result.success:
        return result  # type: ignore[return-value]
    scope = tuple(result.value)  # type: ignore[arg-type]
    duplicate = find_duplicate(scope)
    if duplicate is not None:
        return ParseResult.failure(
            f"duplicate scope '{duplicate}'",
            fragment=duplicate,
            kind=ChallengeErrorKind.DUPLICATE_SCOPE,
        )
    return ParseResult.ok(scope)
