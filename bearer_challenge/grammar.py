"""The lexical rules of the `Bearer` challenge grammar, built with `pyparsing`.

Rules are built once at import time, never skip whitespace implicitly and keep tabs as-is, so
they can be shared between threads. Optional whitespace is only allowed where `OWS` says so.

Once the opening `"` of a quoted-string is consumed, any further failure is fatal: it is raised
as a `pyparsing.ParseSyntaxException`, which alternations do not catch. An unterminated
quoted-string therefore never falls back to a bare token.

"""

from __future__ import annotations

from typing import Generic, TypeVar

import pyparsing as pp
from attrs import frozen

from .enums import ChallengeErrorKind

T = TypeVar("T")

FRAGMENT_WIDTH = 32


def char_range(low: int, high: int) -> str:
    """Return all characters between `low` and `high`, inclusive."""
    return "".join(chr(c) for c in range(low, high + 1))


def rule(element: pp.ParserElement, name: str) -> pp.ParserElement:
    """Name `element`, and make it match whitespace and tabs literally."""
    return element.set_name(name).leave_whitespace().parse_with_tabs()


TOKEN_CHARS = pp.alphas + pp.nums + "!#$%&'*+-.^_`|~"
VCHARS = char_range(0x21, 0x7E)
OBS_TEXT_CHARS = char_range(0x80, 0xFF)
QDTEXT_CHARS = "\t !" + char_range(0x23, 0x5B) + char_range(0x5D, 0x7E) + OBS_TEXT_CHARS
SCOPE_TOKEN_CHARS = "!" + char_range(0x23, 0x5B) + char_range(0x5D, 0x7E)

HTAB = rule(pp.Literal("\t"), "HTAB")
SP = rule(pp.Literal(" "), "SP")
OWS = rule(pp.Opt(pp.White(" \t")).suppress(), "OWS")
DQUOTE = rule(pp.Literal('"'), "DQUOTE")
VCHAR = rule(pp.Char(VCHARS), "VCHAR")
OBS_TEXT = rule(pp.Char(OBS_TEXT_CHARS), "obs-text")

QDTEXT = rule(pp.Word(QDTEXT_CHARS), "qdtext")
QUOTED_PAIR = rule(pp.Suppress("\\") - (HTAB | SP | VCHAR | OBS_TEXT), "quoted-pair")
QUOTED_STRING = rule(
    pp.Combine(pp.Suppress(DQUOTE) - (pp.ZeroOrMore(QDTEXT | QUOTED_PAIR) + pp.Suppress(DQUOTE))),
    "quoted-string",
)

TOKEN = rule(pp.Word(TOKEN_CHARS), "token")
SCOPE_TOKEN = rule(pp.Word(SCOPE_TOKEN_CHARS), "scope-token")

WHOLE_TOKEN = rule(TOKEN + pp.StringEnd(), "token")
WHOLE_SCOPE_TOKEN = rule(SCOPE_TOKEN + pp.StringEnd(), "scope-token")


def is_token(text: str) -> bool:
    """Return `True` if the whole `text` is a single token."""
    return WHOLE_TOKEN.matches(text, parse_all=False)


def is_scope_token(text: str) -> bool:
    """Return `True` if the whole `text` is a single scope-token."""
    return WHOLE_SCOPE_TOKEN.matches(text, parse_all=False)


@frozen
class ParseResult(Generic[T]):
    """The outcome of parsing some text: either a `value`, or a description of the failure.

    `position` and `fragment` locate the failure in the parsed text, when known.

    """

    success: bool
    value: T | None = None
    message: str | None = None
    position: int | None = None
    fragment: str | None = None
    kind: ChallengeErrorKind = ChallengeErrorKind.SYNTAX

    @classmethod
    def ok(cls, value: T) -> ParseResult[T]:
        """Build a successful result."""
        return cls(success=True, value=value)

    @classmethod
    def failure(
        cls,
        message: str,
        *,
        position: int | None = None,
        fragment: str | None = None,
        kind: ChallengeErrorKind = ChallengeErrorKind.SYNTAX,
    ) -> ParseResult[T]:
        """Build a failed result."""
        return cls(success=False, message=message, position=position, fragment=fragment, kind=kind)

    @classmethod
    def from_exception(cls, exc: pp.ParseBaseException) -> ParseResult[T]:
        """Build a syntax failure from a `pyparsing` exception."""
        fragment = exc.pstr[exc.loc : exc.loc + FRAGMENT_WIDTH] or None
        return cls.failure(f"{exc.msg} at position {exc.loc}", position=exc.loc, fragment=fragment)


def parse_with(element: pp.ParserElement, text: str) -> ParseResult[pp.ParseResults]:
    """Apply `element` to `text`, turning `pyparsing` exceptions into a failed `ParseResult`."""
    try:
        return ParseResult.ok(element.parse_string(text))
    except pp.ParseBaseException as exc:
        return ParseResult.from_exception(exc)
