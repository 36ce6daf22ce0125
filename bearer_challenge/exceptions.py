"""This module contains all exception classes from `bearer_challenge`."""

from __future__ import annotations

from .enums import ChallengeErrorKind


class InvalidBearerChallenge(ValueError):
    """Base class for errors raised when a Bearer challenge cannot be parsed.

    Args:
        challenge: the full challenge-parameter string that was being parsed
        reason: a description of what went wrong
        fragment: the part of the input where the error was detected, if any

    """

    kind = ChallengeErrorKind.SYNTAX
    summary = "malformed challenge"

    def __init__(self, challenge: str, reason: str, fragment: str | None = None) -> None:
        super().__init__(f"The Bearer challenge is invalid: {self.summary} ({reason})")
        self.challenge = challenge
        self.reason = reason
        self.fragment = fragment


class ChallengeSyntaxError(InvalidBearerChallenge):
    """Raised when the auth-param list does not match the grammar, or is not consumed entirely."""

    summary = "malformed challenge syntax"


class DuplicateParameter(ChallengeSyntaxError):
    """Raised when two auth-params share the same key, compared case-insensitively."""

    kind = ChallengeErrorKind.DUPLICATE_PARAMETER


class InvalidScope(InvalidBearerChallenge):
    """Raised when the `scope` value is not a space-delimited list of scope tokens."""

    kind = ChallengeErrorKind.INVALID_SCOPE
    summary = "malformed scope"


class DuplicateScope(InvalidScope):
    """Raised when the same scope token appears twice, compared case-insensitively."""

    kind = ChallengeErrorKind.DUPLICATE_SCOPE


class InvalidErrorUri(InvalidBearerChallenge):
    """Raised when the `error_uri` value is neither an absolute nor a relative URI."""

    kind = ChallengeErrorKind.INVALID_ERROR_URI
    summary = "malformed error URI"


EXCEPTION_CLASSES: dict[ChallengeErrorKind, type[InvalidBearerChallenge]] = {
    exc_class.kind: exc_class
    for exc_class in (
        ChallengeSyntaxError,
        DuplicateParameter,
        InvalidScope,
        DuplicateScope,
        InvalidErrorUri,
    )
}
