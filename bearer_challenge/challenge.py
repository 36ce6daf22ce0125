"""This module contains the `BearerChallenge` class, and functions to parse and format it.

A Bearer challenge is the part of a `WWW-Authenticate` header that follows the `Bearer`
auth-scheme, as defined in RFC6750. For example, from this header:

    WWW-Authenticate: Bearer realm="example", error="invalid_token"

the challenge-parameter string is `realm="example", error="invalid_token"`. Extracting that string
from an HTTP response is up to the caller.

"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from attrs import field, frozen
from requests.structures import CaseInsensitiveDict
from typing_extensions import Self

from .enums import BearerChallengeParameters, ChallengeErrorKind
from .exceptions import EXCEPTION_CLASSES, InvalidBearerChallenge
from .grammar import is_scope_token, is_token
from .parsers import find_duplicate, parse_auth_params, parse_scope
from .utils import uri_reference_errors

if TYPE_CHECKING:
    from attrs import Attribute

    from .grammar import ParseResult

logger = logging.getLogger(__name__)

KNOWN_PARAMETERS = frozenset(param.value for param in BearerChallengeParameters)


def scope_converter(scope: str | Iterable[str] | None) -> tuple[str, ...]:
    """Convert a `scope` given as a str of space-separated scopes, or as an iterable of str, into a tuple."""
    if scope is None:
        return ()
    if isinstance(scope, str):
        return tuple(item for item in scope.split(" ") if item)
    return tuple(scope)


def extensions_converter(extensions: Mapping[str, str] | None) -> Mapping[str, str]:
    """Convert extension parameters into a read-only, case-insensitive mapping.

    Raises:
        ValueError: if a key is not a valid token, is given twice, or is one of the standard Bearer
            parameters

    """
    folded: CaseInsensitiveDict[str] = CaseInsensitiveDict()
    for key, value in (extensions or {}).items():
        if not is_token(key):
            msg = f"Extension parameter '{key}' is not a valid token"
            raise ValueError(msg)
        if key.lower() in KNOWN_PARAMETERS:
            msg = f"'{key}' is a standard Bearer parameter, not an extension"
            raise ValueError(msg)
        if key in folded:
            msg = f"Duplicate extension parameter '{key}'"
            raise ValueError(msg)
        folded[key] = value
    return MappingProxyType(folded)


def validate_scope(instance: BearerChallenge, attribute: Attribute[tuple[str, ...]], value: tuple[str, ...]) -> None:
    """Check that each scope is a valid scope-token, and that none appears twice."""
    for token in value:
        if not is_scope_token(token):
            msg = f"Scope '{token}' is not a valid scope-token"
            raise ValueError(msg)
    duplicate = find_duplicate(value)
    if duplicate is not None:
        msg = f"Duplicate scope '{duplicate}'"
        raise ValueError(msg)


def validate_error_uri(instance: BearerChallenge, attribute: Attribute[str | None], value: str | None) -> None:
    """Check that `error_uri` is an absolute or relative URI, if present."""
    if value is None:
        return
    errors = ", ".join(uri_reference_errors(value))
    if errors:
        msg = f"Invalid error_uri: {errors}"
        raise ValueError(msg)


@frozen
class BearerChallenge:
    """Represent the challenge that follows the `Bearer` auth-scheme in a `WWW-Authenticate` header.

    Instances are immutable. They are usually obtained with `BearerChallenge.parse()`, and turned
    back into a challenge-parameter string with `str()`.

    Args:
        realm: the name of the protection space
        scope: the scopes required to access the resource, in order, without duplicates. May be
            given as a space-separated str.
        error: the error code, such as `invalid_token`
        error_description: a human readable description of the error
        error_uri: an absolute or relative URI to a web page describing the error
        extensions: any other auth-param, with case-insensitive keys

    Example:
        ```python
        from bearer_challenge import BearerChallenge

        challenge = BearerChallenge.parse('realm="example", error="invalid_token"')
        assert challenge.realm == "example"
        assert challenge.error == "invalid_token"
        assert str(challenge) == 'realm="example", error="invalid_token"'
        ```

    """

    realm: str | None = None
    scope: tuple[str, ...] = field(default=(), converter=scope_converter, validator=validate_scope)
    error: str | None = None
    error_description: str | None = None
    error_uri: str | None = field(default=None, validator=validate_error_uri)
    extensions: Mapping[str, str] = field(factory=dict, converter=extensions_converter, hash=False)

    @classmethod
    def parse(cls, challenge_parameter: str) -> Self:
        """Parse a challenge-parameter string.

        Args:
            challenge_parameter: the challenge from a `WWW-Authenticate` header, following the
                `Bearer` auth-scheme

        Returns:
            a `BearerChallenge`

        Raises:
            ChallengeSyntaxError: if the auth-param list is malformed
            DuplicateParameter: if the same auth-param is present twice
            InvalidScope: if the `scope` value is malformed
            DuplicateScope: if the same scope is present twice
            InvalidErrorUri: if the `error_uri` is not a valid URI

        """
        result = read_challenge(challenge_parameter, cls)
        if isinstance(result, ChallengeFailure):
            raise result.to_exception(challenge_parameter)
        return result  # type: ignore[return-value]

    @classmethod
    def try_parse(cls, challenge_parameter: str) -> tuple[bool, Self | None]:
        """Parse a challenge-parameter string, without raising exceptions.

        This does the same validation as `parse()`, but discards the details of any error.

        Returns:
            a `(True, challenge)` tuple on success, or `(False, None)` on failure.

        """
        result = read_challenge(challenge_parameter, cls)
        if isinstance(result, ChallengeFailure):
            return False, None
        return True, result  # type: ignore[return-value]

    @property
    def has_error(self) -> bool:
        """`True` if this challenge includes an `error` code."""
        return self.error is not None

    @property
    def scope_string(self) -> str | None:
        """The scopes as a space-separated str, or `None` if there are none."""
        if not self.scope:
            return None
        return " ".join(self.scope)

    def as_dict(self) -> dict[str, str]:
        """Return the auth-params of this challenge, as a dict.

        Only present fields are included, in the same order as in the formatted challenge.

        """
        params = {
            BearerChallengeParameters.REALM.value: self.realm,
            BearerChallengeParameters.SCOPE.value: self.scope_string,
            BearerChallengeParameters.ERROR.value: self.error,
            BearerChallengeParameters.ERROR_DESCRIPTION.value: self.error_description,
            BearerChallengeParameters.ERROR_URI.value: self.error_uri,
        }
        return {
            **{key: value for key, value in params.items() if value is not None},
            **self.extensions,
        }

    def __str__(self) -> str:
        """Format this challenge as a challenge-parameter string."""
        return format_bearer_challenge(self)


@frozen
class ChallengeFailure:
    """The reason why a challenge-parameter string was rejected.

    This is what `read_challenge()` returns instead of a `BearerChallenge` on failure.
    `BearerChallenge.parse()` turns it into an exception, while `BearerChallenge.try_parse()`
    discards it.

    """

    kind: ChallengeErrorKind
    reason: str
    fragment: str | None = None

    @classmethod
    def from_result(cls, result: ParseResult[Any], kind: ChallengeErrorKind) -> ChallengeFailure:
        """Build a failure from a failed `ParseResult`.

        Syntax errors are reported with the given `kind`, while other errors keep their own kind.

        """
        if result.kind is not ChallengeErrorKind.SYNTAX:
            kind = result.kind
        return cls(kind=kind, reason=result.message or "", fragment=result.fragment)

    def to_exception(self, challenge_parameter: str) -> InvalidBearerChallenge:
        """Build the exception that matches this failure."""
        return EXCEPTION_CLASSES[self.kind](challenge_parameter, self.reason, self.fragment)


def read_challenge(
    challenge_parameter: str, cls: type[BearerChallenge] = BearerChallenge
) -> BearerChallenge | ChallengeFailure:
    """Read a challenge-parameter string into a `BearerChallenge`, or a `ChallengeFailure`.

    Errors are checked in this order: auth-param list syntax and duplicates, then scope, then
    error_uri. The first error found is returned.

    Args:
        challenge_parameter: the challenge-parameter string
        cls: the class to instantiate on success

    Returns:
        an instance of `cls`, or a `ChallengeFailure`

    """
    params_result = parse_auth_params(challenge_parameter)
    if not params_result.success:
        return reject(ChallengeFailure.from_result(params_result, ChallengeErrorKind.SYNTAX))
    params: CaseInsensitiveDict[str] = params_result.value  # type: ignore[assignment]

    raw_scope = params.get(BearerChallengeParameters.SCOPE.value, "")
    scope_result = parse_scope(raw_scope)
    if not scope_result.success:
        return reject(ChallengeFailure.from_result(scope_result, ChallengeErrorKind.INVALID_SCOPE))

    error_uri = params.get(BearerChallengeParameters.ERROR_URI.value)
    if error_uri is not None:
        uri_errors = ", ".join(uri_reference_errors(error_uri))
        if uri_errors:
            return reject(ChallengeFailure(ChallengeErrorKind.INVALID_ERROR_URI, uri_errors, error_uri))

    extensions = CaseInsensitiveDict(
        {key: value for key, value in params.items() if key.lower() not in KNOWN_PARAMETERS}
    )

    return cls(
        realm=params.get(BearerChallengeParameters.REALM.value),
        scope=scope_result.value,
        error=params.get(BearerChallengeParameters.ERROR.value),
        error_description=params.get(BearerChallengeParameters.ERROR_DESCRIPTION.value),
        error_uri=error_uri,
        extensions=extensions,
    )


def reject(failure: ChallengeFailure) -> ChallengeFailure:
    """Log a rejected challenge at debug level, and return its `failure` unchanged."""
    logger.debug("Rejected Bearer challenge (%s): %s", failure.kind.value, failure.reason)
    return failure


def parse_bearer_challenge(challenge_parameter: str) -> BearerChallenge:
    """Parse a challenge-parameter string into a `BearerChallenge`.

    See `BearerChallenge.parse()`.

    """
    return BearerChallenge.parse(challenge_parameter)


def try_parse_bearer_challenge(challenge_parameter: str) -> tuple[bool, BearerChallenge | None]:
    """Parse a challenge-parameter string into a `BearerChallenge`, without raising exceptions.

    See `BearerChallenge.try_parse()`.

    """
    return BearerChallenge.try_parse(challenge_parameter)


def format_bearer_challenge(challenge: BearerChallenge) -> str:
    """Format a `BearerChallenge` into a challenge-parameter string.

    Present fields are emitted in a fixed order (`realm`, `scope`, `error`, `error_description`,
    `error_uri`), followed by extensions, as `key="value"` pairs joined with `, `. Values are not
    escaped.

    """
    return ", ".join(f'{key}="{value}"' for key, value in challenge.as_dict().items())
