"""Contains enumerations of standardised Bearer challenge parameters and parse error kinds.

Parameter names are taken from RFC6750, section 3.

"""

from __future__ import annotations

from enum import Enum


class BearerChallengeParameters(str, Enum):
    """The auth-parameters defined for the `Bearer` auth-scheme.

    Members are listed in the order used when formatting a challenge.

    """

    REALM = "realm"
    SCOPE = "scope"
    ERROR = "error"
    ERROR_DESCRIPTION = "error_description"
    ERROR_URI = "error_uri"


class ChallengeErrorKind(str, Enum):
    """The reasons a Bearer challenge can be rejected."""

    SYNTAX = "syntax"
    DUPLICATE_PARAMETER = "duplicate_parameter"
    INVALID_SCOPE = "invalid_scope"
    DUPLICATE_SCOPE = "duplicate_scope"
    INVALID_ERROR_URI = "invalid_error_uri"
