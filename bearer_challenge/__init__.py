"""Main module for `bearer_challenge`.

You can import any class from any submodule directly from this main module.
"""

from .challenge import (
    BearerChallenge,
    ChallengeFailure,
    format_bearer_challenge,
    parse_bearer_challenge,
    read_challenge,
    try_parse_bearer_challenge,
)
from .enums import BearerChallengeParameters, ChallengeErrorKind
from .exceptions import (
    ChallengeSyntaxError,
    DuplicateParameter,
    DuplicateScope,
    InvalidBearerChallenge,
    InvalidErrorUri,
    InvalidScope,
)
from .parsers import parse_auth_params, parse_scope
from .utils import is_uri_reference, uri_reference_errors
