from __future__ import annotations

import pytest


@pytest.fixture(scope="session")
def realm() -> str:
    return "as.local"


@pytest.fixture(scope="session")
def error() -> str:
    return "invalid_token"


@pytest.fixture(scope="session")
def error_description() -> str:
    return "The token is expired"


@pytest.fixture(scope="session")
def authorization_uri() -> str:
    return "https://as.local/oauth/token"


@pytest.fixture(scope="session")
def typical_challenge(realm: str, authorization_uri: str, error: str, error_description: str) -> str:
    return (
        f'realm="{realm}", authorization_uri="{authorization_uri}", scope="openid profile",'
        f' error="{error}", error_description="{error_description}"'
    )
