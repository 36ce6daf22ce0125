from __future__ import annotations

import pytest

from bearer_challenge import ChallengeErrorKind, parse_auth_params, parse_scope
from bearer_challenge.parsers import find_duplicate


def test_empty_auth_params() -> None:
    result = parse_auth_params("")
    assert result.success
    assert dict(result.value) == {}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('realm="example"', {"realm": "example"}),
        ("error=invalid_token", {"error": "invalid_token"}),
        ('realm="example", error=invalid_token', {"realm": "example", "error": "invalid_token"}),
        ('realm = "example" ,error="invalid_token"', {"realm": "example", "error": "invalid_token"}),
        ('realm=\t"example",\terror="invalid_token"', {"realm": "example", "error": "invalid_token"}),
        ('realm="example",error=""', {"realm": "example", "error": ""}),
        ('error_description="a \\"quoted\\" description"', {"error_description": 'a "quoted" description'}),
        ('foo="a, b=c", bar=baz', {"foo": "a, b=c", "bar": "baz"}),
    ],
)
def test_auth_params(text: str, expected: dict[str, str]) -> None:
    result = parse_auth_params(text)
    assert result.success
    assert dict(result.value) == expected


def test_auth_params_case_insensitive_keys() -> None:
    result = parse_auth_params('Realm="Example", ERROR="Invalid_Token"')
    assert result.success
    params = result.value
    assert params["realm"] == "Example"
    assert params["REALM"] == "Example"
    assert params["error"] == "Invalid_Token"
    # keys keep their received spelling when iterating
    assert list(params) == ["Realm", "ERROR"]


@pytest.mark.parametrize(
    "text",
    [
        'realm="a", realm="b"',
        'realm="a", REALM="b"',
        'foo=1, bar=2, Foo="3"',
    ],
)
def test_auth_params_duplicates(text: str) -> None:
    result = parse_auth_params(text)
    assert not result.success
    assert result.kind == ChallengeErrorKind.DUPLICATE_PARAMETER
    assert result.message is not None
    assert result.message.startswith("duplicate auth-param")


@pytest.mark.parametrize(
    "text",
    [
        " realm=\"a\"",
        'realm="a" ',
        'realm="a",',
        'realm="a", ',
        'realm="a" error="b"',
        'realm="a",, error="b"',
        'realm="unterminated, error="e"',
        'realm="unterminated',
        "realm",
        "realm=",
        "=value",
        "realm=caf\xe9",
        'realm="a"; error="b"',
        "Bearer realm=\"a\"",
    ],
)
def test_auth_params_syntax_errors(text: str) -> None:
    result = parse_auth_params(text)
    assert not result.success
    assert result.kind == ChallengeErrorKind.SYNTAX


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", ()),
        ("openid", ("openid",)),
        ("openid profile email", ("openid", "profile", "email")),
        ("openid   profile", ("openid", "profile")),
        ("profile openid", ("profile", "openid")),
        ("client_id=foo service=https://as.local/api", ("client_id=foo", "service=https://as.local/api")),
        ("Read read:all", ("Read", "read:all")),
    ],
)
def test_scope(text: str, expected: tuple[str, ...]) -> None:
    result = parse_scope(text)
    assert result.success
    assert result.value == expected


@pytest.mark.parametrize("text", ["openid openid", "Openid openid", "a b c B"])
def test_scope_duplicates(text: str) -> None:
    result = parse_scope(text)
    assert not result.success
    assert result.kind == ChallengeErrorKind.DUPLICATE_SCOPE


@pytest.mark.parametrize("text", [" openid", "openid ", "openid\tprofile", 'open"id', "open\\id", "caf\xe9"])
def test_scope_syntax_errors(text: str) -> None:
    result = parse_scope(text)
    assert not result.success
    assert result.kind == ChallengeErrorKind.SYNTAX


def test_long_lists() -> None:
    scopes = [f"scope{i}" for i in range(10_000)]
    result = parse_scope(" ".join(scopes))
    assert result.success
    assert result.value == tuple(scopes)

    params = ", ".join(f'param{i}="value{i}"' for i in range(5_000))
    result = parse_auth_params(params)
    assert result.success
    assert len(result.value) == 5_000


def test_duplicate_fragment() -> None:
    result = parse_auth_params('foo=1, bar=2, Foo="3"')
    assert result.fragment == "Foo"
    assert result.message == "duplicate auth-param 'Foo'"

    result = parse_scope("a b c B")
    assert result.fragment == "B"
    assert result.message == "duplicate scope 'B'"


def test_find_duplicate() -> None:
    assert find_duplicate([]) is None
    assert find_duplicate(["a", "b", "c"]) is None
    assert find_duplicate(["a", "b", "A", "b"]) == "A"
    assert find_duplicate(["a", "A"], normalize=lambda s: s) is None
    assert find_duplicate(iter(["x", "y", "x"])) == "x"
