"""Tests for SkillSwap session tokens."""

import jwt
from datetime import timedelta

from skillswap.auth.jwt import (
    JWT_ALGORITHM,
    JWT_ISSUER,
    JWT_SECRET_KEY,
    create_access_token,
    decode_access_token,
    get_user_id_from_token,
)


def test_token_names_user_and_issuer():
    claims = decode_access_token(create_access_token("u1"))
    assert claims["sub"] == "u1"
    assert claims["iss"] == JWT_ISSUER


def test_expired_token_is_rejected():
    token = create_access_token("u1", expires_in=timedelta(seconds=-1))
    assert decode_access_token(token) is None
    assert get_user_id_from_token(token) is None


def test_token_from_another_issuer_is_rejected():
    token = jwt.encode(
        {"sub": "u1", "iss": "some-other-app", "exp": 4102444800},
        JWT_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
    )
    assert get_user_id_from_token(token) is None


def test_token_without_issuer_is_rejected():
    token = jwt.encode({"sub": "u1", "exp": 4102444800}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
    assert get_user_id_from_token(token) is None


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode(
        {"sub": "u1", "iss": JWT_ISSUER, "exp": 4102444800},
        "not-the-server-key",
        algorithm=JWT_ALGORITHM,
    )
    assert get_user_id_from_token(token) is None


def test_garbage_token():
    assert get_user_id_from_token("not-a-token") is None


def test_admin_rights_are_not_in_the_token():
    claims = decode_access_token(create_access_token("admin"))
    assert "is_admin" not in claims
