from datetime import timedelta

import jwt
import pytest
from common.tokens import TokenExpired, TokenInvalid, TokenSigner
from django.core.exceptions import ImproperlyConfigured

SECRET = "unit-test-secret-that-is-long-enough-0123"


def test_sign_and_verify_returns_payload():
    signer = TokenSigner(SECRET)

    token = signer.sign({"sub": "abc", "version": 3}, timedelta(minutes=5))
    payload = signer.verify(token)

    assert payload["sub"] == "abc"
    assert payload["version"] == 3
    assert payload["exp"] > payload["iat"]


def test_expired_token_raises_expired():
    signer = TokenSigner(SECRET)
    token = signer.sign({"sub": "abc"}, timedelta(seconds=-1))

    with pytest.raises(TokenExpired):
        signer.verify(token)


def test_wrong_secret_raises_invalid():
    token = TokenSigner("another-secret-that-is-long-enough-987").sign({"sub": "abc"}, timedelta(minutes=5))

    with pytest.raises(TokenInvalid):
        TokenSigner(SECRET).verify(token)


def test_garbage_raises_invalid():
    with pytest.raises(TokenInvalid):
        TokenSigner(SECRET).verify("definitely.not.a-token")


def test_algorithm_is_pinned():
    token = jwt.encode({"sub": "abc"}, SECRET, algorithm="HS512")

    with pytest.raises(TokenInvalid):
        TokenSigner(SECRET).verify(token)


def test_empty_secret_is_a_configuration_error():
    with pytest.raises(ImproperlyConfigured):
        TokenSigner("")


def test_token_without_expiry_is_invalid():
    token = jwt.encode({"sub": "abc"}, SECRET, algorithm="HS256")

    with pytest.raises(TokenInvalid):
        TokenSigner(SECRET).verify(token)
