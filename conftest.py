from datetime import datetime, timedelta, timezone

import jwt
import pytest
from django.conf import settings
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_access_token():
    """Mint a stateless access token for an identity and role."""

    def _make(identity, role: str) -> str:
        token = AccessToken()
        token["user_id"] = str(identity.pk)
        token["role"] = role
        return str(token)

    return _make


@pytest.fixture
def make_phone_token():
    """Mint an OTP-service attestation the phone gate accepts."""

    def _make(phone="919876543210", is_verified=True, expires_in=timedelta(minutes=10), secret=None):
        payload = {"exp": datetime.now(timezone.utc) + expires_in}
        if is_verified is not None:
            payload["isVerified"] = is_verified
        if phone is not None:
            payload["phone"] = phone
        return jwt.encode(payload, secret or settings.PHONE_VERIFICATION_SECRET, algorithm="HS256")

    return _make


@pytest.fixture
def sign_identity_token():
    """Sign an arbitrary payload with the identity token secret."""

    def _sign(payload: dict, expires_in=timedelta(minutes=15), secret=None) -> str:
        claims = {**payload, "exp": datetime.now(timezone.utc) + expires_in}
        return jwt.encode(claims, secret or settings.IDENTITY_TOKEN_SECRET, algorithm="HS256")

    return _sign
