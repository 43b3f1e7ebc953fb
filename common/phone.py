"""Phone verification gate.

An external OTP service proves ownership of a phone number and hands the
client a signed token `{"isVerified": true, "phone": "919876543210"}`. The
gate checks that token and yields the normalized number; it never writes
anything.
"""

import logging
import re
from dataclasses import dataclass

from .errors import PhoneVerificationExpired, PhoneVerificationInvalid, PhoneVerificationUnavailable
from .tokens import TokenExpired, TokenInvalid, TokenSigner

logger = logging.getLogger("identity")

MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(value: str) -> str:
    """Strip everything but digits: "+91 98765-43210" -> "919876543210"."""
    return _NON_DIGITS.sub("", value)


@dataclass(frozen=True)
class VerifiedPhone:
    phone: str


class PhoneVerificationGate:
    """Validate OTP attestation tokens.

    The secret may be empty when the deployment has no OTP integration; each
    call then fails with `PhoneVerificationUnavailable` instead of leaking
    configuration state to the client.
    """

    def __init__(self, secret: str | None, algorithm: str = "HS256"):
        self._signer = TokenSigner(secret, algorithm=algorithm) if secret else None

    def verify(self, token: str) -> VerifiedPhone:
        if self._signer is None:
            logger.error("identity.phone_gate_unconfigured", extra={"event": "identity.phone_gate_unconfigured"})
            raise PhoneVerificationUnavailable()
        if not token or not isinstance(token, str):
            raise PhoneVerificationInvalid()

        try:
            payload = self._signer.verify(token)
        except TokenExpired:
            raise PhoneVerificationExpired()
        except TokenInvalid:
            raise PhoneVerificationInvalid()

        is_verified = payload.get("isVerified")
        phone = payload.get("phone")
        if not isinstance(is_verified, bool) or not isinstance(phone, str):
            raise PhoneVerificationInvalid("Invalid phone verification token payload.")
        if not is_verified:
            raise PhoneVerificationInvalid()

        normalized = normalize_phone(phone)
        if len(normalized) < MIN_PHONE_DIGITS:
            raise PhoneVerificationInvalid("Verified phone number is too short.")
        if len(normalized) > MAX_PHONE_DIGITS:
            raise PhoneVerificationInvalid("Verified phone number is too long.")
        return VerifiedPhone(phone=normalized)
