"""Error kinds raised by the identity core.

Every failure is an `IdentityError` subclass. The intermediate classes
(`NotFound`, `Conflict`, `BadRequest`, `Forbidden`, `Unauthorized`,
`Unavailable`) are the kinds clients branch on; the leaves carry a stable
`code` and a default human-readable message.
"""

import re

from django.db import IntegrityError


class IdentityError(Exception):
    """Base for all identity core failures."""

    kind = "server_error"
    status_code = 500
    code = "server_error"
    default_detail = "Something went wrong. Please try again later."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(IdentityError):
    kind = "not_found"
    status_code = 404


class Conflict(IdentityError):
    kind = "conflict"
    status_code = 409


class BadRequest(IdentityError):
    kind = "bad_request"
    status_code = 400


class Forbidden(IdentityError):
    kind = "forbidden"
    status_code = 403


class Unauthorized(IdentityError):
    kind = "unauthorized"
    status_code = 401


class Unavailable(IdentityError):
    kind = "unavailable"
    status_code = 503


class IdentityNotFound(NotFound):
    code = "identity_not_found"
    default_detail = "Account not found."


class ProfileMissing(NotFound):
    code = "profile_missing"
    default_detail = "Profile not found. Please create the profile first."


class EmailInUse(Conflict):
    code = "email_in_use"
    default_detail = "Email already in use."


class PhoneInUse(Conflict):
    code = "phone_in_use"
    default_detail = "Phone number already in use."


class GstInUse(Conflict):
    code = "gst_in_use"
    default_detail = "GST number already registered to another account."


class ProfileAlreadyComplete(Conflict):
    code = "profile_already_complete"
    default_detail = "Profile already completed."


class UniqueConflict(Conflict):
    code = "unique_conflict"
    default_detail = "A record with these details already exists."


class NoChanges(BadRequest):
    code = "no_changes"
    default_detail = "No changes provided to update."


class MutuallyExclusiveChange(BadRequest):
    code = "mutually_exclusive_change"
    default_detail = "You can update either email or phone at a time, not both."


class EmailMismatch(BadRequest):
    code = "email_mismatch"
    default_detail = "Email has already been changed or does not match the email change link."


class StaleLink(BadRequest):
    code = "stale_link"
    default_detail = "This email change link is no longer valid. Please request a new link."


class MalformedLink(BadRequest):
    code = "malformed_link"
    default_detail = "Invalid email change link. Please request a new link."


class PhoneVerificationInvalid(BadRequest):
    code = "phone_verification_invalid"
    default_detail = "Phone number is not verified. Please verify it before updating."


class InactiveAccount(Forbidden):
    code = "inactive_account"
    default_detail = "Account must be active to change email address."


class InvalidOrExpiredLink(Unauthorized):
    code = "invalid_or_expired_link"
    default_detail = "Invalid or expired email change link. Please request a new link."


class PhoneVerificationExpired(Unauthorized):
    code = "phone_verification_expired"
    default_detail = "Phone verification has expired. Please verify your phone again."


class PhoneVerificationUnavailable(Unavailable):
    code = "phone_verification_unavailable"
    default_detail = "Phone verification is temporarily unavailable. Please try again later."


_UNIQUE_COLUMNS = {
    "phone": PhoneInUse,
    "gst_number": GstInUse,
    "email": EmailInUse,
    "owner_id": ProfileAlreadyComplete,
    "customer_id": ProfileAlreadyComplete,
}

# SQLite: "UNIQUE constraint failed: owner_ownerprofile.phone"
# PostgreSQL: "... DETAIL:  Key (phone)=(919876543210) already exists."
_COLUMN_PATTERNS = (
    re.compile(r"unique constraint failed: \w+\.(\w+)", re.IGNORECASE),
    re.compile(r"key \((\w+)\)=", re.IGNORECASE),
)


def conflict_from_integrity_error(exc: IntegrityError) -> Conflict:
    """Map a unique-constraint violation to the error its pre-check raises."""
    message = str(exc)
    for pattern in _COLUMN_PATTERNS:
        match = pattern.search(message)
        if match:
            return _UNIQUE_COLUMNS.get(match.group(1).lower(), UniqueConflict)()
    return UniqueConflict()
