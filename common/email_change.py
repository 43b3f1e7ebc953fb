"""Email change: initiation and confirmation.

An identity's email never changes in the request that asks for it. Instead
`EmailChangeCoordinator.initiate` bumps `email_verify_version` and mails a
signed link stamped with the new version. `EmailChangeConfirmation.confirm`
applies the new email only if the stamp still equals the live version, then
bumps the version again, so each link works at most once and issuing a new
link retires every older one.

    STABLE(v) --initiate--> PENDING(v+1) --confirm(v+1)--> STABLE(v+2)
    PENDING(v+1) --initiate--> PENDING(v+2)   (link v+1 is now stale)
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import partial

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from .binding import IdentityBinding
from .choices import TokenPurpose
from .emails import send_email_change_link
from .errors import (
    EmailInUse,
    EmailMismatch,
    IdentityNotFound,
    InactiveAccount,
    InvalidOrExpiredLink,
    MalformedLink,
    StaleLink,
    conflict_from_integrity_error,
)
from .links import build_frontend_url
from .tokens import TokenError, TokenSigner

logger = logging.getLogger("identity")


@dataclass(frozen=True)
class EmailChangeClaims:
    identity_id: str
    new_email: str
    old_email: str
    version: int


@dataclass(frozen=True)
class EmailChangeResult:
    identity: object
    email_changed: bool = True


class EmailChangeCoordinator:
    """Start an email change from inside the profile update transaction."""

    def __init__(
        self,
        binding: IdentityBinding,
        signer: TokenSigner,
        *,
        ttl: timedelta = timedelta(minutes=15),
        base_url: str | None = None,
        notify: bool = True,
    ):
        self.binding = binding
        self.signer = signer
        self.ttl = ttl
        self.base_url = base_url
        self.notify = notify

    def initiate(self, identity, new_email: str) -> str:
        """Issue a confirmation link for `new_email` and return it.

        The caller must hold the identity row lock inside `transaction.atomic()`.
        """
        if not transaction.get_connection().in_atomic_block:
            raise RuntimeError("EmailChangeCoordinator.initiate() must run inside transaction.atomic()")

        identities = self.binding.identities()
        if identities.filter(email=new_email).exclude(pk=identity.pk).exists():
            raise EmailInUse()
        if not identity.is_active:
            raise InactiveAccount()

        identities.filter(pk=identity.pk).update(
            email_verify_version=F("email_verify_version") + 1,
            updated_at=timezone.now(),
        )
        # Sign what is stored, not what the caller believes is stored.
        current = identities.filter(pk=identity.pk).values("email", "email_verify_version").get()
        identity.email_verify_version = current["email_verify_version"]

        token = self.signer.sign(
            {
                "purpose": TokenPurpose.EMAIL_CHANGE.value,
                "kind": self.binding.kind,
                "sub": str(identity.pk),
                "new_email": new_email,
                "old_email": current["email"],
                "version": current["email_verify_version"],
            },
            self.ttl,
        )
        link = build_frontend_url(self.binding.email_change_path, {"token": token}, base=self.base_url)

        if self.notify:
            transaction.on_commit(partial(send_email_change_link, new_email, link), robust=True)
        logger.info(
            "identity.email_change_initiated",
            extra={
                "event": "identity.email_change_initiated",
                "kind": self.binding.kind,
                "identity_id": str(identity.pk),
                "version": current["email_verify_version"],
            },
        )
        return link


class EmailChangeConfirmation:
    """Apply a pending email change when its link is followed."""

    def __init__(self, binding: IdentityBinding, signer: TokenSigner):
        self.binding = binding
        self.signer = signer

    def confirm(self, token: str) -> EmailChangeResult:
        claims = self.decode(token)
        try:
            with transaction.atomic():
                identity = self._apply(claims)
        except IntegrityError as exc:
            raise conflict_from_integrity_error(exc) from exc

        logger.info(
            "identity.email_change_confirmed",
            extra={
                "event": "identity.email_change_confirmed",
                "kind": self.binding.kind,
                "identity_id": claims.identity_id,
                "version": identity.email_verify_version,
            },
        )
        return EmailChangeResult(identity=identity)

    def decode(self, token: str) -> EmailChangeClaims:
        if not token or not isinstance(token, str):
            raise MalformedLink("Email change token is required.")
        try:
            payload = self.signer.verify(token)
        except TokenError:
            raise InvalidOrExpiredLink()

        if payload.get("purpose") != TokenPurpose.EMAIL_CHANGE or payload.get("kind") != self.binding.kind:
            raise MalformedLink()
        identity_id = payload.get("sub")
        new_email = payload.get("new_email")
        old_email = payload.get("old_email")
        version = payload.get("version")
        if not all(isinstance(value, str) and value for value in (identity_id, new_email, old_email)):
            raise MalformedLink()
        if not isinstance(version, int) or isinstance(version, bool):
            raise MalformedLink()
        return EmailChangeClaims(identity_id=identity_id, new_email=new_email, old_email=old_email, version=version)

    def _apply(self, claims: EmailChangeClaims):
        identity = self.binding.find_identity(claims.identity_id, lock=True)
        if identity is None:
            raise IdentityNotFound()
        if identity.email_verify_version != claims.version:
            raise StaleLink()
        if identity.email != claims.old_email:
            raise EmailMismatch()

        if self._email_taken(identity.pk, claims.new_email):
            raise EmailInUse()

        self.binding.identities().filter(pk=identity.pk).update(
            email=claims.new_email,
            email_verify_version=F("email_verify_version") + 1,
            updated_at=timezone.now(),
        )
        return self.binding.load(identity.pk)

    def _email_taken(self, identity_id, email: str) -> bool:
        return self.binding.identities().filter(email=email).exclude(pk=identity_id).exists()
