"""Profile services shared by owners and customers.

`IdentityProfileService` is the single entry point for reading, creating and
updating an identity's profile. Updates run as one transaction holding row
locks on the identity and its profile: every uniqueness check and every
staged write land together or not at all.

Business rules for a profile update:
- email and phone may not change in the same request;
- a phone change needs a verified-phone token from the OTP service and is
  applied directly;
- an email change only issues a confirmation link, see `email_change`;
- other fields are applied when present, cleared when null, and left alone
  when absent;
- a request that changes nothing is rejected.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.db import IntegrityError, transaction

from .binding import IdentityBinding
from .changes import UNSET, ProfileChanges
from .email_change import EmailChangeConfirmation, EmailChangeCoordinator, EmailChangeResult
from .errors import (
    BadRequest,
    IdentityNotFound,
    MutuallyExclusiveChange,
    NoChanges,
    PhoneInUse,
    PhoneVerificationInvalid,
    ProfileAlreadyComplete,
    ProfileMissing,
    conflict_from_integrity_error,
)
from .models import normalize_email
from .phone import PhoneVerificationGate
from .tokens import TokenSigner

logger = logging.getLogger("identity")


@dataclass(frozen=True)
class ProfileUpdateResult:
    identity: object
    email_change_link: str | None = None
    phone_changed: bool = False


class IdentityProfileService:
    """Read, create and update profiles for one identity kind."""

    def __init__(
        self,
        binding: IdentityBinding,
        *,
        phone_gate: PhoneVerificationGate,
        email_change: EmailChangeCoordinator,
        email_confirmation: EmailChangeConfirmation,
    ):
        self.binding = binding
        self.phone_gate = phone_gate
        self.email_change = email_change
        self.email_confirmation = email_confirmation

    @classmethod
    def from_settings(cls, binding: IdentityBinding) -> "IdentityProfileService":
        """Build the service and its collaborators from Django settings.

        Called once per identity kind at startup; a missing identity token
        secret raises `ImproperlyConfigured` here.
        """
        signer = TokenSigner(settings.IDENTITY_TOKEN_SECRET)
        return cls(
            binding,
            phone_gate=PhoneVerificationGate(getattr(settings, "PHONE_VERIFICATION_SECRET", "")),
            email_change=EmailChangeCoordinator(
                binding,
                signer,
                ttl=timedelta(minutes=getattr(settings, "EMAIL_CHANGE_TOKEN_TTL_MINUTES", 15)),
                base_url=getattr(settings, "FRONTEND_URL", ""),
            ),
            email_confirmation=EmailChangeConfirmation(binding, signer),
        )

    def get(self, identity_id):
        identity = self.binding.find_identity(identity_id)
        if identity is None:
            raise IdentityNotFound()
        return self.binding.load(identity.pk)

    def create_profile(self, identity_id, changes: ProfileChanges):
        """Create the profile once, when onboarding completes.

        Marks the identity active and profile-complete in the same transaction.
        """
        if not changes.has_phone_token:
            raise PhoneVerificationInvalid()
        missing = [name for name in self.binding.create_required if getattr(changes, name) in (UNSET, None)]
        if missing:
            raise BadRequest(f"Missing required fields: {', '.join(missing)}.")
        phone = self.phone_gate.verify(changes.phone_verification_token).phone

        try:
            with transaction.atomic():
                identity = self._create(identity_id, changes, phone)
        except IntegrityError as exc:
            raise conflict_from_integrity_error(exc) from exc

        logger.info(
            "identity.profile_created",
            extra={"event": "identity.profile_created", "kind": self.binding.kind, "identity_id": str(identity.pk)},
        )
        return identity

    def update(self, identity_id, changes: ProfileChanges) -> ProfileUpdateResult:
        try:
            with transaction.atomic():
                result = self._update(identity_id, changes)
        except IntegrityError as exc:
            raise conflict_from_integrity_error(exc) from exc

        logger.info(
            "identity.profile_updated",
            extra={
                "event": "identity.profile_updated",
                "kind": self.binding.kind,
                "identity_id": str(result.identity.pk),
                "phone_changed": result.phone_changed,
                "email_change_requested": result.email_change_link is not None,
            },
        )
        return result

    def confirm_email_change(self, token: str) -> EmailChangeResult:
        return self.email_confirmation.confirm(token)

    def _create(self, identity_id, changes: ProfileChanges, phone: str):
        identity = self.binding.find_identity(identity_id, lock=True)
        if identity is None:
            raise IdentityNotFound()
        if identity.is_profile_complete or self.binding.profile_for(identity.pk).exists():
            raise ProfileAlreadyComplete()
        if self.binding.profiles().filter(phone=phone).exists():
            raise PhoneInUse()

        values = changes.provided(self.binding.profile_fields)
        self._check_unique_profile_fields(identity.pk, values)
        self.binding.profile_model.objects.create(**{self.binding.profile_link: identity}, phone=phone, **values)

        identity_values = changes.provided(self.binding.identity_fields)
        for name, value in identity_values.items():
            setattr(identity, name, value)
        identity.is_profile_complete = True
        identity.is_active = True
        identity.save(update_fields=[*identity_values, "is_profile_complete", "is_active", "updated_at"])
        return self.binding.load(identity.pk)

    def _update(self, identity_id, changes: ProfileChanges) -> ProfileUpdateResult:
        identity = self.binding.find_identity(identity_id, lock=True)
        if identity is None:
            raise IdentityNotFound()
        profile = self.binding.profile_for(identity.pk).select_for_update().first()

        new_email = None
        if changes.email is not UNSET:
            if not changes.email:
                raise BadRequest("Email cannot be cleared.")
            new_email = normalize_email(changes.email)
        wants_email_change = new_email is not None and new_email != identity.email

        new_phone = None
        if changes.has_phone_token:
            new_phone = self.phone_gate.verify(changes.phone_verification_token).phone
        current_phone = profile.phone if profile is not None else None
        wants_phone_change = new_phone is not None and new_phone != current_phone

        if wants_email_change and wants_phone_change:
            raise MutuallyExclusiveChange()

        identity_updates = changes.provided(self.binding.identity_fields)
        profile_updates = changes.provided(self.binding.profile_fields)
        self._check_unique_profile_fields(identity.pk, profile_updates)

        phone_changed = False
        if wants_phone_change:
            if self._other_profiles(identity.pk).filter(phone=new_phone).exists():
                raise PhoneInUse()
            profile_updates["phone"] = new_phone
            phone_changed = True

        if not identity_updates and not profile_updates and not wants_email_change:
            raise NoChanges()
        if profile_updates and profile is None:
            raise ProfileMissing()

        email_change_link = None
        if wants_email_change:
            email_change_link = self.email_change.initiate(identity, new_email)

        if identity_updates:
            for name, value in identity_updates.items():
                setattr(identity, name, value)
            identity.save(update_fields=[*identity_updates, "updated_at"])
        if profile_updates:
            for name, value in profile_updates.items():
                setattr(profile, name, value)
            profile.save(update_fields=[*profile_updates, "updated_at"])

        return ProfileUpdateResult(
            identity=self.binding.load(identity.pk),
            email_change_link=email_change_link,
            phone_changed=phone_changed,
        )

    def _other_profiles(self, identity_id):
        return self.binding.profiles().exclude(**{f"{self.binding.profile_link}_id": identity_id})

    def _check_unique_profile_fields(self, identity_id, values: dict) -> None:
        for name, error_cls in self.binding.unique_profile_fields.items():
            value = values.get(name)
            if value is None:
                continue
            if self._other_profiles(identity_id).filter(**{name: value}).exists():
                raise error_cls()
