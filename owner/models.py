"""Owner (admin) identity models.

`Owner` is the account record; `OwnerProfile` is created once at onboarding
and carries the verified phone, language preference, bio, and the GST/billing
block used on invoices.
"""

from common.choices import PreferredLanguage
from common.models import IdentityBase, ProfileBase
from django.core.validators import RegexValidator
from django.db import models

GSTIN_VALIDATOR = RegexValidator(
    r"^\d{2}[A-Z]{5}\d{4}[A-Z][1-9A-Z]Z[0-9A-Z]$",
    message="Use a valid 15-character GSTIN (e.g., 27AAPFU0939F1ZV)",
)


class Owner(IdentityBase):
    """Owner account; email changes go through the email-change flow."""

    class Meta:
        ordering = ("-created_at",)


class OwnerProfile(ProfileBase):
    """Per-owner profile.

    Fields:
    - preferred_language: closed set of supported languages.
    - short_bio: optional; null clears it.
    - gst_number: optional, unique across owners when set.
    """

    owner = models.OneToOneField(Owner, on_delete=models.CASCADE, related_name="profile")
    preferred_language = models.CharField(
        max_length=2,
        choices=PreferredLanguage.choices,
        default=PreferredLanguage.ENGLISH,
    )
    short_bio = models.TextField(null=True, blank=True)
    gst_number = models.CharField(max_length=15, unique=True, null=True, blank=True, validators=[GSTIN_VALIDATOR])
    business_name = models.CharField(max_length=200, null=True, blank=True)
    billing_address = models.TextField(null=True, blank=True)

    def __str__(self) -> str:  # pragma: no cover
        return f"OwnerProfile<{self.owner_id}>"
