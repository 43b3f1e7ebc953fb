"""Abstract identity and profile models shared by owners and customers.

Each identity kind gets a concrete pair of tables: an identity row holding
the account email and the email-change version counter, and a one-to-one
profile row holding the phone number and descriptive attributes.
"""

import uuid

from django.core.validators import RegexValidator
from django.db import models

PHONE_VALIDATOR = RegexValidator(
    r"^\d{7,15}$",
    message="Phone must be digits only, including the country code (e.g., 919876543210)",
)
COUNTRY_CODE_VALIDATOR = RegexValidator(r"^\d{1,4}$", message="Use a numeric country calling code (e.g., 91)")


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class IdentityBase(TimeStampedModel):
    """Account record for one identity.

    Fields:
    - email: unique at the database level, stored normalized.
    - is_active: flipped on once onboarding completes.
    - email_verify_version: anti-replay stamp for email-change links. It only
      ever increases; a link is valid iff it carries the current value.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=150, blank=True)
    is_active = models.BooleanField(default=False)
    is_profile_complete = models.BooleanField(default=False)
    email_verify_version = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        """Normalize the email so uniqueness checks are reliable."""
        if self.email:
            self.email = normalize_email(self.email)
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.email


class ProfileBase(TimeStampedModel):
    """Contact and descriptive attributes, one row per identity.

    Concrete subclasses add the one-to-one link to their identity.
    """

    phone = models.CharField(
        max_length=15,
        unique=True,
        validators=[PHONE_VALIDATOR],
        help_text="Verified phone, digits only with country code",
    )
    country_code = models.CharField(max_length=4, default="91", validators=[COUNTRY_CODE_VALIDATOR])
    photo_url = models.URLField(max_length=500)

    class Meta:
        abstract = True


def normalize_email(value: str) -> str:
    return value.strip().lower()
