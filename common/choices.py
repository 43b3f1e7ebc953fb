"""Shared enumerations and choices used across apps."""

from django.db import models


class IdentityKind(models.TextChoices):
    """Kinds of identity; also the `role` claim carried by access tokens."""

    OWNER = "owner", "Owner"
    CUSTOMER = "customer", "Customer"


class PreferredLanguage(models.TextChoices):
    """Languages an owner may pick for communications."""

    ENGLISH = "EN", "English"
    HINDI = "HI", "Hindi"
    TELUGU = "TE", "Telugu"


class TokenPurpose(models.TextChoices):
    EMAIL_CHANGE = "email_change", "Email change"
