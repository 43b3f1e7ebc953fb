"""Owner profile services.

Binds the shared identity core to the owner tables. Owners may also edit
their language, bio, and GST/billing block; GST numbers are unique.
"""

from dataclasses import dataclass
from typing import Any

from common.binding import IdentityBinding
from common.changes import UNSET, ProfileChanges
from common.choices import IdentityKind
from common.email_change import EmailChangeResult
from common.errors import GstInUse
from common.profiles import IdentityProfileService, ProfileUpdateResult
from django.apps import apps

from .models import Owner, OwnerProfile

OWNER_BINDING = IdentityBinding(
    kind=IdentityKind.OWNER.value,
    identity_model=Owner,
    profile_model=OwnerProfile,
    profile_link="owner",
    identity_fields=("full_name",),
    profile_fields=(
        "photo_url",
        "country_code",
        "preferred_language",
        "short_bio",
        "gst_number",
        "business_name",
        "billing_address",
    ),
    unique_profile_fields={"gst_number": GstInUse},
    create_required=("photo_url", "preferred_language"),
    email_change_path="/verify-email-change",
)


@dataclass(frozen=True)
class OwnerProfileChanges(ProfileChanges):
    preferred_language: Any = UNSET
    short_bio: Any = UNSET
    gst_number: Any = UNSET
    business_name: Any = UNSET
    billing_address: Any = UNSET


def profile_service() -> IdentityProfileService:
    """Return the owner profile service built at startup."""
    return apps.get_app_config("owner").profile_service


def get_owner_profile(owner_id) -> Owner:
    return profile_service().get(owner_id)


def create_owner_profile(owner_id, changes: OwnerProfileChanges) -> Owner:
    return profile_service().create_profile(owner_id, changes)


def update_owner_profile(owner_id, changes: OwnerProfileChanges) -> ProfileUpdateResult:
    return profile_service().update(owner_id, changes)


def confirm_owner_email_change(token: str) -> EmailChangeResult:
    return profile_service().confirm_email_change(token)
