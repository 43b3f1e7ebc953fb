"""Customer profile services.

Customers share the identity core with owners; their profile adds only an
address, and their email-change links land on the customer frontend route.
"""

from dataclasses import dataclass
from typing import Any

from common.binding import IdentityBinding
from common.changes import UNSET, ProfileChanges
from common.choices import IdentityKind
from common.email_change import EmailChangeResult
from common.profiles import IdentityProfileService, ProfileUpdateResult
from django.apps import apps

from .models import Customer, CustomerProfile

CUSTOMER_BINDING = IdentityBinding(
    kind=IdentityKind.CUSTOMER.value,
    identity_model=Customer,
    profile_model=CustomerProfile,
    profile_link="customer",
    identity_fields=("full_name",),
    profile_fields=("photo_url", "country_code", "address"),
    create_required=("photo_url",),
    email_change_path="/customer/verify-email-change",
)


@dataclass(frozen=True)
class CustomerProfileChanges(ProfileChanges):
    address: Any = UNSET


def profile_service() -> IdentityProfileService:
    return apps.get_app_config("customer").profile_service


def get_customer_profile(customer_id) -> Customer:
    return profile_service().get(customer_id)


def create_customer_profile(customer_id, changes: CustomerProfileChanges) -> Customer:
    return profile_service().create_profile(customer_id, changes)


def update_customer_profile(customer_id, changes: CustomerProfileChanges) -> ProfileUpdateResult:
    """Apply a customer's profile edit; see `IdentityProfileService.update`."""
    return profile_service().update(customer_id, changes)


def confirm_customer_email_change(token: str) -> EmailChangeResult:
    return profile_service().confirm_email_change(token)
