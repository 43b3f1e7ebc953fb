"""Customer identity models.

`Customer` is the account record for people who book with owners;
`CustomerProfile` is created once at onboarding and holds the verified phone
and a free-form address.
"""

from common.models import IdentityBase, ProfileBase
from django.db import models


class Customer(IdentityBase):
    class Meta:
        ordering = ("-created_at",)


class CustomerProfile(ProfileBase):
    """Per-customer profile; `address` is optional and null clears it."""

    customer = models.OneToOneField(Customer, on_delete=models.CASCADE, related_name="profile")
    address = models.TextField(
        null=True,
        blank=True,
        help_text="Postal address as entered by the customer",
    )

    def __str__(self) -> str:  # pragma: no cover
        return f"CustomerProfile<{self.customer_id}>"
