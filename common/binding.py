"""Per-kind wiring for the shared identity core."""

from dataclasses import dataclass, field

from django.core.exceptions import ValidationError

from .errors import Conflict


@dataclass(frozen=True)
class IdentityBinding:
    """Describe one identity kind to the shared services.

    - identity_model / profile_model: the concrete Django models.
    - profile_link: name of the profile's one-to-one field to the identity.
    - identity_fields / profile_fields: columns a profile update may write.
    - unique_profile_fields: extra unique profile columns (besides phone)
      and the conflict raised when another identity already holds a value.
    - create_required: profile fields that must be present at onboarding.
    - email_change_path: frontend route that receives the confirmation token.
    """

    kind: str
    identity_model: type
    profile_model: type
    profile_link: str
    identity_fields: tuple = ("full_name",)
    profile_fields: tuple = ("photo_url", "country_code")
    unique_profile_fields: dict[str, type[Conflict]] = field(default_factory=dict)
    create_required: tuple = ("photo_url",)
    email_change_path: str = "/verify-email-change"

    def identities(self):
        return self.identity_model.objects.all()

    def profiles(self):
        return self.profile_model.objects.all()

    def profile_for(self, identity_id):
        return self.profiles().filter(**{f"{self.profile_link}_id": identity_id})

    def find_identity(self, identity_id, *, lock: bool = False):
        """Return the identity (optionally row-locked) or None.

        Malformed ids are treated as unknown rather than surfacing a
        validation error from the UUID field.
        """
        queryset = self.identities()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.filter(pk=identity_id).first()
        except (ValidationError, ValueError):
            return None

    def load(self, identity_id):
        """Re-read an identity together with its profile."""
        return self.identities().select_related("profile").get(pk=identity_id)
