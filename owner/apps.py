from django.apps import AppConfig


class OwnerConfig(AppConfig):
    """App configuration for owner (admin) identities.

    Builds the owner profile service once at startup from settings.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "owner"
    verbose_name = "Owner"

    def ready(self):
        from common.profiles import IdentityProfileService

        from .services import OWNER_BINDING

        self.profile_service = IdentityProfileService.from_settings(OWNER_BINDING)
