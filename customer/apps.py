from django.apps import AppConfig


class CustomerConfig(AppConfig):
    """App configuration for customer identities."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "customer"
    verbose_name = "Customer"

    def ready(self):
        from common.profiles import IdentityProfileService

        from .services import CUSTOMER_BINDING

        self.profile_service = IdentityProfileService.from_settings(CUSTOMER_BINDING)
