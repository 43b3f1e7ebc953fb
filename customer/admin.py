from django.contrib import admin

from .models import Customer, CustomerProfile


class CustomerProfileInline(admin.StackedInline):
    model = CustomerProfile
    can_delete = False
    readonly_fields = ("phone", "created_at", "updated_at")


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "full_name", "is_active", "is_profile_complete", "created_at")
    list_filter = ("is_active", "is_profile_complete")
    search_fields = ("email", "full_name", "profile__phone")
    ordering = ("-created_at",)
    readonly_fields = ("id", "email_verify_version", "created_at", "updated_at")
    inlines = [CustomerProfileInline]

    def get_readonly_fields(self, request, obj=None):
        # Existing emails change only through the confirmation link
        if obj is not None:
            return (*self.readonly_fields, "email")
        return self.readonly_fields


@admin.register(CustomerProfile)
class CustomerProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "phone", "country_code")
    search_fields = ("customer__email", "phone")
    readonly_fields = ("phone",)
    ordering = ("-updated_at", "id")
