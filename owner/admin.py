from django.contrib import admin

from .models import Owner, OwnerProfile


class OwnerProfileInline(admin.StackedInline):
    model = OwnerProfile
    can_delete = False
    readonly_fields = ("phone", "created_at", "updated_at")


@admin.register(Owner)
class OwnerAdmin(admin.ModelAdmin):
    """Email and phone are read-only here; they change only through the verified flows."""

    list_display = ("id", "email", "full_name", "is_active", "is_profile_complete", "created_at")
    list_filter = ("is_active", "is_profile_complete")
    search_fields = ("email", "full_name", "profile__phone")
    ordering = ("-created_at",)
    readonly_fields = ("id", "email_verify_version", "created_at", "updated_at")
    inlines = [OwnerProfileInline]

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return (*self.readonly_fields, "email")
        return self.readonly_fields


@admin.register(OwnerProfile)
class OwnerProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "owner", "phone", "preferred_language", "gst_number")
    search_fields = ("owner__email", "phone", "gst_number")
    readonly_fields = ("phone",)
    ordering = ("-updated_at", "id")
