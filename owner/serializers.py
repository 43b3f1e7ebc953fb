"""Serializers for owner profiles.

- OwnerSerializer: read-only owner account with nested profile.
- OwnerProfileUpdateSerializer: partial update; absent keys are untouched,
  null clears `short_bio` and the GST/billing block.
- OwnerProfileCreateSerializer: onboarding; requires the phone verification
  token, photo, and preferred language.
"""

from common.choices import PreferredLanguage
from common.serializers import ProfileChangesSerializer
from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers

from .models import GSTIN_VALIDATOR, Owner, OwnerProfile
from .services import OwnerProfileChanges


class OwnerProfileReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = OwnerProfile
        fields = (
            "id",
            "phone",
            "country_code",
            "photo_url",
            "preferred_language",
            "short_bio",
            "gst_number",
            "business_name",
            "billing_address",
            "updated_at",
        )
        read_only_fields = fields


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Owner with profile",
            value={
                "id": "6f1c2b7e-0d4a-4c51-9a57-5b8e3f1d2c90",
                "email": "rahul.sharma@example.com",
                "full_name": "Rahul Sharma",
                "is_active": True,
                "is_profile_complete": True,
                "profile": {
                    "id": 7,
                    "phone": "919876543210",
                    "country_code": "91",
                    "photo_url": "https://cdn.example.com/rahul.jpg",
                    "preferred_language": "EN",
                    "short_bio": "Property owner in Pune.",
                    "gst_number": None,
                    "business_name": None,
                    "billing_address": None,
                    "updated_at": "2026-01-01T12:00:00Z",
                },
            },
            response_only=True,
        )
    ]
)
class OwnerSerializer(serializers.ModelSerializer):
    """Owner account fields plus the profile, or null before onboarding."""

    profile = serializers.SerializerMethodField()

    class Meta:
        model = Owner
        fields = ("id", "email", "full_name", "is_active", "is_profile_complete", "profile")
        read_only_fields = fields

    def get_profile(self, obj: Owner) -> dict | None:
        # Reverse one-to-one raises (an AttributeError) when no profile exists yet
        profile = getattr(obj, "profile", None)
        if profile is None:
            return None
        return OwnerProfileReadSerializer(profile).data


class OwnerProfileUpdateSerializer(ProfileChangesSerializer):
    changes_class = OwnerProfileChanges

    preferred_language = serializers.ChoiceField(choices=PreferredLanguage.choices, required=False)
    short_bio = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=500)
    gst_number = serializers.CharField(
        required=False, allow_null=True, min_length=15, max_length=15, validators=[GSTIN_VALIDATOR]
    )
    business_name = serializers.CharField(required=False, allow_null=True, max_length=200)
    billing_address = serializers.CharField(required=False, allow_null=True, max_length=500)


class OwnerProfileCreateSerializer(OwnerProfileUpdateSerializer):
    phone_verification_token = serializers.CharField()
    photo_url = serializers.URLField(max_length=500)
    preferred_language = serializers.ChoiceField(choices=PreferredLanguage.choices)
    email = None
