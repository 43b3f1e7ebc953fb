"""Serializers for customer profiles.

Mirrors the owner serializers with the smaller customer field set: the only
customer-specific field is the free-form `address`.
"""

from common.serializers import ProfileChangesSerializer
from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers

from .models import Customer, CustomerProfile
from .services import CustomerProfileChanges


class CustomerProfileReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomerProfile
        fields = ("id", "phone", "country_code", "photo_url", "address", "updated_at")
        read_only_fields = fields


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Customer with profile",
            value={
                "id": "0b6f2e51-3f0c-4a8e-8d7b-2a1f6c9e4d11",
                "email": "priya@example.com",
                "full_name": "Priya Nair",
                "is_active": True,
                "is_profile_complete": True,
                "profile": {
                    "id": 3,
                    "phone": "919812345678",
                    "country_code": "91",
                    "photo_url": "https://cdn.example.com/priya.jpg",
                    "address": "Flat 4B, Indiranagar, Bengaluru",
                    "updated_at": "2026-01-01T12:00:00Z",
                },
            },
            response_only=True,
        )
    ]
)
class CustomerSerializer(serializers.ModelSerializer):
    profile = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = ("id", "email", "full_name", "is_active", "is_profile_complete", "profile")
        read_only_fields = fields

    def get_profile(self, obj: Customer) -> dict | None:
        profile = getattr(obj, "profile", None)
        if profile is None:
            return None
        return CustomerProfileReadSerializer(profile).data


class CustomerProfileUpdateSerializer(ProfileChangesSerializer):
    changes_class = CustomerProfileChanges

    address = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=500)


class CustomerProfileCreateSerializer(CustomerProfileUpdateSerializer):
    phone_verification_token = serializers.CharField()
    photo_url = serializers.URLField(max_length=500)
    email = None
