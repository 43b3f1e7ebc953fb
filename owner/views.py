"""Owner profile API views.

Endpoints act on the authenticated owner (`role=owner` access token), except
email-change confirmation, which is reached from an emailed link.
"""

from common.permissions import IsOwner
from common.views import EmailChangeConfirmView, IdentityProfileView
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema, extend_schema_view, inline_serializer
from rest_framework import serializers as rf_serializers

from .serializers import OwnerProfileCreateSerializer, OwnerProfileUpdateSerializer, OwnerSerializer

ERROR_RESPONSE = inline_serializer(
    name="OwnerProfileError",
    fields={
        "detail": rf_serializers.CharField(),
        "code": rf_serializers.CharField(),
        "kind": rf_serializers.CharField(),
    },
)

OWNER_RESPONSE = inline_serializer(
    name="OwnerProfileResponse",
    fields={"detail": rf_serializers.CharField(required=False), "owner": OwnerSerializer()},
)

OWNER_UPDATE_RESPONSE = inline_serializer(
    name="OwnerProfileUpdateResponse",
    fields={
        "detail": rf_serializers.CharField(),
        "owner": OwnerSerializer(),
        "email_change_link": rf_serializers.CharField(allow_null=True),
        "phone_changed": rf_serializers.BooleanField(),
    },
)

UPDATE_DESCRIPTION = (
    "Update the authenticated owner's profile.\n\n"
    "Rules:\n"
    "- Omitted fields are left unchanged; `null` clears `short_bio`, `gst_number`, "
    "`business_name`, and `billing_address`.\n"
    "- A new `email` is not applied directly: a single-use confirmation link is issued "
    "(returned as `email_change_link` and mailed to the new address).\n"
    "- A phone change requires `phone_verification_token` from the OTP verification step.\n"
    "- Email and phone cannot change in the same request.\n\n"
    "Errors: 400 no_changes / mutually_exclusive_change / phone_verification_invalid, "
    "401 phone_verification_expired, 403 inactive_account, 404 identity_not_found / profile_missing, "
    "409 email_in_use / phone_in_use / gst_in_use, 503 phone_verification_unavailable."
)


@extend_schema_view(
    get=extend_schema(
        tags=["Owner Profile"],
        summary="Get current owner's profile",
        responses={200: OWNER_RESPONSE, 404: ERROR_RESPONSE},
    ),
    post=extend_schema(
        tags=["Owner Profile"],
        summary="Create owner profile (onboarding)",
        description=(
            "Create the profile once, using the phone from `phone_verification_token`. "
            "Marks the owner active and profile-complete."
        ),
        request=OwnerProfileCreateSerializer,
        responses={
            201: OWNER_RESPONSE,
            400: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
        },
        examples=[
            OpenApiExample(
                "Create profile",
                value={
                    "phone_verification_token": "<otp-verification-jwt>",
                    "photo_url": "https://cdn.example.com/rahul.jpg",
                    "preferred_language": "EN",
                    "short_bio": "Property owner in Pune.",
                },
                request_only=True,
            )
        ],
    ),
    patch=extend_schema(
        tags=["Owner Profile"],
        summary="Update owner profile",
        description=UPDATE_DESCRIPTION,
        request=OwnerProfileUpdateSerializer,
        responses={
            200: OWNER_UPDATE_RESPONSE,
            400: ERROR_RESPONSE,
            401: ERROR_RESPONSE,
            403: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
            503: ERROR_RESPONSE,
        },
        examples=[
            OpenApiExample("Clear bio", value={"short_bio": None}, request_only=True),
            OpenApiExample("Change email", value={"email": "new.owner@example.com"}, request_only=True),
        ],
    ),
    put=extend_schema(
        tags=["Owner Profile"],
        summary="Update owner profile (same semantics as PATCH)",
        description=UPDATE_DESCRIPTION,
        request=OwnerProfileUpdateSerializer,
        responses={200: OWNER_UPDATE_RESPONSE, 400: ERROR_RESPONSE, 409: ERROR_RESPONSE},
    ),
)
class OwnerProfileView(IdentityProfileView):
    permission_classes = [IsOwner]
    service_app = "owner"
    identity_key = "owner"
    read_serializer_class = OwnerSerializer
    create_serializer_class = OwnerProfileCreateSerializer
    update_serializer_class = OwnerProfileUpdateSerializer


@extend_schema_view(
    post=extend_schema(
        tags=["Owner Profile"],
        summary="Confirm owner email change",
        description=(
            "Apply a pending email change using the token from the emailed link. "
            "Each link works once; requesting a newer link invalidates older ones."
        ),
        responses={
            200: OpenApiResponse(description="Email updated"),
            400: ERROR_RESPONSE,
            401: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
        },
    )
)
class OwnerEmailChangeConfirmView(EmailChangeConfirmView):
    service_app = "owner"
    identity_key = "owner"
    read_serializer_class = OwnerSerializer
