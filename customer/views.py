"""Customer profile API views."""

from common.permissions import IsCustomer
from common.views import EmailChangeConfirmView, IdentityProfileView
from drf_spectacular.utils import OpenApiExample, extend_schema, extend_schema_view, inline_serializer
from rest_framework import serializers as rf_serializers

from .serializers import CustomerProfileCreateSerializer, CustomerProfileUpdateSerializer, CustomerSerializer

ERROR_RESPONSE = inline_serializer(
    name="CustomerProfileError",
    fields={
        "detail": rf_serializers.CharField(),
        "code": rf_serializers.CharField(),
        "kind": rf_serializers.CharField(),
    },
)

CUSTOMER_RESPONSE = inline_serializer(
    name="CustomerProfileResponse",
    fields={"detail": rf_serializers.CharField(required=False), "customer": CustomerSerializer()},
)

CUSTOMER_UPDATE_RESPONSE = inline_serializer(
    name="CustomerProfileUpdateResponse",
    fields={
        "detail": rf_serializers.CharField(),
        "customer": CustomerSerializer(),
        "email_change_link": rf_serializers.CharField(allow_null=True),
        "phone_changed": rf_serializers.BooleanField(),
    },
)

EMAIL_CONFIRM_RESPONSE = inline_serializer(
    name="CustomerEmailChangeConfirmResponse",
    fields={
        "detail": rf_serializers.CharField(),
        "customer": CustomerSerializer(),
        "email_changed": rf_serializers.BooleanField(),
    },
)


@extend_schema_view(
    get=extend_schema(
        tags=["Customer Profile"],
        summary="Get current customer's profile",
        responses={200: CUSTOMER_RESPONSE, 404: ERROR_RESPONSE},
    ),
    post=extend_schema(
        tags=["Customer Profile"],
        summary="Create customer profile (onboarding)",
        request=CustomerProfileCreateSerializer,
        responses={201: CUSTOMER_RESPONSE, 400: ERROR_RESPONSE, 404: ERROR_RESPONSE, 409: ERROR_RESPONSE},
    ),
    patch=extend_schema(
        tags=["Customer Profile"],
        summary="Update customer profile",
        description=(
            "Partial update. Omitted fields are unchanged and `address: null` clears the address. "
            "A new email issues a confirmation link instead of changing immediately; a phone change "
            "needs `phone_verification_token`. Email and phone cannot change together."
        ),
        request=CustomerProfileUpdateSerializer,
        responses={
            200: CUSTOMER_UPDATE_RESPONSE,
            400: ERROR_RESPONSE,
            401: ERROR_RESPONSE,
            403: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
            503: ERROR_RESPONSE,
        },
        examples=[OpenApiExample("Move house", value={"address": "12 Park Street, Kolkata"}, request_only=True)],
    ),
    put=extend_schema(
        tags=["Customer Profile"],
        summary="Update customer profile (same semantics as PATCH)",
        request=CustomerProfileUpdateSerializer,
        responses={200: CUSTOMER_UPDATE_RESPONSE, 400: ERROR_RESPONSE, 409: ERROR_RESPONSE},
    ),
)
class CustomerProfileView(IdentityProfileView):
    permission_classes = [IsCustomer]
    service_app = "customer"
    identity_key = "customer"
    read_serializer_class = CustomerSerializer
    create_serializer_class = CustomerProfileCreateSerializer
    update_serializer_class = CustomerProfileUpdateSerializer


@extend_schema_view(
    post=extend_schema(
        tags=["Customer Profile"],
        summary="Confirm customer email change",
        responses={200: EMAIL_CONFIRM_RESPONSE, 400: ERROR_RESPONSE, 401: ERROR_RESPONSE, 409: ERROR_RESPONSE},
    )
)
class CustomerEmailChangeConfirmView(EmailChangeConfirmView):
    service_app = "customer"
    identity_key = "customer"
    read_serializer_class = CustomerSerializer
