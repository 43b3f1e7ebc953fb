"""Base API views for identity profiles.

Concrete apps subclass these, point them at their app config (which owns the
`IdentityProfileService` built at startup) and their serializers, and add
schema documentation. Views stay thin: validation in serializers, rules in
the service, error rendering in `common.exceptions`.
"""

from django.apps import apps
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .errors import IdentityError
from .logging import log_profile_event
from .serializers import EmailChangeConfirmSerializer


class IdentityServiceMixin:
    service_app: str = ""
    identity_key: str = "identity"
    read_serializer_class = None

    @property
    def service(self):
        return apps.get_app_config(self.service_app).profile_service

    def render_identity(self, identity) -> dict:
        return self.read_serializer_class(identity).data


class IdentityProfileView(IdentityServiceMixin, APIView):
    """Fetch, create (onboarding) and update the caller's own profile."""

    throttle_scope = "profile"
    write_throttle_scope = "profile_write"
    create_serializer_class = None
    update_serializer_class = None

    def get_throttles(self):
        if self.request.method not in ("GET", "HEAD", "OPTIONS"):
            self.throttle_scope = self.write_throttle_scope
        return super().get_throttles()

    def get(self, request):
        identity = self.service.get(request.user.id)
        log_profile_event("profile_get", request, identity_id=identity.pk)
        return Response({self.identity_key: self.render_identity(identity)})

    def post(self, request):
        serializer = self.create_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            identity = self.service.create_profile(request.user.id, serializer.to_changes())
        except IdentityError as exc:
            log_profile_event("profile_create", request, identity_id=request.user.id, status=exc.code)
            raise
        log_profile_event("profile_create", request, identity_id=identity.pk)
        return Response(
            {"detail": "Profile created.", self.identity_key: self.render_identity(identity)},
            status=status.HTTP_201_CREATED,
        )

    def patch(self, request):
        serializer = self.update_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = self.service.update(request.user.id, serializer.to_changes())
        except IdentityError as exc:
            log_profile_event("profile_update", request, identity_id=request.user.id, status=exc.code)
            raise

        detail = "Profile updated."
        if result.email_change_link:
            detail = "Profile updated. Confirm the new email address using the link sent to it."
        elif result.phone_changed:
            detail = "Profile updated. Phone number changed."
        log_profile_event(
            "profile_update",
            request,
            identity_id=result.identity.pk,
            extra={"phone_changed": result.phone_changed, "email_change_requested": bool(result.email_change_link)},
        )
        return Response(
            {
                "detail": detail,
                self.identity_key: self.render_identity(result.identity),
                "email_change_link": result.email_change_link,
                "phone_changed": result.phone_changed,
            }
        )

    def put(self, request):
        # Same partial semantics as PATCH: absent fields are left unchanged.
        return self.patch(request)


class EmailChangeConfirmView(IdentityServiceMixin, APIView):
    """Confirm an email change from the emailed link; no session required."""

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_scope = "email_change_confirm"

    def post(self, request):
        data = request.data
        # Links may be replayed by the frontend as-is, with the token in the query string
        if "token" not in data and "token" in request.query_params:
            data = {"token": request.query_params["token"]}
        serializer = EmailChangeConfirmSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        try:
            result = self.service.confirm_email_change(serializer.validated_data["token"])
        except IdentityError as exc:
            log_profile_event("email_change_confirm", request, status=exc.code)
            raise
        log_profile_event("email_change_confirm", request, identity_id=result.identity.pk)
        return Response(
            {
                "detail": "Email updated.",
                self.identity_key: self.render_identity(result.identity),
                "email_changed": result.email_changed,
            }
        )
