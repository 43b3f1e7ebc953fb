"""URL routes for the owner app."""

from django.urls import path

from .views import OwnerEmailChangeConfirmView, OwnerProfileView

urlpatterns = [
    path("profile/", OwnerProfileView.as_view(), name="owner-profile"),
    path(
        "profile/email-change/confirm/",
        OwnerEmailChangeConfirmView.as_view(),
        name="owner-email-change-confirm",
    ),
]
