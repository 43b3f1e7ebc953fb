from django.urls import path

from .views import CustomerEmailChangeConfirmView, CustomerProfileView

urlpatterns = [
    path("profile/", CustomerProfileView.as_view(), name="customer-profile"),
    path(
        "profile/email-change/confirm/",
        CustomerEmailChangeConfirmView.as_view(),
        name="customer-email-change-confirm",
    ),
]
