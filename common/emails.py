"""Email utilities for identity flows.

Uses Django's email backend; links are built by the caller.
"""

from django.conf import settings
from django.core.mail import send_mail


def send_email_change_link(new_email: str, link: str) -> None:
    """Send the email-change confirmation link to the requested address."""
    send_mail(
        subject="Confirm your new email address",
        message=(
            "We received a request to change the email address on your account.\n\n"
            f"Confirm the change with this link: {link}\n\n"
            "If you did not request this, you can ignore this email."
        ),
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        recipient_list=[new_email],
        fail_silently=True,
    )
