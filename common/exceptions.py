"""DRF exception handler for identity errors.

Configured as `REST_FRAMEWORK["EXCEPTION_HANDLER"]`. Identity errors render
as `{"detail", "code", "kind"}` with their kind's status; DRF's own
exceptions keep DRF rendering; anything else is logged and reported as a
generic server fault without storage details.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .errors import IdentityError

logger = logging.getLogger("identity")

SERVER_ERROR_BODY = {
    "detail": IdentityError.default_detail,
    "code": IdentityError.code,
    "kind": IdentityError.kind,
}


def api_exception_handler(exc, context):
    if isinstance(exc, IdentityError):
        return Response(
            {"detail": exc.detail, "code": exc.code, "kind": exc.kind},
            status=exc.status_code,
        )

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception(
        "identity.unhandled_error",
        extra={
            "event": "identity.unhandled_error",
            "view": type(view).__name__ if view is not None else None,
            "error": type(exc).__name__,
        },
    )
    return Response(SERVER_ERROR_BODY, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
