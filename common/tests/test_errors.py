import logging

import pytest
from common.errors import (
    EmailInUse,
    GstInUse,
    IdentityError,
    PhoneInUse,
    PhoneVerificationUnavailable,
    ProfileAlreadyComplete,
    StaleLink,
    UniqueConflict,
    conflict_from_integrity_error,
)
from common.exceptions import SERVER_ERROR_BODY, api_exception_handler
from django.db import IntegrityError
from rest_framework import exceptions as drf_exceptions


@pytest.mark.parametrize(
    "message, expected",
    [
        ("UNIQUE constraint failed: owner_ownerprofile.phone", PhoneInUse),
        ("UNIQUE constraint failed: owner_ownerprofile.gst_number", GstInUse),
        ("UNIQUE constraint failed: customer_customer.email", EmailInUse),
        ("UNIQUE constraint failed: customer_customerprofile.customer_id", ProfileAlreadyComplete),
        (
            'duplicate key value violates unique constraint "owner_ownerprofile_phone_key"\n'
            "DETAIL:  Key (phone)=(919876543210) already exists.",
            PhoneInUse,
        ),
        (
            'duplicate key value violates unique constraint "owner_owner_email_key"\n'
            "DETAIL:  Key (email)=(phone@example.com) already exists.",
            EmailInUse,
        ),
        ("something unexpected", UniqueConflict),
    ],
)
def test_integrity_errors_map_to_conflicts(message, expected):
    error = conflict_from_integrity_error(IntegrityError(message))

    assert type(error) is expected
    assert error.status_code == 409


def test_error_kinds_and_statuses():
    assert StaleLink.kind == "bad_request"
    assert StaleLink.status_code == 400
    assert PhoneVerificationUnavailable.status_code == 503
    assert StaleLink("custom").detail == "custom"
    assert StaleLink().detail == StaleLink.default_detail


def test_handler_renders_identity_errors():
    response = api_exception_handler(PhoneInUse(), {})

    assert response.status_code == 409
    assert response.data == {"detail": "Phone number already in use.", "code": "phone_in_use", "kind": "conflict"}


def test_handler_keeps_drf_rendering():
    response = api_exception_handler(drf_exceptions.ValidationError({"email": ["Enter a valid email address."]}), {})

    assert response.status_code == 400
    assert response.data == {"email": ["Enter a valid email address."]}


def test_handler_hides_unexpected_errors(caplog):
    with caplog.at_level(logging.ERROR, logger="identity"):
        response = api_exception_handler(RuntimeError("connection to db-7 refused"), {"view": None})

    assert response.status_code == 500
    assert response.data == SERVER_ERROR_BODY
    assert "db-7" not in str(response.data)
    assert any(r.getMessage() == "identity.unhandled_error" for r in caplog.records)


def test_base_error_is_a_server_error():
    assert IdentityError().status_code == 500
