import uuid
from datetime import timedelta
from urllib.parse import parse_qs, urlparse

import pytest
from common.email_change import EmailChangeConfirmation
from common.errors import (
    EmailInUse,
    EmailMismatch,
    IdentityNotFound,
    InvalidOrExpiredLink,
    MalformedLink,
    StaleLink,
)
from owner.models import Owner
from owner.services import OwnerProfileChanges, confirm_owner_email_change, update_owner_profile
from owner.tests.factories import OwnerFactory, OwnerProfileFactory

pytestmark = pytest.mark.django_db


def _token_from(link: str) -> str:
    return parse_qs(urlparse(link).query)["token"][0]


def _request_email_change(owner_id, new_email: str) -> str:
    result = update_owner_profile(owner_id, OwnerProfileChanges(email=new_email))
    return _token_from(result.email_change_link)


def test_confirm_applies_new_email_and_retires_link():
    profile = OwnerProfileFactory(owner__email="old@example.com")
    token = _request_email_change(profile.owner_id, "new@example.com")

    result = confirm_owner_email_change(token)

    assert result.email_changed is True
    assert result.identity.email == "new@example.com"
    owner = Owner.objects.get(pk=profile.owner_id)
    assert owner.email == "new@example.com"
    assert owner.email_verify_version == 2


def test_link_cannot_be_replayed():
    profile = OwnerProfileFactory()
    token = _request_email_change(profile.owner_id, "new@example.com")
    confirm_owner_email_change(token)

    with pytest.raises(StaleLink):
        confirm_owner_email_change(token)

    assert Owner.objects.get(pk=profile.owner_id).email_verify_version == 2


def test_newer_request_supersedes_older_link():
    profile = OwnerProfileFactory(owner__email="old@example.com")
    first = _request_email_change(profile.owner_id, "first@example.com")
    second = _request_email_change(profile.owner_id, "second@example.com")

    with pytest.raises(StaleLink):
        confirm_owner_email_change(first)

    result = confirm_owner_email_change(second)
    assert result.identity.email == "second@example.com"
    assert result.identity.email_verify_version == 3


def test_expired_link_is_rejected(sign_identity_token):
    owner = OwnerFactory(email="old@example.com", email_verify_version=1)
    token = sign_identity_token(
        {
            "purpose": "email_change",
            "kind": "owner",
            "sub": str(owner.id),
            "new_email": "new@example.com",
            "old_email": "old@example.com",
            "version": 1,
        },
        expires_in=timedelta(minutes=-1),
    )

    with pytest.raises(InvalidOrExpiredLink):
        confirm_owner_email_change(token)


def test_link_signed_with_another_secret_is_rejected(sign_identity_token):
    owner = OwnerFactory(email="old@example.com", email_verify_version=1)
    token = sign_identity_token(
        {
            "purpose": "email_change",
            "kind": "owner",
            "sub": str(owner.id),
            "new_email": "new@example.com",
            "old_email": "old@example.com",
            "version": 1,
        },
        secret="x" * 40,
    )

    with pytest.raises(InvalidOrExpiredLink):
        confirm_owner_email_change(token)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidOrExpiredLink):
        confirm_owner_email_change("not-a-jwt")


def test_empty_token_is_malformed():
    with pytest.raises(MalformedLink):
        confirm_owner_email_change("")


@pytest.mark.parametrize(
    "overrides",
    [
        {"purpose": "password_reset"},
        {"kind": "customer"},
        {"new_email": None},
        {"version": "1"},
    ],
)
def test_token_with_wrong_claims_is_malformed(sign_identity_token, overrides):
    owner = OwnerFactory(email="old@example.com", email_verify_version=1)
    payload = {
        "purpose": "email_change",
        "kind": "owner",
        "sub": str(owner.id),
        "new_email": "new@example.com",
        "old_email": "old@example.com",
        "version": 1,
        **overrides,
    }

    with pytest.raises(MalformedLink):
        confirm_owner_email_change(sign_identity_token(payload))


def test_email_taken_after_link_was_issued_conflicts():
    profile = OwnerProfileFactory(owner__email="old@example.com")
    token = _request_email_change(profile.owner_id, "new@example.com")
    OwnerFactory(email="new@example.com")

    with pytest.raises(EmailInUse):
        confirm_owner_email_change(token)

    owner = Owner.objects.get(pk=profile.owner_id)
    assert owner.email == "old@example.com"
    assert owner.email_verify_version == 1


def test_email_changed_elsewhere_is_a_mismatch():
    profile = OwnerProfileFactory(owner__email="old@example.com")
    token = _request_email_change(profile.owner_id, "new@example.com")
    Owner.objects.filter(pk=profile.owner_id).update(email="admin-set@example.com")

    with pytest.raises(EmailMismatch):
        confirm_owner_email_change(token)


def test_deleted_owner_is_not_found(sign_identity_token):
    token = sign_identity_token(
        {
            "purpose": "email_change",
            "kind": "owner",
            "sub": str(uuid.uuid4()),
            "new_email": "new@example.com",
            "old_email": "old@example.com",
            "version": 1,
        }
    )

    with pytest.raises(IdentityNotFound):
        confirm_owner_email_change(token)


def test_email_unique_constraint_maps_to_email_in_use(monkeypatch):
    profile = OwnerProfileFactory(owner__email="old@example.com")
    token = _request_email_change(profile.owner_id, "new@example.com")
    OwnerFactory(email="new@example.com")
    monkeypatch.setattr(EmailChangeConfirmation, "_email_taken", lambda self, identity_id, email: False)

    with pytest.raises(EmailInUse):
        confirm_owner_email_change(token)

    owner = Owner.objects.get(pk=profile.owner_id)
    assert owner.email == "old@example.com"
    assert owner.email_verify_version == 1
