import uuid
from urllib.parse import parse_qs, urlparse

import pytest
from customer.models import Customer, CustomerProfile
from customer.tests.factories import CustomerFactory, CustomerProfileFactory
from owner.tests.factories import OwnerProfileFactory

pytestmark = pytest.mark.django_db

PROFILE_URL = "/api/v1/customer/profile/"
CONFIRM_URL = "/api/v1/customer/profile/email-change/confirm/"


@pytest.fixture
def customer_profile():
    return CustomerProfileFactory(customer__email="priya@example.com", phone="919800000001")


@pytest.fixture
def auth_client(api_client, make_access_token, customer_profile):
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_access_token(customer_profile.customer, 'customer')}")
    return api_client


def _token_from(link: str) -> str:
    return parse_qs(urlparse(link).query)["token"][0]


def test_get_profile(auth_client, customer_profile):
    resp = auth_client.get(PROFILE_URL)

    assert resp.status_code == 200
    data = resp.json()["customer"]
    assert data["email"] == "priya@example.com"
    assert data["profile"]["phone"] == "919800000001"


def test_owner_token_is_forbidden(api_client, make_access_token, customer_profile):
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_access_token(customer_profile.customer, 'owner')}")

    resp = api_client.get(PROFILE_URL)

    assert resp.status_code == 403


def test_patch_address_and_clear_it(auth_client, customer_profile):
    resp = auth_client.patch(PROFILE_URL, {"address": "12 Park Street, Kolkata"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["customer"]["profile"]["address"] == "12 Park Street, Kolkata"

    resp = auth_client.patch(PROFILE_URL, {"address": None}, format="json")
    assert resp.status_code == 200
    customer_profile.refresh_from_db()
    assert customer_profile.address is None


def test_owner_only_fields_are_unknown(auth_client):
    resp = auth_client.patch(PROFILE_URL, {"gst_number": "27AAPFU0939F1ZV"}, format="json")

    assert resp.status_code == 400
    assert "gst_number" in resp.json()


def test_country_code_accepts_plus_prefix(auth_client, customer_profile):
    resp = auth_client.patch(PROFILE_URL, {"country_code": "+44"}, format="json")

    assert resp.status_code == 200
    customer_profile.refresh_from_db()
    assert customer_profile.country_code == "44"


def test_phone_change(auth_client, customer_profile, make_phone_token):
    resp = auth_client.patch(
        PROFILE_URL, {"phone_verification_token": make_phone_token(phone="919811112222")}, format="json"
    )

    assert resp.status_code == 200
    assert resp.json()["phone_changed"] is True
    customer_profile.refresh_from_db()
    assert customer_profile.phone == "919811112222"


def test_customer_phone_may_match_an_owner_phone(auth_client, customer_profile, make_phone_token):
    OwnerProfileFactory(phone="919811112222")

    resp = auth_client.patch(
        PROFILE_URL, {"phone_verification_token": make_phone_token(phone="919811112222")}, format="json"
    )

    assert resp.status_code == 200


def test_phone_held_by_another_customer_conflicts(auth_client, make_phone_token):
    CustomerProfileFactory(phone="919811112222")

    resp = auth_client.patch(
        PROFILE_URL, {"phone_verification_token": make_phone_token(phone="919811112222")}, format="json"
    )

    assert resp.status_code == 409
    assert resp.json()["code"] == "phone_in_use"


def test_email_change_uses_customer_route(auth_client, customer_profile, settings):
    resp = auth_client.patch(PROFILE_URL, {"email": "priya.new@example.com"}, format="json")

    assert resp.status_code == 200
    link = resp.json()["email_change_link"]
    assert link.startswith(f"{settings.FRONTEND_URL}/customer/verify-email-change?token=")
    assert Customer.objects.get(pk=customer_profile.customer_id).email == "priya@example.com"


def test_email_change_round_trip(auth_client, api_client, customer_profile):
    resp = auth_client.patch(PROFILE_URL, {"email": "priya.new@example.com"}, format="json")
    token = _token_from(resp.json()["email_change_link"])
    api_client.credentials()

    confirm = api_client.post(CONFIRM_URL, {"token": token}, format="json")

    assert confirm.status_code == 200
    assert confirm.json()["customer"]["email"] == "priya.new@example.com"
    customer = Customer.objects.get(pk=customer_profile.customer_id)
    assert customer.email_verify_version == 2


def test_owner_link_is_rejected_by_customer_confirmation(api_client, make_access_token):
    owner_profile = OwnerProfileFactory()
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_access_token(owner_profile.owner, 'owner')}")
    resp = api_client.patch("/api/v1/owner/profile/", {"email": "switch@example.com"}, format="json")
    token = _token_from(resp.json()["email_change_link"])
    api_client.credentials()

    confirm = api_client.post(CONFIRM_URL, {"token": token}, format="json")

    assert confirm.status_code == 400
    assert confirm.json()["code"] == "malformed_link"


def test_email_may_match_an_owner_email(auth_client, customer_profile):
    OwnerProfileFactory(owner__email="shared@example.com")

    resp = auth_client.patch(PROFILE_URL, {"email": "shared@example.com"}, format="json")

    assert resp.status_code == 200
    assert resp.json()["email_change_link"]


def test_create_profile(api_client, make_access_token, make_phone_token):
    customer = CustomerFactory(is_active=False, is_profile_complete=False)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_access_token(customer, 'customer')}")

    resp = api_client.post(
        PROFILE_URL,
        {
            "phone_verification_token": make_phone_token(phone="919833334444"),
            "photo_url": "https://cdn.example.com/c.jpg",
            "address": "Flat 4B, Indiranagar",
        },
        format="json",
    )

    assert resp.status_code == 201
    profile = CustomerProfile.objects.get(customer=customer)
    assert profile.phone == "919833334444"
    assert profile.address == "Flat 4B, Indiranagar"


def test_create_profile_requires_photo(api_client, make_access_token, make_phone_token):
    customer = CustomerFactory(is_active=False, is_profile_complete=False)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_access_token(customer, 'customer')}")

    resp = api_client.post(PROFILE_URL, {"phone_verification_token": make_phone_token()}, format="json")

    assert resp.status_code == 400
    assert "photo_url" in resp.json()


def test_unknown_customer_is_not_found(api_client, make_access_token):
    ghost = Customer(id=uuid.uuid4(), email="ghost@example.com")
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_access_token(ghost, 'customer')}")

    resp = api_client.patch(PROFILE_URL, {"full_name": "Ghost"}, format="json")

    assert resp.status_code == 404
    assert resp.json()["code"] == "identity_not_found"
