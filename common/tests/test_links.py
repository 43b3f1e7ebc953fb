from common.links import build_frontend_url


def test_trailing_slash_is_trimmed_and_query_encoded():
    url = build_frontend_url("/verify-email-change", {"token": "a.b+c/d="}, base="https://app.example.com/")

    assert url == "https://app.example.com/verify-email-change?token=a.b%2Bc%2Fd%3D"


def test_without_query():
    assert build_frontend_url("/customer/verify-email-change", base="https://x.test") == (
        "https://x.test/customer/verify-email-change"
    )


def test_defaults_to_frontend_url_setting(settings):
    settings.FRONTEND_URL = "https://front.example.com//"

    assert build_frontend_url("/p", {"k": "v"}) == "https://front.example.com/p?k=v"
