"""Frontend link helpers for token-based flows."""

from urllib.parse import urlencode

from django.conf import settings


def build_frontend_url(path: str, query: dict | None = None, base: str | None = None) -> str:
    """Construct a full frontend URL for the given path and query.

    Uses `base` when given, otherwise `FRONTEND_URL` from settings; trailing
    slashes are trimmed and query parameters are urlencoded.
    """
    if base is None:
        base = getattr(settings, "FRONTEND_URL", None) or ""
    base = base.rstrip("/")
    url = f"{base}{path}"
    if query:
        url = f"{url}?{urlencode(query)}"
    return url
