from .base import *  # noqa
from .base import BASE_DIR
from .base import REST_FRAMEWORK as BASE_REST_FRAMEWORK

# Test settings: SQLite by default; set DATABASE_ENGINE=postgres to run the threaded tests
DEBUG = False

if DB_ENGINE.lower() != "postgres":  # noqa: F405
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "test_db.sqlite3",
        }
    }

# Keep console email backend in tests (pytest-django swaps in locmem)
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

FRONTEND_URL = "https://app.example.com"
IDENTITY_TOKEN_SECRET = "test-identity-token-secret-0123456789abcdef"
PHONE_VERIFICATION_SECRET = "test-phone-verification-secret-0123456789"
SIMPLE_JWT = {**SIMPLE_JWT, "SIGNING_KEY": "test-jwt-signing-key-0123456789abcdefghij"}  # noqa: F405

# Slightly relax throttling for tests to reduce flakiness
REST_FRAMEWORK = {**BASE_REST_FRAMEWORK}
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    **BASE_REST_FRAMEWORK.get("DEFAULT_THROTTLE_RATES", {}),
    "user": "10000/min",
    "anon": "10000/min",
    "profile": "10000/min",
    "profile_write": "10000/min",
    "email_change_confirm": "10000/min",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "loggers": {
        "identity": {"handlers": ["null"], "level": "INFO", "propagate": True},
        "profile": {"handlers": ["null"], "level": "INFO", "propagate": True},
    },
}
