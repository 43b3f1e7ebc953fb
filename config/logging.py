import json
import logging
import re
from datetime import datetime, timezone

_RESERVED_ATTRS = frozenset(
    (
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "created",
        "msecs",
        "relativeCreated",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "exc_info",
        "exc_text",
        "stack_info",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    )
)


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for production logs.

    - Merges base fields (time, level, name, message) with any attributes
      provided via `extra` on the log record (e.g., event, identity_id).
    - If the message is a dict (see `common.logging.log_profile_event`), it
      is merged into the payload under its keys.
    - Dates are ISO-8601 UTC.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
        }

        if isinstance(record.msg, dict):
            payload = {**base, **record.msg}
        else:
            payload = {**base, "message": record.getMessage()}

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            # Only include simple JSON-serializable values
            try:
                json.dumps(value)
                payload.setdefault(key, value)
            except TypeError:
                payload.setdefault(key, str(value))

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


REDACTED = "[redacted]"

# JWTs: three base64url segments separated by dots
_JWT_PATTERN = re.compile(r"eyJ[\w-]*\.[\w-]+\.[\w-]+")


class RedactSecretsFilter(logging.Filter):
    """Mask bearer material before records leave the process.

    - Values under `keys` (in a dict message or in `extra`) are replaced.
    - Anything shaped like a JWT inside string values is replaced, which
      covers email-change links and tokens echoed in messages.
    """

    def __init__(self, keys: list[str] | None = None):
        super().__init__()
        self.keys = set(keys or ["token", "phone_verification_token", "email_change_link", "link", "password"])

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if isinstance(record.msg, dict):
            record.msg = self._scrub_mapping(record.msg)
        elif isinstance(record.msg, str):
            record.msg = _JWT_PATTERN.sub(REDACTED, record.msg)

        for key in list(record.__dict__):
            if key in _RESERVED_ATTRS:
                continue
            value = record.__dict__[key]
            if key in self.keys:
                record.__dict__[key] = REDACTED
            elif isinstance(value, str):
                record.__dict__[key] = _JWT_PATTERN.sub(REDACTED, value)
        return True

    def _scrub_mapping(self, data: dict) -> dict:
        cleaned = {}
        for key, value in data.items():
            if key in self.keys:
                cleaned[key] = REDACTED
            elif isinstance(value, str):
                cleaned[key] = _JWT_PATTERN.sub(REDACTED, value)
            elif isinstance(value, dict):
                cleaned[key] = self._scrub_mapping(value)
            else:
                cleaned[key] = value
        return cleaned
