import logging

logger = logging.getLogger("profile")


def log_profile_event(action: str, request, identity_id=None, status: str = "success", extra: dict | None = None):
    """Emit a structured profile event with action, role, identity, ip, and status."""
    ip = request.META.get("REMOTE_ADDR")
    payload = {
        "action": action,
        "ip": ip,
        "status": status,
    }
    user = getattr(request, "user", None)
    token = getattr(user, "token", None)
    if token is not None:
        payload["role"] = token.get("role")
    if identity_id is not None:
        payload["identity_id"] = str(identity_id)
    if extra:
        payload.update(extra)
    logger.info(payload)
