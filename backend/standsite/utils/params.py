from flask import request

from standsite.errors import ValidationError


def bool_arg(name, default=None):
    """``?name=true|false``; anything else is a 400, absent gives ``default``."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    raw = raw.lower()
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValidationError(f"{name} must be true or false")


def json_body():
    """The JSON object body of the request; anything else is a 400."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")
    return data


def client_ip():
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or request.remote_addr
