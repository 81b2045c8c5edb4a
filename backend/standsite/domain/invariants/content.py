import re
from standsite.errors import ValidationError

COLOR_RE = re.compile(
    r"^(#([0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})|rgba?\([0-9.,%\s]+\))$"
)
URL_PREFIXES = ("http://", "https://", "/", "mailto:", "tel:", "#")
STRING_KINDS = ("text", "richtext", "url", "color")


def field_label(name):
    return name.replace("_", " ").capitalize()


def assert_known_fields(fields, payload):
    known = {f.name for f in fields}
    for name in payload:
        if name not in known:
            raise ValidationError(f"Unknown field: {name}")


def assert_field_value(field, value):
    """Type check one value. None is always accepted here; presence is checked separately."""
    if value is None:
        return

    label = field_label(field.name)

    if field.kind in STRING_KINDS:
        if not isinstance(value, str):
            raise ValidationError(f"{label} must be a string")
        if field.kind == "color" and value and not COLOR_RE.match(value):
            raise ValidationError(f"{label} must be a color such as #a5cd39")
        if field.kind == "url" and value and not value.startswith(URL_PREFIXES):
            raise ValidationError(f"{label} must be an absolute URL or a site path")
        return

    if field.kind == "bool":
        if not isinstance(value, bool):
            raise ValidationError(f"{label} must be true or false")
        return

    if field.kind == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{label} must be an integer")
        return

    if field.kind == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{label} must be a number")
        return

    if field.kind == "list":
        if not isinstance(value, list):
            raise ValidationError(f"{label} must be a list")
        return

    if field.kind == "choice":
        if value not in field.choices:
            raise ValidationError(f"{label} must be one of: {', '.join(field.choices)}")


def assert_required(fields, content):
    for field in fields:
        if not field.required:
            continue
        value = content.get(field.name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field_label(field.name)} is required")


def validate_content(fields, payload, base=None):
    """
    Merge ``payload`` over ``base`` and check the result against ``fields``.

    Strings are stored exactly as sent: whitespace-only values fail the
    required check, but nothing is trimmed.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body")

    assert_known_fields(fields, payload)

    by_name = {f.name: f for f in fields}
    for name, value in payload.items():
        assert_field_value(by_name[name], value)

    content = dict(base or {})
    content.update(payload)
    assert_required(fields, content)
    return content
