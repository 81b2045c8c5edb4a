import re

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_uuid(value):
    return bool(value) and bool(UUID_RE.match(value))


def lookup_column(model, id_or_slug):
    """Return the column an id-or-slug path parameter should be matched on."""
    return model.id if is_uuid(id_or_slug) else model.slug
