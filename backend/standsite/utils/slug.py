import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value):
    """
    Normalize a display name into a URL slug.

    "Trade Show 2025" -> "trade-show-2025". Runs of anything that is not
    a lowercase ASCII letter or digit collapse to one hyphen, and leading
    or trailing hyphens are dropped, so slugify(slugify(x)) == slugify(x).
    """
    if value is None:
        return ""
    return _NON_ALNUM.sub("-", str(value).lower()).strip("-")
