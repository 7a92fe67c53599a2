import re

_TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(text) -> str:
    """
    Remove simple inline HTML tags from structured-data text and trim it.

    Only meant for the short strings found inside JSON-LD fields
    (e.g. "<p>Mix <b>well</b></p>"), not for sanitizing page bodies.
    """
    if not text:
        return ""
    return _TAG_RE.sub("", str(text)).strip()


def as_text(value) -> str:
    """Coerce a loosely-typed JSON scalar to a string, empty for missing values."""
    if value is None or value == "" or value is False:
        return ""
    return str(value)
