"""URL slugs for public album and profile links."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_SLUG = re.compile(r"^[a-z0-9-]+$")


def create_slug(text: str) -> str:
    """Convert text to a URL-safe slug.

    "My First Album!" becomes "my-first-album".
    """
    slug = _NON_ALNUM.sub("-", text.lower().strip())
    return re.sub(r"-+", "-", slug).strip("-")


def slug_to_readable(slug: str) -> str:
    """Turn a slug back into display text ("my-album" -> "My Album")."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG.match(slug)) and not slug.startswith("-") and not slug.endswith("-")
