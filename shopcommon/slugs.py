"""URL slug helpers shared by the catalog and its tooling."""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9 -]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(name: str) -> str:
    """Return a URL-safe slug for ``name``.

    ``"Home & Kitchen Set"`` becomes ``"home-kitchen-set"``. The result may be
    empty when ``name`` has no ASCII letters, digits or spaces.
    """

    value = _DISALLOWED.sub("", (name or "").lower())
    value = _WHITESPACE.sub("-", value)
    value = _HYPHENS.sub("-", value)
    return value.strip("-")
