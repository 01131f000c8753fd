# src/notesite_kit/slugs.py

import re

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

DEFAULT_SLUG = "section"


def slugify(text: str) -> str:
    """Derive a URL-safe anchor slug from heading text.

    Lowercase, every run of characters outside ``[a-z0-9]`` becomes a
    single hyphen, no leading or trailing hyphens. Idempotent.
    """
    slug = _NON_ALNUM_RE.sub("-", text.lower()).strip("-")
    return slug or DEFAULT_SLUG


class SlugRegistry:
    """Hands out unique slugs in first-seen order.

    A repeated slug gets a numeric suffix (``-1``, ``-2``, ...); a suffixed
    candidate that is already taken is skipped.
    """

    def __init__(self) -> None:
        self._used: set[str] = set()

    def assign(self, text: str) -> str:
        return self.reserve(slugify(text))

    def reserve(self, base: str) -> str:
        """Claim an already-slugified base, suffixing it if taken."""
        candidate = base
        n = 1
        while candidate in self._used:
            candidate = f"{base}-{n}"
            n += 1
        self._used.add(candidate)
        return candidate

    def __contains__(self, slug: str) -> bool:
        return slug in self._used

    def __len__(self) -> int:
        return len(self._used)
