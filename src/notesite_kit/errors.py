# src/notesite_kit/errors.py

"""Exception and warning types raised by notesite-kit.

Parsing never raises. Merge conflicts are warnings. Link problems are
errors and stop the build before anything is rendered.
"""

from collections.abc import Sequence


def format_path(heading_path: Sequence[str]) -> str:
    """Human-readable heading path, e.g. ``Pillars > Encapsulation``."""
    if not heading_path:
        return "(preamble)"
    return " > ".join(heading_path)


class NotesiteError(Exception):
    """Base class for every error raised by notesite-kit."""


class ConfigError(NotesiteError):
    """Invalid or unreadable build configuration."""


class LinkError(NotesiteError):
    """An internal anchor link that cannot be resolved to exactly one section."""

    reason = "unresolvable link"

    def __init__(
        self,
        *,
        slug: str,
        link_text: str,
        heading_path: Sequence[str],
        sources: Sequence[str],
    ) -> None:
        self.slug = slug
        self.link_text = link_text
        self.heading_path = tuple(heading_path)
        self.sources = tuple(sources)
        super().__init__(
            f"{self.reason} '#{slug}' (link text '{link_text}') in section "
            f"'{format_path(self.heading_path)}' from {', '.join(self.sources)}"
        )


class DanglingLinkError(LinkError):
    """The link target slug does not exist."""

    reason = "dangling link"


class AmbiguousLinkError(LinkError):
    """The link target slug matches more than one section."""

    reason = "ambiguous link"


class HighlightError(NotesiteError):
    """A code block could not be highlighted."""


class UnsupportedLanguageError(HighlightError):
    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"No highlighter available for language '{language}'")


class ContentConflictWarning(UserWarning):
    """Sections share a heading path but their bodies diverge.

    Every variant is kept; this only reports the divergence.
    """

    def __init__(
        self,
        heading_path: Sequence[str],
        sources: Sequence[str],
        min_score: float,
    ) -> None:
        self.heading_path = tuple(heading_path)
        self.sources = tuple(sources)
        self.min_score = min_score
        super().__init__(
            f"content conflict in '{format_path(self.heading_path)}' between "
            f"{', '.join(self.sources)} (lowest similarity {min_score:.2f})"
        )
