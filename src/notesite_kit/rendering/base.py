# rendering/base.py

from dataclasses import dataclass
from typing import Literal, Protocol


@dataclass(frozen=True)
class Page:
    """A rendered artifact, addressed by a path relative to the site root."""

    path: str
    content: bytes
    title: str = ""
    sources: tuple[str, ...] = ()
    kind: Literal["index", "section", "asset"] = "section"


class Highlighter(Protocol):
    """Turns a code block into highlighted HTML.

    Raises HighlightError when the language is not supported; the renderer
    falls back to plain preformatted text.
    """

    def highlight(self, language: str, code: str) -> str: ...

    def stylesheet(self) -> str: ...


class PageSink(Protocol):
    def write(self, page: Page) -> None: ...
