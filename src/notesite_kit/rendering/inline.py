# rendering/inline.py

"""Python-Markdown setup for paragraph and list-item text.

Block structure (headings, fences, lists) is already decided by the parser,
so only inline markup is left to markdown. Raw HTML in notes is escaped
rather than passed through.
"""

import logging
from collections.abc import Callable
from xml.etree import ElementTree as ET

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

logger = logging.getLogger(__name__)

AnchorResolver = Callable[[str], str | None]


class AnchorLinkProcessor(Treeprocessor):
    """Rewrites ``#slug`` hrefs to the page that renders the slug."""

    def __init__(self, md: markdown.Markdown) -> None:
        super().__init__(md)
        self.resolve: AnchorResolver | None = None

    def run(self, root: ET.Element) -> None:
        if self.resolve is None:
            return
        for element in root.iter("a"):
            href = element.get("href", "")
            if not href.startswith("#"):
                continue
            resolved = self.resolve(href[1:])
            if resolved is None:
                logger.debug("Leaving unresolved anchor %s as-is", href)
                continue
            element.set("href", resolved)


class AnchorLinkExtension(Extension):
    def extendMarkdown(self, md: markdown.Markdown) -> None:
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # after the inline processor (priority 20) has created the <a> elements
        md.treeprocessors.register(AnchorLinkProcessor(md), "anchor_links", 8)


class InlineRenderer:
    """Converts note text to HTML with one reusable ``markdown.Markdown``."""

    def __init__(self) -> None:
        self._md = markdown.Markdown(extensions=[AnchorLinkExtension()])
        self._anchors: AnchorLinkProcessor = self._md.treeprocessors["anchor_links"]

    def convert(self, text: str, resolve: AnchorResolver | None = None) -> str:
        self._anchors.resolve = resolve
        try:
            return self._md.reset().convert(text)
        finally:
            self._anchors.resolve = None

    def convert_inline(self, text: str, resolve: AnchorResolver | None = None) -> str:
        """Like :meth:`convert`, without the wrapping ``<p>`` of a single paragraph."""
        html = self.convert(text, resolve)
        if html.startswith("<p>") and html.endswith("</p>") and html.count("<p>") == 1:
            return html[3:-4]
        return html
