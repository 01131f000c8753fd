# parsers/markdown_parser.py

import logging
import re
from time import monotonic

from notesite_kit.observability import names
from notesite_kit.observability.base import MetricsHook, NoOpMetricsHook
from notesite_kit.slugs import slugify

from .base import DocumentParser
from .models import Block, CodeBlock, Document, Heading, Link, ListItem, Paragraph

logger = logging.getLogger(__name__)

MAX_HEADING_LEVEL = 6

_HEADING_RE = re.compile(r"^ {0,3}(#+)(?:[ \t]+(.*?))?[ \t]*$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*(\S*)")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_LIST_RE = re.compile(r"^([ \t]*)([-*+]|\d{1,9}[.)])[ \t]+(.*)$")
_LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]+)(?:[ \t]+\"[^\"]*\")?\)")
_LINK_LINE_RE = re.compile(r"^[ \t]*" + _LINK_RE.pattern + r"[ \t]*$")
_CODE_SPAN_RE = re.compile(r"(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)", re.DOTALL)


def mask_code_spans(text: str) -> str:
    """Blank out inline code spans, keeping offsets, so their contents are not parsed."""
    return _CODE_SPAN_RE.sub(lambda m: " " * len(m.group(0)), text)


def extract_links(text: str) -> tuple[Link, ...]:
    return tuple(
        Link(text=m.group(1), target=m.group(2))
        for m in _LINK_RE.finditer(mask_code_spans(text))
    )


class MarkdownParser(DocumentParser):
    """
    Best-effort parser for hand-written markdown notes.
    - ATX headings, fenced code, bullet/numbered lists, inline links
    - Anything unrecognized is kept verbatim as paragraph text
    - Unterminated fences run to end of input
    """

    def __init__(self, metrics_hook: MetricsHook = NoOpMetricsHook()) -> None:
        self.metrics_hook = metrics_hook

    def parse(self, source: str, *, source_id: str = "<string>") -> Document:
        start = monotonic()
        lines = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        blocks: list[Block] = []
        paragraph: list[str] = []

        def flush_paragraph() -> None:
            if paragraph:
                text = "\n".join(paragraph)
                blocks.append(Paragraph(text=text, links=extract_links(text)))
                paragraph.clear()

        i = 0
        while i < len(lines):
            line = lines[i]

            fence = _FENCE_OPEN_RE.match(line)
            if fence:
                flush_paragraph()
                marker = fence.group(1)
                body: list[str] = []
                i += 1
                while i < len(lines) and not self._closes_fence(lines[i], marker):
                    body.append(lines[i])
                    i += 1
                if i >= len(lines):
                    logger.debug(
                        "Unterminated code fence in %s, closing at end of input",
                        source_id,
                    )
                i += 1
                blocks.append(CodeBlock(language=fence.group(2), text="\n".join(body)))
                continue

            i += 1

            if not line.strip():
                flush_paragraph()
                continue

            heading = self._parse_heading(line)
            if heading is not None:
                flush_paragraph()
                blocks.append(heading)
                continue

            item = _LIST_RE.match(line)
            if item:
                flush_paragraph()
                indent, marker, text = item.groups()
                blocks.append(
                    ListItem(
                        depth=len(indent.expandtabs(4)) // 2,
                        text=text.rstrip(),
                        ordered=marker[0].isdigit(),
                        links=extract_links(text),
                    )
                )
                continue

            link = _LINK_LINE_RE.match(line)
            if link and not paragraph:
                blocks.append(Link(text=link.group(1), target=link.group(2)))
                continue

            paragraph.append(line.rstrip())

        flush_paragraph()

        document = Document(source_id=source_id, blocks=tuple(blocks))
        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.PARSE_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.PARSE_DOCUMENTS_TOTAL)
        self.metrics_hook.increment(names.PARSE_BLOCKS_TOTAL, len(blocks))
        logger.debug("Parsed %s into %d blocks", source_id, len(blocks))
        return document

    def _parse_heading(self, line: str) -> Heading | None:
        match = _HEADING_RE.match(line)
        if not match:
            return None
        text = _CLOSING_HASHES_RE.sub("", match.group(2) or "").strip()
        if not text:
            return None
        level = min(len(match.group(1)), MAX_HEADING_LEVEL)
        return Heading(level=level, text=text, slug=slugify(text))

    @staticmethod
    def _closes_fence(line: str, marker: str) -> bool:
        match = _FENCE_CLOSE_RE.match(line)
        if not match:
            return False
        closing = match.group(1)
        return closing[0] == marker[0] and len(closing) >= len(marker)


def parse_document(text: str, source_id: str = "<string>") -> Document:
    return MarkdownParser().parse(text, source_id=source_id)
