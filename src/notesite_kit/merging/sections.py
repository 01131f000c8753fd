# merging/sections.py

from notesite_kit.parsers.models import Block, Document, Heading

from .models import Section


def normalize_heading(text: str) -> str:
    return " ".join(text.split()).casefold()


def path_key(heading_path: tuple[str, ...]) -> tuple[str, ...]:
    """Grouping key for a heading path: case-insensitive, whitespace-normalized."""
    return tuple(normalize_heading(part) for part in heading_path)


def split_sections(document: Document) -> list[Section]:
    """Cut a document into sections keyed by their full heading path.

    Walks the blocks top-down with a stack of open headings: a heading pops
    every open heading of equal or deeper level, then pushes itself. Blocks
    before the first heading form a preamble section with an empty path.
    """
    sections: list[Section] = []
    stack: list[Heading] = []
    current: Heading | None = None
    body: list[Block] = []

    def close() -> None:
        if current is None and not body:
            return
        sections.append(
            Section(
                source_id=document.source_id,
                heading=current,
                heading_path=tuple(h.text for h in stack),
                blocks=tuple(body),
            )
        )

    for block in document.blocks:
        if isinstance(block, Heading):
            close()
            while stack and stack[-1].level >= block.level:
                stack.pop()
            stack.append(block)
            current = block
            body = []
        else:
            body.append(block)

    close()
    return sections
