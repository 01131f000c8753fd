# parsers/models.py

from dataclasses import asdict, dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Link:
    text: str
    target: str

    kind: ClassVar[str] = "link"

    @property
    def is_internal(self) -> bool:
        return self.target.startswith("#")

    @property
    def anchor(self) -> str:
        """Target slug without the leading ``#``; empty for external links."""
        return self.target[1:] if self.is_internal else ""


@dataclass(frozen=True)
class Heading:
    """An ATX heading. ``slug`` is the base anchor; the TOC suffixes it on collision."""

    level: int
    text: str
    slug: str

    kind: ClassVar[str] = "heading"


@dataclass(frozen=True)
class Paragraph:
    text: str
    links: tuple[Link, ...] = ()

    kind: ClassVar[str] = "paragraph"


@dataclass(frozen=True)
class ListItem:
    depth: int
    text: str
    ordered: bool = False
    links: tuple[Link, ...] = ()

    kind: ClassVar[str] = "list_item"


@dataclass(frozen=True)
class CodeBlock:
    language: str
    text: str

    kind: ClassVar[str] = "code"


Block = Heading | Paragraph | ListItem | CodeBlock | Link


@dataclass(frozen=True)
class Document:
    source_id: str
    blocks: tuple[Block, ...]

    @property
    def headings(self) -> list[Heading]:
        return [b for b in self.blocks if isinstance(b, Heading)]


def block_links(block: Block) -> tuple[Link, ...]:
    """Every link carried by a block, standalone or inline."""
    if isinstance(block, Link):
        return (block,)
    if isinstance(block, (Paragraph, ListItem)):
        return block.links
    return ()


def block_to_dict(block: Block) -> dict[str, Any]:
    return {"kind": block.kind, **asdict(block)}
