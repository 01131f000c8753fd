from .base import DocumentParser
from .markdown_parser import MarkdownParser, extract_links, parse_document
from .models import (
    Block,
    CodeBlock,
    Document,
    Heading,
    Link,
    ListItem,
    Paragraph,
    block_links,
    block_to_dict,
)

__all__ = [
    "Block",
    "CodeBlock",
    "Document",
    "DocumentParser",
    "Heading",
    "Link",
    "ListItem",
    "MarkdownParser",
    "Paragraph",
    "block_links",
    "block_to_dict",
    "extract_links",
    "parse_document",
]
