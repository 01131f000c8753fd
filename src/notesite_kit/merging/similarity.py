# merging/similarity.py

"""Token-overlap similarity between section bodies.

Code is compared with comments stripped and whitespace collapsed, so
variants that only reword their comments score as identical.
"""

import re
from collections import Counter
from collections.abc import Iterable

from notesite_kit.parsers.models import Block, CodeBlock, Heading, Link, ListItem, Paragraph

_COMMENT_LINE_RE = re.compile(r"^\s*(?:#|//|--|;|/\*|\*/|\*(?:\s|$))")
_TRAILING_COMMENT_RE = re.compile(r"\s+(?:#|//|--)(?:\s.*)?$")
_TOKEN_RE = re.compile(r"\w+")


def normalize_code(text: str) -> str:
    kept = []
    for line in text.splitlines():
        if not line.strip() or _COMMENT_LINE_RE.match(line):
            continue
        line = _TRAILING_COMMENT_RE.sub("", line)
        kept.append(" ".join(line.split()))
    return "\n".join(kept)


def block_text(block: Block) -> str:
    if isinstance(block, CodeBlock):
        return normalize_code(block.text)
    if isinstance(block, Link):
        return f"{block.text} {block.target}"
    if isinstance(block, (Paragraph, ListItem, Heading)):
        return block.text
    return ""


def body_tokens(blocks: Iterable[Block]) -> Counter[str]:
    tokens: Counter[str] = Counter()
    for block in blocks:
        tokens.update(t.lower() for t in _TOKEN_RE.findall(block_text(block)))
    return tokens


def body_length(blocks: Iterable[Block]) -> int:
    return sum(len(block_text(b)) for b in blocks)


def similarity(a: Iterable[Block], b: Iterable[Block]) -> float:
    """Multiset token overlap in [0, 1]; 1.0 for identical (or both empty) bodies."""
    left = body_tokens(a)
    right = body_tokens(b)
    union = sum((left | right).values())
    if union == 0:
        return 1.0
    return sum((left & right).values()) / union
