# merging/models.py

import json
from dataclasses import asdict, dataclass
from typing import Any

from notesite_kit.errors import ContentConflictWarning
from notesite_kit.parsers.models import Block, Heading, block_to_dict


@dataclass(frozen=True)
class Section:
    """A heading and the blocks up to the next heading, from one document."""

    source_id: str
    heading: Heading | None
    heading_path: tuple[str, ...]
    blocks: tuple[Block, ...]

    @property
    def depth(self) -> int:
        return len(self.heading_path)


@dataclass(frozen=True)
class SourceScore:
    source_id: str
    score: float


@dataclass(frozen=True)
class SectionVariant:
    source_id: str
    blocks: tuple[Block, ...]
    score: float = 1.0  # similarity to the first variant


@dataclass(frozen=True)
class CanonicalSection:
    """One merged section per unique heading path.

    Duplicates collapse into a single variant. A content conflict keeps
    every variant, each tagged with its source.
    """

    heading_path: tuple[str, ...]
    heading: Heading | None
    variants: tuple[SectionVariant, ...]
    sources: tuple[str, ...]
    scores: tuple[SourceScore, ...] = ()
    conflict: bool = False

    @property
    def title(self) -> str:
        return self.heading.text if self.heading else ""

    @property
    def depth(self) -> int:
        return len(self.heading_path)

    @property
    def blocks(self) -> tuple[Block, ...]:
        return self.variants[0].blocks

    def iter_blocks(self) -> list[Block]:
        return [block for variant in self.variants for block in variant.blocks]

    def to_dict(self) -> dict[str, Any]:
        return {
            "heading_path": list(self.heading_path),
            "heading": asdict(self.heading) if self.heading else None,
            "conflict": self.conflict,
            "sources": list(self.sources),
            "scores": [
                {"source_id": s.source_id, "score": round(s.score, 6)}
                for s in self.scores
            ],
            "variants": [
                {
                    "source_id": v.source_id,
                    "score": round(v.score, 6),
                    "blocks": [block_to_dict(b) for b in v.blocks],
                }
                for v in self.variants
            ],
        }


@dataclass(frozen=True)
class CanonicalDocument:
    """The single merged document built from every input note.

    Immutable; re-merging the same inputs yields an identical ``to_json()``.
    """

    sections: tuple[CanonicalSection, ...]
    sources: tuple[str, ...]
    conflicts: tuple[ContentConflictWarning, ...] = ()

    def get(self, heading_path: tuple[str, ...]) -> CanonicalSection:
        for section in self.sections:
            if section.heading_path == heading_path:
                return section
        raise KeyError(f"Section '{' > '.join(heading_path)}' not found")

    def to_dict(self) -> dict[str, Any]:
        return {
            "sources": list(self.sources),
            "sections": [s.to_dict() for s in self.sections],
            "conflicts": [
                {
                    "heading_path": list(c.heading_path),
                    "sources": list(c.sources),
                    "min_score": round(c.min_score, 6),
                }
                for c in self.conflicts
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, indent=2, ensure_ascii=False)
