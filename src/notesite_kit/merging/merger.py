# merging/merger.py

import logging
import warnings
from collections.abc import Sequence
from itertools import combinations
from time import monotonic

from notesite_kit.errors import ContentConflictWarning, format_path
from notesite_kit.observability import names
from notesite_kit.observability.base import MetricsHook, NoOpMetricsHook
from notesite_kit.parsers.models import Document

from .models import CanonicalDocument, CanonicalSection, Section, SectionVariant, SourceScore
from .sections import path_key, split_sections
from .similarity import body_length, similarity

logger = logging.getLogger(__name__)

DEFAULT_DUPLICATE_THRESHOLD = 0.85


class SectionMerger:
    """Merges sections that share a heading path across documents.

    - All pairwise scores >= threshold: duplicates, one variant is kept
    - Any pair below threshold: conflict, every variant is kept
    - Output order follows first-seen heading path order
    """

    def __init__(
        self,
        duplicate_threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if not 0.0 <= duplicate_threshold <= 1.0:
            raise ValueError("duplicate_threshold must be between 0 and 1")
        self.duplicate_threshold = duplicate_threshold
        self.metrics_hook = metrics_hook

    def merge(self, documents: Sequence[Document]) -> CanonicalDocument:
        start = monotonic()
        groups: dict[tuple[str, ...], list[Section]] = {}
        for document in documents:
            for section in split_sections(document):
                groups.setdefault(path_key(section.heading_path), []).append(section)

        merged: list[CanonicalSection] = []
        conflicts: list[ContentConflictWarning] = []
        for members in groups.values():
            section, conflict = self._merge_group(members)
            merged.append(section)
            if conflict is not None:
                conflicts.append(conflict)

        sources = tuple(sorted({d.source_id for d in documents}))
        canonical = CanonicalDocument(
            sections=tuple(merged),
            sources=sources,
            conflicts=tuple(conflicts),
        )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.MERGE_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.MERGE_SECTIONS_TOTAL, len(merged))
        self.metrics_hook.increment(names.MERGE_CONFLICTS_TOTAL, len(conflicts))
        logger.info(
            "Merged %d documents into %d sections (%d conflicts)",
            len(documents),
            len(merged),
            len(conflicts),
        )
        return canonical

    def _merge_group(
        self, members: list[Section]
    ) -> tuple[CanonicalSection, ContentConflictWarning | None]:
        sources = tuple(sorted({m.source_id for m in members}))

        scores = [similarity(a.blocks, b.blocks) for a, b in combinations(members, 2)]
        min_score = min(scores, default=1.0)

        if min_score >= self.duplicate_threshold:
            # sorted() is stable, so first-seen breaks the remaining ties
            ranked = sorted(members, key=lambda m: (m.source_id, -body_length(m.blocks)))
            chosen = ranked[0]
            if len(members) > 1:
                self.metrics_hook.increment(names.MERGE_DUPLICATES_TOTAL, len(members) - 1)
                logger.debug(
                    "Collapsed %d duplicates of '%s', keeping %s",
                    len(members),
                    format_path(chosen.heading_path),
                    chosen.source_id,
                )
            return (
                CanonicalSection(
                    heading_path=chosen.heading_path,
                    heading=chosen.heading,
                    variants=(SectionVariant(source_id=chosen.source_id, blocks=chosen.blocks),),
                    sources=sources,
                    scores=tuple(
                        SourceScore(m.source_id, similarity(chosen.blocks, m.blocks))
                        for m in ranked[1:]
                    ),
                ),
                None,
            )

        ordered = sorted(members, key=lambda m: m.source_id)
        first = ordered[0]
        variants = tuple(
            SectionVariant(
                source_id=m.source_id,
                blocks=m.blocks,
                score=1.0 if m is first else similarity(first.blocks, m.blocks),
            )
            for m in ordered
        )
        conflict = ContentConflictWarning(first.heading_path, sources, min_score)
        logger.warning("%s", conflict)
        warnings.warn(conflict, stacklevel=3)
        return (
            CanonicalSection(
                heading_path=first.heading_path,
                heading=first.heading,
                variants=variants,
                sources=sources,
                scores=tuple(SourceScore(v.source_id, v.score) for v in variants[1:]),
                conflict=True,
            ),
            conflict,
        )


def merge(
    documents: Sequence[Document],
    *,
    duplicate_threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> CanonicalDocument:
    return SectionMerger(duplicate_threshold, metrics_hook).merge(documents)
