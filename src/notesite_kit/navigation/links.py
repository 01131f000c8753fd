# navigation/links.py

import logging
from collections import Counter
from dataclasses import dataclass
from time import monotonic

from notesite_kit.errors import AmbiguousLinkError, DanglingLinkError, LinkError
from notesite_kit.merging.models import CanonicalDocument, CanonicalSection
from notesite_kit.merging.sections import path_key
from notesite_kit.observability import names
from notesite_kit.observability.base import MetricsHook, NoOpMetricsHook
from notesite_kit.parsers.models import block_links

from .toc import TocNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkTarget:
    slug: str
    title: str
    heading_path: tuple[str, ...]
    section: CanonicalSection
    source_id: str | None = None


class LinkTable:
    """Read-only mapping from anchor slug to the section it names."""

    def __init__(self, targets: dict[str, LinkTarget]) -> None:
        self._targets = dict(targets)

    def get(self, slug: str) -> LinkTarget:
        try:
            return self._targets[slug]
        except KeyError:
            raise KeyError(f"Slug '{slug}' not found")

    def __contains__(self, slug: object) -> bool:
        return slug in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def slugs(self) -> list[str]:
        return list(self._targets)


def find_link_errors(canonical: CanonicalDocument, toc: TocNode) -> list[LinkError]:
    """Every internal link that does not match exactly one slug."""
    counts = Counter(node.slug for node in toc.walk() if not node.is_root)
    errors: list[LinkError] = []

    for section in canonical.sections:
        for variant in section.variants:
            sources = (variant.source_id,) if section.conflict else section.sources
            for block in variant.blocks:
                for link in block_links(block):
                    if not link.is_internal:
                        continue
                    matches = counts[link.anchor]
                    if matches == 1:
                        continue
                    error_type = DanglingLinkError if matches == 0 else AmbiguousLinkError
                    errors.append(
                        error_type(
                            slug=link.anchor,
                            link_text=link.text,
                            heading_path=section.heading_path,
                            sources=sources,
                        )
                    )
    return errors


def resolve_links(
    canonical: CanonicalDocument,
    toc: TocNode,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LinkTable:
    """Build the link table, failing on any dangling or ambiguous link.

    Every problem is logged before the first one is raised.

    Raises:
        DanglingLinkError: A link names a slug that does not exist.
        AmbiguousLinkError: A link names a slug held by several sections.
    """
    start = monotonic()
    errors = find_link_errors(canonical, toc)
    if errors:
        for error in errors:
            logger.error("%s", error)
        metrics_hook.increment(names.LINK_ERRORS_TOTAL, len(errors))
        raise errors[0]

    sections = {path_key(s.heading_path): s for s in canonical.sections}
    targets: dict[str, LinkTarget] = {}
    for node in toc.walk():
        if node.is_root:
            continue
        targets[node.slug] = LinkTarget(
            slug=node.slug,
            title=node.title,
            heading_path=node.heading_path,
            section=sections[path_key(node.heading_path)],
            source_id=node.source_id,
        )

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.LINK_RESOLUTION_DURATION, elapsed_ms)
    metrics_hook.increment(names.LINKS_RESOLVED_TOTAL, len(targets))
    logger.info("Resolved %d link targets", len(targets))
    return LinkTable(targets)
