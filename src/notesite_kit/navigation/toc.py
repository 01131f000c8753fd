# navigation/toc.py

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from notesite_kit.merging.models import CanonicalDocument, CanonicalSection
from notesite_kit.merging.sections import path_key
from notesite_kit.slugs import SlugRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TocNode:
    """One entry of the navigation tree.

    The root has an empty slug and heading path. Nodes for the variants of
    a conflicting section carry the ``source_id`` they came from.
    """

    title: str
    slug: str
    heading_path: tuple[str, ...]
    children: tuple["TocNode", ...] = ()
    sources: tuple[str, ...] = ()
    source_id: str | None = None

    @property
    def depth(self) -> int:
        return len(self.heading_path)

    @property
    def is_root(self) -> bool:
        return not self.heading_path and not self.slug

    def walk(self) -> Iterator["TocNode"]:
        """Pre-order traversal, root included."""
        yield self
        for child in self.children:
            yield from child.walk()


def build_toc(canonical: CanonicalDocument, *, title: str = "Contents") -> TocNode:
    """Build the navigation tree and assign unique slugs in first-seen order."""
    registry = SlugRegistry()
    sections: dict[tuple[str, ...], CanonicalSection] = {}
    slugs: dict[tuple[str, ...], str] = {}
    variant_slugs: dict[tuple[str, ...], list[tuple[str, str]]] = {}
    children: dict[tuple[str, ...], list[tuple[str, ...]]] = {(): []}

    for section in canonical.sections:
        if not section.heading_path:
            continue
        key = path_key(section.heading_path)
        sections[key] = section
        slugs[key] = registry.reserve(section.heading.slug)
        if section.conflict:
            variant_slugs[key] = [
                (v.source_id, registry.assign(f"{section.title} {v.source_id}"))
                for v in section.variants
            ]

        parent = key[:-1]
        while parent and parent not in sections:
            parent = parent[:-1]
        children.setdefault(parent, []).append(key)
        children.setdefault(key, [])

    def build(key: tuple[str, ...]) -> TocNode:
        section = sections[key]
        variant_nodes = tuple(
            TocNode(
                title=f"{section.title} ({source_id})",
                slug=slug,
                heading_path=section.heading_path,
                sources=(source_id,),
                source_id=source_id,
            )
            for source_id, slug in variant_slugs.get(key, [])
        )
        return TocNode(
            title=section.title,
            slug=slugs[key],
            heading_path=section.heading_path,
            children=variant_nodes + tuple(build(k) for k in children[key]),
            sources=section.sources,
        )

    root = TocNode(
        title=title,
        slug="",
        heading_path=(),
        children=tuple(build(k) for k in children[()]),
        sources=canonical.sources,
    )
    logger.debug("Built table of contents with %d slugs", len(registry))
    return root
