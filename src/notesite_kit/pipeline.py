# src/notesite_kit/pipeline.py

"""End-to-end build: discover -> parse -> merge -> navigate -> render.

Parsing fans out across threads; everything after the merge works on one
immutable canonical document. Nothing is shared between builds.
"""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from time import monotonic

from notesite_kit.config import DEFAULT_PATTERNS, BuildConfig
from notesite_kit.errors import ContentConflictWarning
from notesite_kit.merging.merger import SectionMerger
from notesite_kit.merging.models import CanonicalDocument
from notesite_kit.navigation.links import LinkTable, resolve_links
from notesite_kit.navigation.toc import TocNode, build_toc
from notesite_kit.observability import names
from notesite_kit.observability.base import MetricsHook, NoOpMetricsHook
from notesite_kit.parsers.base import DocumentParser
from notesite_kit.parsers.markdown_parser import MarkdownParser
from notesite_kit.parsers.models import Document
from notesite_kit.rendering.base import Highlighter, Page, PageSink
from notesite_kit.rendering.highlight import PygmentsHighlighter
from notesite_kit.rendering.renderer import SiteRenderer
from notesite_kit.rendering.sinks import DirectorySink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    source_id: str
    text: str


@dataclass(frozen=True)
class BuildResult:
    canonical: CanonicalDocument
    toc: TocNode
    link_table: LinkTable
    pages: tuple[Page, ...]

    @property
    def conflicts(self) -> tuple[ContentConflictWarning, ...]:
        return self.canonical.conflicts


def discover_sources(
    input_dir: str | Path, patterns: Iterable[str] = DEFAULT_PATTERNS
) -> list[SourceFile]:
    """Collect note files under ``input_dir``, ordered by relative POSIX path."""
    root = Path(input_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Input directory '{root}' not found")

    paths = {p for pattern in patterns for p in root.rglob(pattern) if p.is_file()}
    ordered = sorted(paths, key=lambda p: p.relative_to(root).as_posix())
    logger.info("Discovered %d source files in %s", len(ordered), root)
    return [
        SourceFile(
            source_id=p.relative_to(root).as_posix(),
            text=p.read_text(encoding="utf-8", errors="replace"),
        )
        for p in ordered
    ]


class SiteBuilder:
    def __init__(
        self,
        config: BuildConfig = BuildConfig(),
        *,
        parser: DocumentParser | None = None,
        highlighter: Highlighter | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config
        self.metrics_hook = metrics_hook
        self.parser = parser or MarkdownParser(metrics_hook=metrics_hook)
        self.merger = SectionMerger(config.duplicate_threshold, metrics_hook)
        self.renderer = SiteRenderer(
            highlighter or PygmentsHighlighter(config.highlight_style),
            page_depth=config.page_depth,
            site_title=config.site_title,
            metrics_hook=metrics_hook,
        )

    async def parse_all(self, sources: Sequence[SourceFile]) -> list[Document]:
        # Parsing is pure and CPU-bound; results keep the input order
        documents = await asyncio.gather(
            *(
                asyncio.to_thread(self.parser.parse, s.text, source_id=s.source_id)
                for s in sources
            )
        )
        return list(documents)

    async def build(
        self, sources: Sequence[SourceFile], sink: PageSink | None = None
    ) -> BuildResult:
        """Run the whole pipeline over already-loaded sources.

        Raises:
            DanglingLinkError, AmbiguousLinkError: Before anything is rendered.
        """
        start = monotonic()
        self.metrics_hook.record_gauge(names.BUILD_SOURCES, len(sources))

        documents = await self.parse_all(sources)
        canonical = self.merger.merge(documents)
        toc = build_toc(canonical, title=self.config.site_title)
        link_table = resolve_links(canonical, toc, metrics_hook=self.metrics_hook)
        pages = self.renderer.render(canonical, toc, link_table, sink)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.BUILD_DURATION, elapsed_ms)
        logger.info("Built %d pages from %d sources", len(pages), len(sources))
        return BuildResult(
            canonical=canonical,
            toc=toc,
            link_table=link_table,
            pages=tuple(pages),
        )

    async def build_directory(
        self, input_dir: str | Path, output_dir: str | Path
    ) -> BuildResult:
        sources = discover_sources(input_dir, self.config.patterns)
        return await self.build(sources, DirectorySink(output_dir))


def build_site(
    input_dir: str | Path,
    output_dir: str | Path,
    config: BuildConfig = BuildConfig(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> BuildResult:
    builder = SiteBuilder(config, metrics_hook=metrics_hook)
    return asyncio.run(builder.build_directory(input_dir, output_dir))
