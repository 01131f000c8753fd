# rendering/renderer.py

import logging
from dataclasses import dataclass
from functools import partial
from time import monotonic
from typing import Any

from jinja2 import DictLoader, Environment
from markupsafe import Markup

from notesite_kit.errors import HighlightError
from notesite_kit.merging.models import CanonicalDocument, CanonicalSection
from notesite_kit.merging.sections import path_key
from notesite_kit.navigation.links import LinkTable
from notesite_kit.navigation.toc import TocNode
from notesite_kit.observability import names
from notesite_kit.observability.base import MetricsHook, NoOpMetricsHook
from notesite_kit.parsers.models import Block, CodeBlock, Link, ListItem, Paragraph

from .base import Highlighter, Page, PageSink
from .highlight import PygmentsHighlighter
from .inline import InlineRenderer
from .templates import TEMPLATES

logger = logging.getLogger(__name__)

PAGES_DIR = "pages"
STYLESHEET_PATH = "assets/pygments.css"


@dataclass(frozen=True)
class _RenderContext:
    hrefs: dict[str, str]  # slug -> path relative to the site root
    link_table: LinkTable
    root: str  # prefix from the current page back to the site root


class SiteRenderer:
    """Renders a canonical document into HTML pages.

    - One page per section at depth <= page_depth, nested sections inline
    - Sidebar from the table of contents
    - No I/O: pages are returned and optionally handed to a sink
    """

    def __init__(
        self,
        highlighter: Highlighter | None = None,
        *,
        page_depth: int = 1,
        site_title: str = "Notes",
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if page_depth < 1:
            raise ValueError("page_depth must be >= 1")
        self.highlighter = highlighter or PygmentsHighlighter()
        self.page_depth = page_depth
        self.site_title = site_title
        self.metrics_hook = metrics_hook
        self._inline = InlineRenderer()
        self._env = Environment(loader=DictLoader(TEMPLATES), autoescape=True)
        self._block_renderers = {
            Paragraph.kind: self._render_paragraph,
            CodeBlock.kind: self._render_code,
            Link.kind: self._render_link_block,
        }

    def render(
        self,
        canonical: CanonicalDocument,
        toc: TocNode,
        link_table: LinkTable,
        sink: PageSink | None = None,
    ) -> list[Page]:
        start = monotonic()
        sections = {path_key(s.heading_path): s for s in canonical.sections}
        page_of = self._assign_pages(toc)
        hrefs = {
            slug: self._page_path(page) + ("" if slug == page else f"#{slug}")
            for slug, page in page_of.items()
        }

        section_pages = [
            self._render_page(node, sections, page_of, hrefs, link_table, toc)
            for node in toc.walk()
            if not node.is_root and page_of[node.slug] == node.slug
        ]
        index = self._render_index(canonical, sections, section_pages, hrefs, link_table, toc)
        stylesheet = Page(
            path=STYLESHEET_PATH,
            content=self.highlighter.stylesheet().encode("utf-8"),
            kind="asset",
        )
        pages = [index, *section_pages, stylesheet]

        if sink is not None:
            for page in pages:
                sink.write(page)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.RENDER_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.RENDER_PAGES_TOTAL, len(pages))
        logger.info("Rendered %d pages", len(pages))
        return pages

    # -- page layout --

    def _assign_pages(self, toc: TocNode) -> dict[str, str]:
        """Map every slug to the slug of the page it renders on."""
        page_of: dict[str, str] = {}

        def visit(node: TocNode, page: str) -> None:
            for child in node.children:
                own_page = child.source_id is None and child.depth <= self.page_depth
                child_page = child.slug if own_page else page
                page_of[child.slug] = child_page
                visit(child, child_page)

        visit(toc, "")
        return page_of

    @staticmethod
    def _page_path(page_slug: str) -> str:
        return f"{PAGES_DIR}/{page_slug}.html"

    def _render_page(
        self,
        node: TocNode,
        sections: dict[tuple[str, ...], CanonicalSection],
        page_of: dict[str, str],
        hrefs: dict[str, str],
        link_table: LinkTable,
        toc: TocNode,
    ) -> Page:
        ctx = _RenderContext(hrefs=hrefs, link_table=link_table, root="../")
        views: list[dict[str, Any]] = []
        subpages: list[TocNode] = []

        def collect(current: TocNode) -> None:
            views.append(self._section_view(current, node.depth, sections, ctx))
            for child in current.children:
                if child.source_id is not None:
                    continue
                if page_of[child.slug] == child.slug:
                    subpages.append(child)
                else:
                    collect(child)

        collect(node)
        html = self._env.get_template("page.html").render(
            site_title=self.site_title,
            title=node.title,
            root=ctx.root,
            toc=toc,
            hrefs=hrefs,
            current=node.slug,
            sections=views,
            subpages=subpages,
        )
        return Page(
            path=self._page_path(node.slug),
            content=html.encode("utf-8"),
            title=node.title,
            sources=node.sources,
            kind="section",
        )

    def _render_index(
        self,
        canonical: CanonicalDocument,
        sections: dict[tuple[str, ...], CanonicalSection],
        section_pages: list[Page],
        hrefs: dict[str, str],
        link_table: LinkTable,
        toc: TocNode,
    ) -> Page:
        ctx = _RenderContext(hrefs=hrefs, link_table=link_table, root="")
        preamble = sections.get(())
        html = self._env.get_template("index.html").render(
            site_title=self.site_title,
            title=self.site_title,
            root=ctx.root,
            toc=toc,
            hrefs=hrefs,
            current="",
            preamble=self._preamble_view(preamble, ctx) if preamble else [],
            pages=section_pages,
            sources=canonical.sources,
        )
        return Page(
            path="index.html",
            content=html.encode("utf-8"),
            title=self.site_title,
            sources=canonical.sources,
            kind="index",
        )

    def _preamble_view(
        self, preamble: CanonicalSection, ctx: _RenderContext
    ) -> list[dict[str, Any]]:
        """Text before the first heading; every variant when the sources disagree."""
        if not preamble.conflict:
            return [{"title": None, "blocks": self._render_blocks(preamble.blocks, ctx)}]
        return [
            {
                "title": f"Introduction ({variant.source_id})",
                "blocks": self._render_blocks(variant.blocks, ctx),
            }
            for variant in preamble.variants
        ]

    def _section_view(
        self,
        node: TocNode,
        root_depth: int,
        sections: dict[tuple[str, ...], CanonicalSection],
        ctx: _RenderContext,
    ) -> dict[str, Any]:
        section = sections[path_key(node.heading_path)]
        level = min(node.depth - root_depth + 1, 6)
        if section.conflict:
            variant_nodes = [c for c in node.children if c.source_id is not None]
            variants = [
                {
                    "slug": vnode.slug,
                    "title": vnode.title,
                    "level": min(level + 1, 6),
                    "blocks": self._render_blocks(variant.blocks, ctx),
                }
                for variant, vnode in zip(section.variants, variant_nodes, strict=True)
            ]
        else:
            variants = [{"slug": None, "blocks": self._render_blocks(section.blocks, ctx)}]
        return {
            "slug": node.slug,
            "title": node.title,
            "level": level,
            "sources": section.sources,
            "variants": variants,
        }

    # -- blocks --

    def _render_blocks(self, blocks: tuple[Block, ...], ctx: _RenderContext) -> list[Markup]:
        rendered: list[Markup] = []
        items: list[ListItem] = []
        for block in blocks:
            if isinstance(block, ListItem):
                items.append(block)
                continue
            if items:
                rendered.append(self._render_list(items, ctx))
                items = []
            rendered.append(self._block_renderers[block.kind](block, ctx))
        if items:
            rendered.append(self._render_list(items, ctx))
        return rendered

    def _render_paragraph(self, block: Paragraph, ctx: _RenderContext) -> Markup:
        return Markup(self._inline.convert(block.text, partial(self._anchor_href, ctx=ctx)))

    def _render_link_block(self, block: Link, ctx: _RenderContext) -> Markup:
        return Markup('<p class="link"><a href="%s">%s</a></p>') % (
            self._href(block.target, ctx),
            block.text,
        )

    def _render_list(self, items: list[ListItem], ctx: _RenderContext) -> Markup:
        out: list[str] = []
        stack: list[tuple[int, str]] = []
        for item in items:
            tag = "ol" if item.ordered else "ul"
            while stack and stack[-1][0] > item.depth:
                out.append(f"</li></{stack.pop()[1]}>")
            if stack and stack[-1][0] == item.depth:
                out.append("</li>")
            else:
                out.append(f"<{tag}>")
                stack.append((item.depth, tag))
            out.append("<li>" + str(self._render_inline(item.text, ctx)))
        while stack:
            out.append(f"</li></{stack.pop()[1]}>")
        return Markup("".join(out))

    def _render_code(self, block: CodeBlock, ctx: _RenderContext) -> Markup:
        language = block.language
        if language:
            try:
                highlighted = self.highlighter.highlight(language, block.text)
            except HighlightError as exc:
                logger.debug("Falling back to plain code block: %s", exc)
                self.metrics_hook.increment(
                    names.HIGHLIGHT_FALLBACKS_TOTAL, labels={"language": language}
                )
            else:
                return Markup('<div class="code-block" data-lang="%s">%s</div>') % (
                    language,
                    Markup(highlighted),
                )
            return Markup(
                '<pre class="code-block" data-lang="%s"><code class="language-%s">%s</code></pre>'
            ) % (language, language, block.text)
        return Markup('<pre class="code-block"><code>%s</code></pre>') % block.text

    def _render_inline(self, text: str, ctx: _RenderContext) -> Markup:
        return Markup(self._inline.convert_inline(text, partial(self._anchor_href, ctx=ctx)))

    def _href(self, target: str, ctx: _RenderContext) -> str:
        if not target.startswith("#"):
            return target
        slug = ctx.link_table.get(target[1:]).slug
        return ctx.root + ctx.hrefs[slug]

    @staticmethod
    def _anchor_href(slug: str, ctx: _RenderContext) -> str | None:
        # markdown may find link forms the parser skips; those are left alone
        if slug not in ctx.link_table:
            return None
        return ctx.root + ctx.hrefs[ctx.link_table.get(slug).slug]
