from notesite_kit.slugs import SlugRegistry, slugify

from .links import LinkTable, LinkTarget, find_link_errors, resolve_links
from .toc import TocNode, build_toc

__all__ = [
    "LinkTable",
    "LinkTarget",
    "SlugRegistry",
    "TocNode",
    "build_toc",
    "find_link_errors",
    "resolve_links",
    "slugify",
]
