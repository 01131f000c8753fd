# Config
from .config import BuildConfig, load_build_config

# Errors
from .errors import (
    AmbiguousLinkError,
    ConfigError,
    ContentConflictWarning,
    DanglingLinkError,
    HighlightError,
    LinkError,
    NotesiteError,
)

# Merging
from .merging import CanonicalDocument, CanonicalSection, SectionMerger, merge

# Navigation
from .navigation import LinkTable, TocNode, build_toc, resolve_links, slugify

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Parsers
from .parsers import Document, MarkdownParser, parse_document

# Pipeline
from .pipeline import BuildResult, SiteBuilder, SourceFile, build_site, discover_sources

# Rendering
from .rendering import DirectorySink, MemorySink, Page, PygmentsHighlighter, SiteRenderer

__all__ = [
    # Config
    "BuildConfig",
    "load_build_config",
    # Errors
    "AmbiguousLinkError",
    "ConfigError",
    "ContentConflictWarning",
    "DanglingLinkError",
    "HighlightError",
    "LinkError",
    "NotesiteError",
    # Merging
    "CanonicalDocument",
    "CanonicalSection",
    "SectionMerger",
    "merge",
    # Navigation
    "LinkTable",
    "TocNode",
    "build_toc",
    "resolve_links",
    "slugify",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsers
    "Document",
    "MarkdownParser",
    "parse_document",
    # Pipeline
    "BuildResult",
    "SiteBuilder",
    "SourceFile",
    "build_site",
    "discover_sources",
    # Rendering
    "DirectorySink",
    "MemorySink",
    "Page",
    "PygmentsHighlighter",
    "SiteRenderer",
]
