from .base import Highlighter, Page, PageSink
from .highlight import PygmentsHighlighter
from .renderer import SiteRenderer
from .sinks import DirectorySink, MemorySink

__all__ = [
    "DirectorySink",
    "Highlighter",
    "MemorySink",
    "Page",
    "PageSink",
    "PygmentsHighlighter",
    "SiteRenderer",
]
