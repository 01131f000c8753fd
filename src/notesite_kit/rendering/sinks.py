# rendering/sinks.py

import logging
from pathlib import Path

from .base import Page

logger = logging.getLogger(__name__)


class DirectorySink:
    """Writes every page under an output directory, creating parents as needed."""

    def __init__(self, output_dir: str | Path) -> None:
        self._root = Path(output_dir)

    def write(self, page: Page) -> None:
        target = self._root / page.path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(page.content)
        logger.debug("Wrote %s (%d bytes)", target, len(page.content))


class MemorySink:
    def __init__(self) -> None:
        self.pages: dict[str, Page] = {}

    def write(self, page: Page) -> None:
        self.pages[page.path] = page
