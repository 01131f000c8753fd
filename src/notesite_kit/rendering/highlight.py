# rendering/highlight.py

import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from notesite_kit.errors import ConfigError, UnsupportedLanguageError

logger = logging.getLogger(__name__)


class PygmentsHighlighter:
    """Highlighter backed by pygments, emitting CSS classes (no inline styles)."""

    def __init__(self, style: str = "default", css_class: str = "highlight") -> None:
        try:
            self._formatter = HtmlFormatter(style=style, cssclass=css_class)
        except ClassNotFound as exc:
            raise ConfigError(f"Unknown highlight style '{style}'") from exc
        self._css_class = css_class
        logger.debug("Initialized PygmentsHighlighter with style=%s", style)

    def highlight(self, language: str, code: str) -> str:
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound as exc:
            raise UnsupportedLanguageError(language) from exc
        return highlight(code, lexer, self._formatter)

    def stylesheet(self) -> str:
        return self._formatter.get_style_defs(f".{self._css_class}")
