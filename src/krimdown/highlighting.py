"""Syntax highlighting for fenced code blocks.

Highlighters return an HTML *fragment*: highlighted markup with no wrapping
element. The renderer owns the surrounding ``<pre><code>`` block.

Usage:
    >>> from krimdown.highlighting import PygmentsHighlighter
    >>> hl = PygmentsHighlighter()
    >>> hl.highlight('puts "hi"', "ruby")
    '<span class="nb">puts</span><span class="w"> </span>...'

    # A plain function works too
    >>> from krimdown.highlighting import highlight
    >>> def shout(code: str, language: str) -> str:
    ...     return code.upper()
    >>> highlight("x", "text", shout)
    'X'

Styling is supplied externally; ``PygmentsHighlighter.stylesheet()`` returns
the CSS for the class names the fragments use.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from krimdown.config import CssMode
from krimdown.errors import HighlightError

logger = logging.getLogger(__name__)


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Thread Safety:
        Implementations must be thread-safe. highlight() may be called
        concurrently from multiple render threads.
    """

    def highlight(self, code: str, language: str) -> str:
        """Highlight code.

        Contract:
            - MUST return an HTML fragment without a wrapping element
            - MUST escape HTML entities in code
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if the highlighter has a lexer for the language. MUST NOT raise."""
        ...


# Support for simple callable-based highlighters
SimpleHighlighter = Callable[[str, str], str]


class PygmentsHighlighter:
    """Pygments-based highlighter implementing the Highlighter protocol.

    Args:
        line_numbers: Emit inline line numbers
        css_mode: "class" for CSS class spans, "inline" for style attributes
        style: Pygments style used for inline styles and ``stylesheet()``
    """

    __slots__ = ("_formatter", "_style")

    def __init__(
        self,
        *,
        line_numbers: bool = False,
        css_mode: CssMode = "class",
        style: str = "default",
    ) -> None:
        self._style = style
        self._formatter = HtmlFormatter(
            nowrap=True,
            linenos="inline" if line_numbers else False,
            noclasses=css_mode == "inline",
            style=style,
        )

    def highlight(self, code: str, language: str) -> str:
        """Highlight code with Pygments, trimming the trailing newline it adds."""
        result: str = pygments_highlight(code, self._lexer_for(language), self._formatter)
        return result.removesuffix("\n")

    def supports_language(self, language: str) -> bool:
        try:
            get_lexer_by_name(language)
        except ClassNotFound:
            return False
        return True

    def stylesheet(self, selector: str = "pre code") -> str:
        """CSS rules for the class names emitted in "class" mode."""
        return HtmlFormatter(style=self._style).get_style_defs(selector)

    def _lexer_for(self, language: str) -> Lexer:
        try:
            return get_lexer_by_name(language)
        except ClassNotFound:
            logger.debug("No lexer for %r, highlighting as plain text", language)
            return TextLexer()


_default_highlighter: PygmentsHighlighter | None = None


def default_highlighter() -> PygmentsHighlighter:
    """Shared class-mode highlighter without line numbers."""
    global _default_highlighter
    if _default_highlighter is None:
        _default_highlighter = PygmentsHighlighter()
    return _default_highlighter


def highlight(
    code: str,
    language: str,
    highlighter: Highlighter | SimpleHighlighter | None = None,
) -> str:
    """Highlight code with the given highlighter (or the default one).

    Args:
        code: Source code to highlight
        language: Language identifier
        highlighter: A Highlighter implementation or a ``(code, language)`` callable

    Returns:
        HTML fragment

    Raises:
        HighlightError: If the highlighter returns something other than a string
    """
    hl = highlighter or default_highlighter()

    # Check if it's the full protocol or a simple callable
    if hasattr(hl, "highlight") and callable(hl.highlight):
        result = hl.highlight(code, language)
    else:
        result = hl(code, language)

    if not isinstance(result, str):
        raise HighlightError(language, f"expected str, got {type(result).__name__}")
    return result


__all__ = [
    "Highlighter",
    "PygmentsHighlighter",
    "SimpleHighlighter",
    "default_highlighter",
    "highlight",
]
