"""Markdown to HTML in one call: patitas parses, WrappedHtmlRenderer renders.

Usage:
    >>> import random
    >>> from krimdown import MarkdownRenderer
    >>> md = MarkdownRenderer(rng=random.Random(0))
    >>> print(md.render("# Title\\n\\nSome text."))
    <div class="block header ...">
    <h1 id="title">Title</h1>
    </div>
    <div class="block p ...">
    <p>Some text.</p>
    </div>
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from patitas import Document, Parser, SourceLocation, parse_config_context

from krimdown.config import RenderOptions
from krimdown.highlighting import PygmentsHighlighter
from krimdown.renderers.html import WrappedHtmlRenderer

if TYPE_CHECKING:
    from krimdown.highlighting import Highlighter, SimpleHighlighter

logger = logging.getLogger(__name__)


class MarkdownRenderer:
    """Parse Markdown with patitas and render it with decorative wrappers.

    The parse configuration is built once from ``options``; every render()
    call parses and renders with fresh per-call state, so one instance can
    be shared between threads.

    Args:
        options: Rendering options (defaults to RenderOptions())
        highlighter: Highlighter for fenced code blocks; a PygmentsHighlighter
            configured from ``options`` (built once) if omitted
        rng: Random generator for decorative classes; pass a seeded
            ``random.Random`` for reproducible output
    """

    __slots__ = ("_highlighter", "_options", "_parse_config", "_rng")

    def __init__(
        self,
        options: RenderOptions | None = None,
        *,
        highlighter: Highlighter | SimpleHighlighter | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._options = options or RenderOptions()
        self._parse_config = self._options.parse_config()
        self._highlighter = highlighter or PygmentsHighlighter(
            line_numbers=self._options.line_numbers,
            css_mode=self._options.highlight_css_mode,
        )
        self._rng = rng or random.Random()

    @property
    def options(self) -> RenderOptions:
        return self._options

    def __call__(self, source: str) -> str:
        return self.render(source)

    def render(self, source: str) -> str:
        """Render Markdown source to an HTML string.

        Args:
            source: Raw Markdown text

        Returns:
            Rendered HTML ("" for empty source)

        Raises:
            patitas.errors.PatitasError: Parser failures, unchanged
        """
        if not source:
            return ""
        logger.debug("Rendering %d characters of markdown", len(source))
        doc = self.parse(source)
        renderer = WrappedHtmlRenderer(
            source,
            options=self._options,
            highlighter=self._highlighter,
            rng=self._rng,
            directive_registry=self._parse_config.directive_registry,
        )
        return renderer.render(doc)

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into a patitas Document.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        Returns:
            Document AST root node
        """
        with parse_config_context(self._parse_config):
            blocks = Parser(source, source_file=source_file).parse()

        loc = SourceLocation(
            lineno=1,
            col_offset=1,
            offset=0,
            end_offset=len(source),
            source_file=source_file,
        )
        return Document(location=loc, children=tuple(blocks))
