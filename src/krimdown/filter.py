"""Content filter for a static site pipeline.

A pipeline constructs the filter and calls it per article; there is no
global registration. Parameters given by the pipeline are merged with
FORCED_OPTIONS, and the forced values win.

Usage::

    from krimdown import KrimdownFilter

    krimdown = KrimdownFilter()
    html = krimdown.run(article_source, {"plugins": ["table", "footnotes"]})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from krimdown.config import FORCED_OPTIONS, RenderOptions
from krimdown.renderer import MarkdownRenderer

if TYPE_CHECKING:
    import random

    from krimdown.highlighting import Highlighter, SimpleHighlighter


class KrimdownFilter:
    """Runs content through patitas with the blog's rendering preferences.

    Args:
        highlighter: Highlighter for fenced code blocks
        rng: Random generator for decorative classes
    """

    identifier = "krimdown"

    def __init__(
        self,
        *,
        highlighter: Highlighter | SimpleHighlighter | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._highlighter = highlighter
        self._rng = rng

    def options_for(self, params: Mapping[str, Any] | None = None) -> RenderOptions:
        """RenderOptions for the given parameters with forced preferences applied."""
        merged = {**(params or {}), **FORCED_OPTIONS}
        return RenderOptions.from_dict(merged)

    def run(self, content: str, params: Mapping[str, Any] | None = None) -> str:
        """Render content to HTML.

        Args:
            content: The markdown content to filter
            params: Options for the renderer; unknown keys reach the parser

        Returns:
            The filtered content as HTML
        """
        renderer = MarkdownRenderer(
            self.options_for(params),
            highlighter=self._highlighter,
            rng=self._rng,
        )
        return renderer.render(content)

    __call__ = run
