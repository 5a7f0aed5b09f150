"""
krimdown — blog content filter on top of patitas

Parses Markdown with patitas and renders it with two changes to the stock
HTML: each top-level block is wrapped in a ``<div>`` carrying its type and a
randomly chosen decorative class, and fenced code is highlighted with
Pygments.

Quick Start:
    >>> from krimdown import KrimdownFilter
    >>> krimdown = KrimdownFilter()
    >>> html = krimdown.run("# Hello\\n\\n```ruby\\nputs 'hi'\\n```")

    >>> # Reproducible output with a seeded generator
    >>> import random
    >>> from krimdown import MarkdownRenderer, RenderOptions
    >>> md = MarkdownRenderer(RenderOptions(plugins=("table",)), rng=random.Random(42))
    >>> html = md("| a | b |\\n|---|---|\\n| 1 | 2 |")
"""

from krimdown.config import FORCED_OPTIONS, RenderOptions
from krimdown.errors import ConfigError, HighlightError, KrimdownError
from krimdown.filter import KrimdownFilter
from krimdown.highlighting import Highlighter, PygmentsHighlighter, highlight
from krimdown.renderer import MarkdownRenderer
from krimdown.renderers.html import DECORATIVE_CLASSES, WrappedHtmlRenderer

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Rendering
    "KrimdownFilter",
    "MarkdownRenderer",
    "WrappedHtmlRenderer",
    "DECORATIVE_CLASSES",
    # Configuration
    "FORCED_OPTIONS",
    "RenderOptions",
    # Highlighting
    "Highlighter",
    "PygmentsHighlighter",
    "highlight",
    # Errors
    "ConfigError",
    "HighlightError",
    "KrimdownError",
]
