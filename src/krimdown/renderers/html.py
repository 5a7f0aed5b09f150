"""HTML renderer that wraps top-level blocks and highlights code.

Extends patitas' HtmlRenderer. Two things differ from the stock renderer:

- Every direct block child of the document root is wrapped in
  ``<div class="block {tag} {decorative}">``, where ``decorative`` is one
  of DECORATIVE_CLASSES picked at random per block. Nested blocks render
  exactly as patitas renders them.
- Fenced code goes through a syntax highlighter and comes out as
  ``<pre><code class="{lang}">...</code></pre>``; untagged fences use
  ``text``.

Thread Safety:
    The ancestor stack lives in a WrapContext created per render() call.
    The only shared state is the random generator used for decorative
    classes.
"""

from __future__ import annotations

import html
import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from patitas.nodes import (
    BlockQuote,
    CodeSpan,
    Directive,
    Document,
    Emphasis,
    FencedCode,
    FootnoteDef,
    FootnoteRef,
    Heading,
    HtmlBlock,
    HtmlInline,
    Image,
    IndentedCode,
    LineBreak,
    Link,
    List,
    ListItem,
    Math,
    MathBlock,
    Paragraph,
    Role,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from patitas.renderers.html import HtmlRenderer, RenderContext, html_escape
from patitas.stringbuilder import StringBuilder

from krimdown.config import RenderOptions
from krimdown.highlighting import PygmentsHighlighter, highlight
from krimdown.text import educate_quotes

if TYPE_CHECKING:
    from patitas.directives.registry import DirectiveRegistry
    from patitas.nodes import Block, Inline

    from krimdown.highlighting import Highlighter, SimpleHighlighter

logger = logging.getLogger(__name__)

DECORATIVE_CLASSES: tuple[str, ...] = ("alpha", "beta", "gamma", "delta")

DEFAULT_LANGUAGE = "text"

# Node class -> type tag used in the wrapper's class attribute.
BLOCK_TAGS: Mapping[type, str] = {
    Heading: "header",
    Paragraph: "p",
    FencedCode: "codeblock",
    IndentedCode: "codeblock",
    BlockQuote: "blockquote",
    List: "ul",
    ThematicBreak: "hr",
    Table: "table",
    MathBlock: "math",
    Directive: "directive",
}

_INLINE_TYPES = (
    Text,
    Emphasis,
    Strong,
    Strikethrough,
    Link,
    Image,
    CodeSpan,
    LineBreak,
    SoftBreak,
    HtmlInline,
    Math,
    FootnoteRef,
    Role,
)

# Raw HTML is passed through as written; footnote definitions render elsewhere.
_PASSTHROUGH = (HtmlBlock, FootnoteDef)


def block_tag(node: Block) -> str:
    """Type tag for a block node (``ol`` for ordered lists).

    Block classes without a tag use their lower-cased class name.
    """
    if isinstance(node, List) and node.ordered:
        return "ol"
    return BLOCK_TAGS.get(type(node), type(node).__name__.lower())


def node_category(node: Block | Inline) -> Literal["block", "inline"]:
    return "inline" if isinstance(node, _INLINE_TYPES) else "block"


def html_div_balance(fragment: str) -> int:
    """Opened minus closed ``<div`` elements in a raw HTML fragment."""
    lowered = fragment.lower()
    return lowered.count("<div") - lowered.count("</div")


def is_blank(node: Block) -> bool:
    match node:
        case Paragraph(children=()):
            return True
        case HtmlBlock():
            return not node.html.strip()
    return False


def is_wrappable(node: Block) -> bool:
    """Whether a root-level child gets a decorative wrapper."""
    return (
        node_category(node) == "block"
        and not is_blank(node)
        and not isinstance(node, _PASSTHROUGH)
    )


def code_language(info: str | None) -> str | None:
    """Language tag from a fence info string: its first word, entities decoded."""
    if not info:
        return None
    words = html.unescape(info).split()
    return words[0] if words else None


@dataclass(slots=True)
class WrapContext(RenderContext):
    """Per-render state for wrapping and quote education.

    Attributes:
        ancestors: Blocks being rendered, outermost first
        raw_div_depth: ``<div>`` elements opened by root-level raw HTML and
            not yet closed; nothing is wrapped while it is above zero
        prev_char: Last plain-text character rendered in the current block
    """

    ancestors: list[Block] = field(default_factory=list)
    raw_div_depth: int = 0
    prev_char: str = ""

    @property
    def parent(self) -> Block | None:
        return self.ancestors[-1] if self.ancestors else None


class WrappedHtmlRenderer(HtmlRenderer):
    """HtmlRenderer with decorative top-level wrappers and highlighted code.

    Usage:
        >>> renderer = WrappedHtmlRenderer(source, rng=random.Random(7))
        >>> renderer.render(doc)
        '<div class="block header ...">\\n<h1 id="title">Title</h1>\\n</div>\\n'

    Args:
        source: Original source buffer (fenced code is sliced out of it)
        options: Rendering options (defaults to RenderOptions())
        highlighter: Highlighter for fenced code; a PygmentsHighlighter
            configured from ``options`` if omitted
        rng: Random generator for decorative classes
        directive_registry: Registry for directive rendering
    """

    __slots__ = ("_options", "_highlighter", "_rng")

    def __init__(
        self,
        source: str = "",
        *,
        options: RenderOptions | None = None,
        highlighter: Highlighter | SimpleHighlighter | None = None,
        rng: random.Random | None = None,
        directive_registry: DirectiveRegistry | None = None,
    ) -> None:
        super().__init__(source, directive_registry=directive_registry)
        self._options = options or RenderOptions()
        self._highlighter = highlighter or PygmentsHighlighter(
            line_numbers=self._options.line_numbers,
            css_mode=self._options.highlight_css_mode,
        )
        self._rng = rng or random.Random()

    def render(self, node: Document) -> str:
        """Render document AST to HTML string."""
        ctx = WrapContext()
        self._collect_footnotes(node, ctx)

        sb = StringBuilder()
        ctx.ancestors.append(node)
        for child in node.children:
            self._render_block(child, sb, ctx)
        ctx.ancestors.pop()

        # Footnotes hang off the end of the document, outside any wrapper
        if ctx.footnote_refs:
            self._render_footnotes_section(sb, ctx)

        self._last_context = ctx
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder, ctx: RenderContext) -> None:
        if not isinstance(ctx, WrapContext):
            super()._render_block(block, sb, ctx)
            return

        at_root = isinstance(ctx.parent, Document)
        if at_root and isinstance(block, HtmlBlock):
            ctx.raw_div_depth = max(0, ctx.raw_div_depth + html_div_balance(block.html))
            self._descend(block, sb, ctx)
        elif at_root and ctx.raw_div_depth == 0 and is_wrappable(block):
            inner = StringBuilder()
            self._descend(block, inner, ctx)
            decorative = self._rng.choice(DECORATIVE_CLASSES)
            sb.append(f'<div class="block {block_tag(block)} {decorative}">\n')
            sb.append(inner.build().rstrip())
            sb.append("\n</div>\n")
        else:
            self._descend(block, sb, ctx)

    def _descend(self, block: Block, sb: StringBuilder, ctx: WrapContext) -> None:
        ctx.prev_char = ""
        ctx.ancestors.append(block)
        try:
            super()._render_block(block, sb, ctx)
        finally:
            ctx.ancestors.pop()

    def _render_list_item(
        self, item: ListItem, sb: StringBuilder, ctx: RenderContext, tight: bool
    ) -> None:
        if isinstance(ctx, WrapContext):
            ctx.prev_char = ""
        super()._render_list_item(item, sb, ctx, tight)

    def _render_fenced_code(self, code: FencedCode, sb: StringBuilder) -> None:
        lang = code_language(code.info) or DEFAULT_LANGUAGE
        content = code.get_code(self._source).removesuffix("\n")
        self._render_code(content, lang, sb)

    def _render_indented_code(self, code: IndentedCode, sb: StringBuilder) -> None:
        self._render_code(code.code.removesuffix("\n"), DEFAULT_LANGUAGE, sb)

    def _render_code(self, content: str, lang: str, sb: StringBuilder) -> None:
        fragment = highlight(content, lang, self._highlighter)
        sb.append(f'<pre><code class="{html_escape(lang)}">')
        sb.append(fragment)
        sb.append("</code></pre>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inline(self, inline: Inline, sb: StringBuilder, ctx: RenderContext) -> None:
        match inline:
            case Text():
                prev = ctx.prev_char if isinstance(ctx, WrapContext) else ""
                sb.append(educate_quotes(inline.content, self._options.smart_quotes, prev))
                self._remember_char(ctx, inline.content)
            case SoftBreak() if self._options.hard_line_breaks:
                sb.append("<br />\n")
                self._remember_char(ctx, "\n")
            case _:
                super()._render_inline(inline, sb, ctx)
                match inline:
                    case CodeSpan():
                        self._remember_char(ctx, inline.code)
                    case SoftBreak() | LineBreak():
                        self._remember_char(ctx, "\n")

    @staticmethod
    def _remember_char(ctx: RenderContext, text: str) -> None:
        if text and isinstance(ctx, WrapContext):
            ctx.prev_char = text[-1]
