"""Text helpers for rendering plain text runs.

Example:
    >>> from krimdown.text import educate_quotes
    >>> educate_quotes('It\\'s "fine" & <ok>', ("lsquo", "rsquo", "ldquo", "rdquo"))
    'It&rsquo;s &ldquo;fine&rdquo; &amp; &lt;ok&gt;'
"""

from __future__ import annotations

import html
import re

_QUOTE_RE = re.compile(r"['\"]")

# A quote after one of these (or at the start of a block) opens.
_OPENING_CONTEXT = frozenset(" \t\n([{<-–—")


def educate_quotes(text: str, entities: tuple[str, str, str, str], prev: str = "") -> str:
    """Escape text for HTML and replace straight quotes with named entities.

    Args:
        text: Plain text (not yet escaped)
        entities: Entity names for single-open, single-close, double-open,
            double-close, e.g. ``("lsquo", "rsquo", "ldquo", "rdquo")``
        prev: Character rendered just before ``text`` in the same block
            (e.g. the end of preceding emphasis); empty at block start

    Returns:
        HTML-safe text
    """
    apos_open, apos_close, quote_open, quote_close = entities
    parts: list[str] = []
    pos = 0
    for match in _QUOTE_RE.finditer(text):
        start = match.start()
        parts.append(html.escape(text[pos:start], quote=False))
        before = text[start - 1] if start else prev
        opening = not before or before in _OPENING_CONTEXT
        if match.group() == "'":
            parts.append(f"&{apos_open if opening else apos_close};")
        else:
            parts.append(f"&{quote_open if opening else quote_close};")
        pos = match.end()
    parts.append(html.escape(text[pos:], quote=False))
    return "".join(parts)
