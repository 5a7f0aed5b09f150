"""krimdown renderers.

- WrappedHtmlRenderer: patitas HtmlRenderer with decorative top-level
  wrappers and highlighted fenced code
"""

from krimdown.renderers.html import DECORATIVE_CLASSES, WrappedHtmlRenderer

__all__ = ["DECORATIVE_CLASSES", "WrappedHtmlRenderer"]
