"""Exception classes for krimdown.

Parser failures are not wrapped: exceptions raised by patitas while parsing
propagate to the caller unchanged.
"""

from __future__ import annotations


class KrimdownError(Exception):
    """Base exception for all krimdown errors."""

    pass


class ConfigError(KrimdownError):
    """Invalid rendering option.

    Raised when an option value cannot be used, e.g. a smart quote setting
    that does not name exactly four entities.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize config error.

        Args:
            option: Name of the offending option (e.g., "smart_quotes")
            message: Description of what is wrong with the value
        """
        self.option = option
        super().__init__(f"Option '{option}': {message}")


class HighlightError(KrimdownError):
    """A syntax highlighter produced something other than an HTML string."""

    def __init__(self, language: str, message: str) -> None:
        self.language = language
        super().__init__(f"Highlighting {language!r} failed: {message}")
