"""Rendering options for krimdown.

Options are plain frozen dataclasses passed explicitly to the renderer or
filter. Nothing is registered globally; the only context-scoped state is the
patitas parse configuration, which is installed for the duration of a parse.

Usage:
    >>> from krimdown.config import RenderOptions
    >>> options = RenderOptions.from_dict({"plugins": ["table"], "smart_quotes": "lsquo,rsquo,ldquo,rdquo"})
    >>> options.smart_quotes
    ('lsquo', 'rsquo', 'ldquo', 'rdquo')

Unknown keys are kept in ``parser_options`` and handed to
``patitas.ParseConfig.from_dict``, which picks out the fields it knows
(``tables_enabled``, ``math_enabled``, ...).
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from patitas import ParseConfig, create_default_registry

from krimdown.errors import ConfigError

logger = logging.getLogger(__name__)

CssMode = Literal["class", "inline"]
WrapMode = Literal["block"]

DEFAULT_SMART_QUOTES: tuple[str, str, str, str] = ("apos", "apos", "quot", "quot")

# Parser plugin name -> ParseConfig flag, as patitas.Markdown maps them.
PLUGIN_FLAGS: Mapping[str, str] = MappingProxyType(
    {
        "table": "tables_enabled",
        "strikethrough": "strikethrough_enabled",
        "task_lists": "task_lists_enabled",
        "footnotes": "footnotes_enabled",
        "math": "math_enabled",
        "autolinks": "autolinks_enabled",
    }
)


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Immutable rendering options.

    Attributes:
        line_numbers: Ask the highlighter for line numbers
        highlight_css_mode: "class" for CSS class spans, "inline" for style attributes
        highlight_wrap: Element that wraps highlighted code; only "block" is supported
        hard_line_breaks: Render soft line breaks inside paragraphs as <br />
        smart_quotes: Entity names for opening/closing single and double quotes
        plugins: patitas plugin names ("all" enables every plugin)
        parser_options: Any other keys, passed through to patitas' ParseConfig
    """

    line_numbers: bool = False
    highlight_css_mode: CssMode = "class"
    highlight_wrap: WrapMode = "block"
    hard_line_breaks: bool = False
    smart_quotes: tuple[str, str, str, str] = DEFAULT_SMART_QUOTES
    plugins: tuple[str, ...] = ()
    parser_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.smart_quotes, str) or not isinstance(self.smart_quotes, Sequence):
            raise ConfigError("smart_quotes", f"expected four entity names, got {self.smart_quotes!r}")
        quotes = tuple(self.smart_quotes)
        if len(quotes) != 4 or not all(isinstance(q, str) and q for q in quotes):
            raise ConfigError("smart_quotes", f"expected four entity names, got {self.smart_quotes!r}")
        if self.highlight_css_mode not in ("class", "inline"):
            raise ConfigError(
                "highlight_css_mode", f"expected 'class' or 'inline', got {self.highlight_css_mode!r}"
            )
        if self.highlight_wrap != "block":
            raise ConfigError("highlight_wrap", f"only 'block' is supported, got {self.highlight_wrap!r}")
        object.__setattr__(self, "smart_quotes", quotes)
        object.__setattr__(self, "plugins", tuple(self.plugins))
        object.__setattr__(self, "parser_options", MappingProxyType(dict(self.parser_options)))

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> RenderOptions:
        """Create RenderOptions from a filter parameter mapping.

        Recognised keys become fields. Everything else is collected into
        ``parser_options`` unchanged.

        Args:
            params: Mapping of option names to values

        Returns:
            New RenderOptions instance

        Raises:
            ConfigError: If a recognised option has an unusable value
        """
        known = {f.name for f in dataclasses.fields(cls)} - {"parser_options"}
        values: dict[str, Any] = {}
        passthrough: dict[str, Any] = dict(params.get("parser_options") or {})

        for key, value in params.items():
            if key == "parser_options":
                continue
            if key in known:
                values[key] = value
            else:
                passthrough[key] = value

        quotes = values.get("smart_quotes")
        if isinstance(quotes, str):
            values["smart_quotes"] = tuple(q.strip() for q in quotes.split(","))

        plugins = values.get("plugins")
        if isinstance(plugins, str):
            values["plugins"] = (plugins,)
        elif plugins is None:
            values.pop("plugins", None)

        if values.get("line_numbers") is None:
            values.pop("line_numbers", None)

        if passthrough:
            logger.debug("Passing options through to the parser: %s", sorted(passthrough))

        return cls(**values, parser_options=passthrough)

    def parse_config(self) -> ParseConfig:
        """Build the patitas ParseConfig for these options.

        Plugin names are expanded to ParseConfig flags, then passthrough
        options are layered on. The default directive registry is installed
        unless one was passed through.
        """
        config = ParseConfig.from_dict(dict(self.parser_options))

        names = set(self.plugins)
        if "all" in names:
            names = set(PLUGIN_FLAGS)
        unknown = names - set(PLUGIN_FLAGS)
        if unknown:
            raise ConfigError("plugins", f"unknown plugin(s): {', '.join(sorted(unknown))}")

        flags = {PLUGIN_FLAGS[name]: True for name in names}
        if config.directive_registry is None:
            flags["directive_registry"] = create_default_registry()
        return dataclasses.replace(config, **flags)


# Preferences the content filter always applies over caller parameters.
FORCED_OPTIONS: Mapping[str, Any] = MappingProxyType(
    {
        "line_numbers": False,
        "highlight_css_mode": "class",
        "highlight_wrap": "block",
        "hard_line_breaks": False,
        "smart_quotes": DEFAULT_SMART_QUOTES,
    }
)


__all__ = [
    "DEFAULT_SMART_QUOTES",
    "FORCED_OPTIONS",
    "PLUGIN_FLAGS",
    "RenderOptions",
]
