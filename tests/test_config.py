"""Tests for RenderOptions and the forced filter preferences."""

import pytest

from krimdown.config import DEFAULT_SMART_QUOTES, FORCED_OPTIONS, PLUGIN_FLAGS, RenderOptions
from krimdown.errors import ConfigError, KrimdownError


class TestRenderOptionsDefaults:
    def test_defaults(self) -> None:
        options = RenderOptions()

        assert options.line_numbers is False
        assert options.highlight_css_mode == "class"
        assert options.highlight_wrap == "block"
        assert options.hard_line_breaks is False
        assert options.smart_quotes == ("apos", "apos", "quot", "quot")
        assert options.plugins == ()
        assert dict(options.parser_options) == {}

    def test_frozen(self) -> None:
        options = RenderOptions()

        with pytest.raises(AttributeError):
            options.line_numbers = True  # type: ignore[misc]

    def test_sequences_normalized_to_tuples(self) -> None:
        options = RenderOptions(smart_quotes=["a", "b", "c", "d"], plugins=["table"])  # type: ignore[arg-type]

        assert options.smart_quotes == ("a", "b", "c", "d")
        assert options.plugins == ("table",)


class TestRenderOptionsValidation:
    def test_smart_quotes_needs_four(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            RenderOptions(smart_quotes=("apos", "apos", "quot"))  # type: ignore[arg-type]

        assert exc_info.value.option == "smart_quotes"
        assert isinstance(exc_info.value, KrimdownError)

    def test_smart_quotes_rejects_empty_names(self) -> None:
        with pytest.raises(ConfigError):
            RenderOptions(smart_quotes=("apos", "", "quot", "quot"))

    @pytest.mark.parametrize("quotes", [None, 4, "apos"])
    def test_smart_quotes_rejects_non_sequences(self, quotes: object) -> None:
        with pytest.raises(ConfigError) as exc_info:
            RenderOptions(smart_quotes=quotes)  # type: ignore[arg-type]

        assert exc_info.value.option == "smart_quotes"

    def test_from_dict_null_smart_quotes(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            RenderOptions.from_dict({"smart_quotes": None})

        assert exc_info.value.option == "smart_quotes"

    def test_css_mode(self) -> None:
        with pytest.raises(ConfigError, match="highlight_css_mode"):
            RenderOptions(highlight_css_mode="table")  # type: ignore[arg-type]

    def test_wrap_mode(self) -> None:
        with pytest.raises(ConfigError, match="highlight_wrap"):
            RenderOptions(highlight_wrap="span")  # type: ignore[arg-type]


class TestRenderOptionsFromDict:
    def test_known_keys(self) -> None:
        options = RenderOptions.from_dict({"hard_line_breaks": True, "plugins": ["math"]})

        assert options.hard_line_breaks is True
        assert options.plugins == ("math",)

    def test_unknown_keys_pass_through(self) -> None:
        options = RenderOptions.from_dict({"tables_enabled": True, "whatever": 1})

        assert dict(options.parser_options) == {"tables_enabled": True, "whatever": 1}

    def test_explicit_parser_options_merged(self) -> None:
        options = RenderOptions.from_dict(
            {"parser_options": {"math_enabled": True}, "tables_enabled": True}
        )

        assert dict(options.parser_options) == {"math_enabled": True, "tables_enabled": True}

    def test_smart_quotes_from_string(self) -> None:
        options = RenderOptions.from_dict({"smart_quotes": "lsquo, rsquo, ldquo, rdquo"})

        assert options.smart_quotes == ("lsquo", "rsquo", "ldquo", "rdquo")

    def test_single_plugin_string(self) -> None:
        assert RenderOptions.from_dict({"plugins": "table"}).plugins == ("table",)

    def test_nil_line_numbers_means_default(self) -> None:
        assert RenderOptions.from_dict({"line_numbers": None}).line_numbers is False

    def test_empty(self) -> None:
        assert RenderOptions.from_dict({}) == RenderOptions()


class TestParseConfig:
    def test_plugins_become_flags(self) -> None:
        config = RenderOptions(plugins=("table", "footnotes")).parse_config()

        assert config.tables_enabled is True
        assert config.footnotes_enabled is True
        assert config.math_enabled is False

    def test_all_plugins(self) -> None:
        config = RenderOptions(plugins=("all",)).parse_config()

        for flag in PLUGIN_FLAGS.values():
            assert getattr(config, flag) is True

    def test_passthrough_reaches_parser(self) -> None:
        config = RenderOptions.from_dict({"strikethrough_enabled": True, "ignored": 3}).parse_config()

        assert config.strikethrough_enabled is True

    def test_default_directive_registry_installed(self) -> None:
        assert RenderOptions().parse_config().directive_registry is not None

    def test_unknown_plugin(self) -> None:
        with pytest.raises(ConfigError, match="nosuchplugin"):
            RenderOptions(plugins=("nosuchplugin",)).parse_config()


class TestForcedOptions:
    def test_values(self) -> None:
        assert FORCED_OPTIONS == {
            "line_numbers": False,
            "highlight_css_mode": "class",
            "highlight_wrap": "block",
            "hard_line_breaks": False,
            "smart_quotes": DEFAULT_SMART_QUOTES,
        }

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            FORCED_OPTIONS["line_numbers"] = True  # type: ignore[index]
