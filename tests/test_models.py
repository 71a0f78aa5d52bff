"""Tests for nl2tag.models module."""

from __future__ import annotations

import pytest

from nl2tag.models import ConfigurationError, ConversionResult, ListKind, Wrapper, WrapperMode


class TestWrapperMode:
    def test_parse_defaults(self):
        mode = WrapperMode.parse("p")
        assert mode.wrapper is Wrapper.P
        assert mode.list_kind is ListKind.UL

    def test_parse_is_case_insensitive(self):
        mode = WrapperMode.parse(" LI ", "Menu")
        assert mode.wrapper is Wrapper.LI
        assert mode.list_kind is ListKind.MENU

    def test_unknown_wrapper(self):
        with pytest.raises(ConfigurationError, match="Unsupported wrapper 'div'"):
            WrapperMode.parse("div")

    def test_unknown_list_kind(self):
        with pytest.raises(ConfigurationError, match="Available: ul, ol, menu"):
            WrapperMode.parse("li", "dl")

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            WrapperMode.parse("table")

    def test_changelog_forces_ul(self):
        mode = WrapperMode.parse("changelog", "ol")
        assert mode.list_kind is ListKind.UL
        assert mode.list_open == '<ul class="changelog_list">'
        assert mode.list_close == "</ul>"

    def test_tags(self):
        assert WrapperMode.parse("br").tag == "br"
        assert WrapperMode.parse("p").tag == "p"
        assert WrapperMode.parse("li").tag == "li"
        assert WrapperMode.parse("changelog").tag == "li"

    def test_is_list(self):
        assert WrapperMode.parse("li").is_list
        assert WrapperMode.parse("changelog").is_list
        assert not WrapperMode.parse("p").is_list

    def test_list_tags(self):
        mode = WrapperMode.parse("li", "ol")
        assert mode.list_open == "<ol>"
        assert mode.list_close == "</ol>"

    def test_frozen(self):
        mode = WrapperMode.parse("p")
        with pytest.raises(AttributeError):
            mode.wrapper = Wrapper.BR  # type: ignore[misc]


class TestConversionResult:
    def test_default_values(self):
        result = ConversionResult(mode=Wrapper.BR)
        assert result.text == ""
        assert result.list_kind is None
        assert result.balanced is True

    def test_model_validate_from_dict(self):
        result = ConversionResult.model_validate(
            {"mode": "li", "list_kind": "ol", "text": "<ol></ol>", "balanced": False}
        )
        assert result.mode is Wrapper.LI
        assert result.list_kind is ListKind.OL
        assert result.balanced is False

    def test_json_dump(self):
        result = ConversionResult(mode=Wrapper.P, text="<p>x</p>")
        assert result.model_dump(mode="json") == {
            "mode": "p",
            "list_kind": None,
            "text": "<p>x</p>",
            "balanced": True,
        }
