"""Tests for nl2tag.classifier module."""

from __future__ import annotations

import pytest

from nl2tag import classifier
from nl2tag.scanner import TagLedger, count_tags


class TestNewLines:
    @pytest.mark.parametrize("text", [
        "a\nb", "a\r\nb", "a\rb", "a\u2028b", "a\u2029b", "a&#10;b", "a&#13;b", "a&#8232;b",
    ])
    def test_detects_boundaries(self, text):
        assert classifier.has_new_lines(text)

    def test_plain_text_has_none(self):
        assert not classifier.has_new_lines("one line <b>only</b>")


class TestIsBlank:
    def test_whitespace_and_boundaries(self):
        assert classifier.is_blank("\n \t&#10;\r\n")

    def test_control_characters(self):
        assert classifier.is_blank("\n\u200b\ufeff")

    def test_empty_string(self):
        assert classifier.is_blank("")

    def test_text_is_not_blank(self):
        assert not classifier.is_blank("\n x \n")


class TestHasDisallowed:
    def test_phrasing_only(self, content_model):
        assert not classifier.has_disallowed("<b>x</b> <a href='#'>y</a>", content_model.phrasing, "p")

    def test_flow_element_in_paragraph(self, content_model):
        assert classifier.has_disallowed("<table><tr><td>x", content_model.phrasing, "p")

    def test_flow_element_in_list_item(self, content_model):
        assert not classifier.has_disallowed("<div><table>x", content_model.flow, "li")

    def test_table_rows_in_list_item(self, content_model):
        assert classifier.has_disallowed("<table><tr><td>x", content_model.flow, "li") is True

    def test_wrapper_tag_itself_is_allowed(self, content_model):
        assert not classifier.has_disallowed("<p>x</p>", content_model.phrasing, "p")
        assert not classifier.has_disallowed("<li>x</li>", content_model.flow, "li")

    def test_closing_tags_are_ignored(self, content_model):
        assert not classifier.has_disallowed("x</div></section>", content_model.phrasing, "p")

    def test_prefix_of_allowed_name_is_not_allowed(self, content_model):
        # "a" is phrasing content, "article" is not
        assert classifier.has_disallowed("<article>x", content_model.phrasing, "p")

    def test_comments_are_not_elements(self, content_model):
        assert not classifier.has_disallowed("<!-- note -->x", content_model.phrasing, "p")


class TestIsWrapped:
    def test_wrapped_paragraph(self):
        assert classifier.is_wrapped("<p>Hello</p>")

    def test_with_attributes_and_whitespace(self):
        assert classifier.is_wrapped('  <p class="lead">Hello</p>\n')

    def test_spanning_lines(self):
        assert classifier.is_wrapped("<ul>\n<li>a</li>\n</ul>", "ul")

    def test_partial_wrap(self):
        assert not classifier.is_wrapped("<p>Hello</p> world")

    def test_other_tag_with_same_prefix(self):
        assert not classifier.is_wrapped("<pre>x</pre>", "p")

    def test_case_insensitive(self):
        assert classifier.is_wrapped("<LI>x</LI>", "li")

    def test_first_element_closes_early(self):
        assert not classifier.is_wrapped("<p>a</p>\nb\n<p>c</p>")

    def test_nested_same_tag(self):
        assert classifier.is_wrapped("<ul><li>a<ul><li>b</li></ul></li></ul>", "ul")

    def test_unbalanced(self):
        assert not classifier.is_wrapped("<p>a</p></p>")


class TestIsWrappedRun:
    def test_consecutive_items(self):
        assert classifier.is_wrapped_run("<li>a</li><li>b</li>")

    def test_items_separated_by_blanks(self):
        assert classifier.is_wrapped_run("<li>a</li>\n <li>b</li>")

    def test_text_between_items(self):
        assert not classifier.is_wrapped_run("<li>a</li> loose <li>b</li>")

    def test_item_inside_other_element(self):
        assert not classifier.is_wrapped_run("<ul><li>a</li></ul>", "li")

    def test_no_elements(self):
        assert not classifier.is_wrapped_run("plain text", "p")


class TestChangelogMarker:
    @pytest.mark.parametrize("line,marker", [
        ("* changed", "*"),
        ("+ added", "+"),
        ("- removed", "-"),
        ("  <b>+ bold addition</b>", "+"),
        ("\u200b* after zero width space", "*"),
        ("Section name", classifier.GENERIC),
        ("", classifier.GENERIC),
    ])
    def test_classification(self, line, marker):
        assert classifier.changelog_marker(line) == marker

    def test_strip_marker(self):
        assert classifier.strip_changelog_marker("* fix a") == "fix a"

    def test_strip_marker_keeps_leading_tags(self):
        assert classifier.strip_changelog_marker("<b>- gone</b>") == "<b>gone</b>"

    def test_strip_marker_leaves_unmarked_text(self):
        assert classifier.strip_changelog_marker("plain") == "plain"


class TestHasOpenTagFrom:
    def test_detects_carried_tag(self, content_model):
        ledger = TagLedger()
        ledger.update(count_tags("<pre>"))
        assert classifier.has_open_tag_from(ledger, content_model.preserve_space)
        assert not classifier.has_open_tag_from(ledger, content_model.wrapper_only)

    def test_empty_ledger(self, content_model):
        assert not classifier.has_open_tag_from(TagLedger(), content_model.preserve_space)
