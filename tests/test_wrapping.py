"""Tests for the block classification helpers behind wrapping."""

from __future__ import annotations

import random

from patitas.location import SourceLocation
from patitas.nodes import (
    Document,
    FootnoteDef,
    Heading,
    HtmlBlock,
    List,
    ListItem,
    Paragraph,
    Text,
    ThematicBreak,
)

from krimdown.renderers.html import (
    WrappedHtmlRenderer,
    block_tag,
    code_language,
    html_div_balance,
    is_blank,
    is_wrappable,
    node_category,
)

loc = SourceLocation(1, 1)


def para(text: str) -> Paragraph:
    return Paragraph(location=loc, children=(Text(location=loc, content=text),))


class TestBlockTag:
    def test_known_tags(self) -> None:
        assert block_tag(Heading(location=loc, level=2, children=())) == "header"
        assert block_tag(para("x")) == "p"
        assert block_tag(ThematicBreak(location=loc)) == "hr"

    def test_list_tags(self) -> None:
        item = ListItem(location=loc, children=(para("x"),))
        assert block_tag(List(location=loc, items=(item,))) == "ul"
        assert block_tag(List(location=loc, items=(item,), ordered=True)) == "ol"

    def test_untagged_block_uses_class_name(self) -> None:
        assert block_tag(ListItem(location=loc, children=(para("x"),))) == "listitem"


class TestClassification:
    def test_inline_nodes(self) -> None:
        assert node_category(Text(location=loc, content="x")) == "inline"
        assert node_category(para("x")) == "block"
        assert node_category(HtmlBlock(location=loc, html="<div>\n")) == "block"

    def test_div_balance(self) -> None:
        assert html_div_balance('<div class="note">\n') == 1
        assert html_div_balance("</DIV>\n") == -1
        assert html_div_balance("<div><div>x</div></div>\n") == 0
        assert html_div_balance("<p>x</p>\n") == 0

    def test_blank(self) -> None:
        assert is_blank(Paragraph(location=loc, children=()))
        assert is_blank(HtmlBlock(location=loc, html="  \n"))
        assert not is_blank(para("x"))

    def test_wrappable(self) -> None:
        assert is_wrappable(para("x"))
        assert not is_wrappable(HtmlBlock(location=loc, html="<div>x</div>\n"))
        assert not is_wrappable(FootnoteDef(location=loc, identifier="1", children=()))
        assert not is_wrappable(Paragraph(location=loc, children=()))


class TestCodeLanguage:
    def test_first_word(self) -> None:
        assert code_language("ruby startline=3") == "ruby"

    def test_entities_decoded(self) -> None:
        assert code_language("c&#43;&#43;") == "c++"

    def test_missing(self) -> None:
        assert code_language(None) is None
        assert code_language("") is None
        assert code_language("   ") is None


class TestWrappedHtmlRenderer:
    """Rendering hand-built trees."""

    def test_only_root_children_wrapped(self) -> None:
        item = ListItem(location=loc, children=(para("inner"),))
        doc = Document(
            location=loc,
            children=(para("top"), List(location=loc, items=(item,))),
        )

        html = WrappedHtmlRenderer(rng=random.Random(0)).render(doc)

        assert html.count('<div class="block ') == 2
        assert '<div class="block p ' in html
        assert '<div class="block ul ' in html
        assert "<li>inner</li>" in html

    def test_headings_collected(self) -> None:
        doc = Document(
            location=loc,
            children=(Heading(location=loc, level=1, children=(Text(location=loc, content="Elm"),)),),
        )
        renderer = WrappedHtmlRenderer()
        renderer.render(doc)

        assert [h.slug for h in renderer.get_headings()] == ["elm"]
