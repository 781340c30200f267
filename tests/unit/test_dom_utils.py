#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for tree parsing, traversal and serialization helpers."""

import pytest

from paste2dita.dom.utils import (
    Token,
    collapse_whitespace,
    find_elements,
    iter_tokens,
    parse_markup,
    serialize,
    serialize_element,
    strip_edges,
    text_content,
)
from paste2dita.exceptions import DependencyError


@pytest.mark.unit
class TestParseMarkup:
    """Tests for parse_markup."""

    def test_class_kept_as_string(self) -> None:
        """Test that multi-valued attributes are not split."""
        soup = parse_markup('<p class="MsoNormal custom">x</p>')
        assert soup.p["class"] == "MsoNormal custom"

    def test_unknown_parser_raises_dependency_error(self) -> None:
        """Test that a missing tree builder is reported as a dependency problem."""
        with pytest.raises(DependencyError) as exc_info:
            parse_markup("<p>x</p>", "no-such-parser")
        assert exc_info.value.missing_packages == ["no-such-parser"]


@pytest.mark.unit
class TestSerialize:
    """Tests for the token walker and serializer."""

    def test_void_elements_self_closed(self) -> None:
        """Test that childless void elements serialize as empty tags."""
        assert serialize(parse_markup("<p>a<br>b<img src='x.png'></p>")) == '<p>a<br/>b<img src="x.png"/></p>'

    def test_non_void_empty_element(self) -> None:
        """Test that other empty elements keep an explicit close tag."""
        assert serialize(parse_markup("<entry></entry>")) == "<entry></entry>"

    def test_text_escaped(self) -> None:
        """Test that markup characters in text are escaped."""
        assert serialize(parse_markup("<p>a &amp; b &lt; c</p>")) == "<p>a &amp; b &lt; c</p>"

    def test_attribute_quoting(self) -> None:
        """Test that attribute values containing double quotes use single quotes."""
        assert serialize(parse_markup("<p title='say \"hi\"'>x</p>")) == "<p title='say \"hi\"'>x</p>"

    def test_comment_is_raw(self) -> None:
        """Test that comments are emitted verbatim."""
        soup = parse_markup("<!--note--><p>x</p>")
        tokens = list(iter_tokens(soup))
        assert tokens[0] == Token("raw", text="<!--note-->")
        assert serialize(soup) == "<!--note--><p>x</p>"

    def test_serialize_element_includes_own_tags(self) -> None:
        """Test serializing a single element."""
        soup = parse_markup("<div><p id='a'>x</p></div>")
        assert serialize_element(soup.p) == '<p id="a">x</p>'

    def test_token_render(self) -> None:
        """Test rendering individual tokens."""
        assert Token("empty", "colspec", (("colnum", "1"), ("colwidth", "1*"))).render() == (
            '<colspec colnum="1" colwidth="1*"/>'
        )
        assert Token("open", "row").render() == "<row>"
        assert Token("close", "row").render() == "</row>"
        assert Token("text", text="a<b").render() == "a&lt;b"


@pytest.mark.unit
class TestTreeHelpers:
    """Tests for text and whitespace helpers."""

    def test_text_content_skips_comments(self) -> None:
        """Test that comment text is not part of the character data."""
        soup = parse_markup("<p>a<!--hidden--><b>b</b></p>")
        assert text_content(soup.p) == "ab"

    def test_collapse_whitespace_skips_pre(self) -> None:
        """Test whitespace collapsing outside preformatted blocks."""
        soup = parse_markup("<p>a   \n\t b</p><pre>x   y</pre>")
        collapse_whitespace(soup)
        assert serialize(soup) == "<p>a b</p><pre>x   y</pre>"

    def test_collapse_keeps_nbsp(self) -> None:
        """Test that non-breaking spaces are not treated as ASCII whitespace."""
        soup = parse_markup("<p>a\xa0\xa0b</p>")
        collapse_whitespace(soup)
        assert text_content(soup.p) == "a\xa0\xa0b"

    def test_strip_edges_crosses_empty_leaves(self) -> None:
        """Test trimming continues into the next leaf when one empties."""
        soup = parse_markup("<li> <b> x</b> </li>")
        strip_edges(soup.li)
        assert serialize(soup) == "<li><b>x</b></li>"

    def test_find_elements_snapshot(self) -> None:
        """Test that find_elements returns matches in document order."""
        soup = parse_markup("<ul><li>a</li></ul><ol><li>b</li></ol>")
        assert [el.name for el in find_elements(soup, ("ol", "ul"))] == ["ul", "ol"]
