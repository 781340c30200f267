#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the structural normalizer stage."""

import pytest

from paste2dita.dom.utils import parse_markup, serialize
from paste2dita.options import StructureOptions
from paste2dita.transforms.structure import StructuralNormalizer, normalize_structure, rename, wrap_contents


@pytest.mark.unit
class TestHeadings:
    """Tests for title, section and heading demotion."""

    def test_title_and_section(self) -> None:
        """Test that the first top-level heading becomes the title of one section."""
        assert StructuralNormalizer().run("<h1>A</h1><p>x</p><h2>B</h2>") == (
            "<section><title>A</title><p>x</p><b>B</b></section>"
        )

    def test_single_title(self) -> None:
        """Test that further top-level headings are demoted."""
        output = StructuralNormalizer().run("<h1>A</h1><p>x</p><h1>B</h1><p>y</p>")
        assert output == "<section><title>A</title><p>x</p><b>B</b><p>y</p></section>"
        assert output.count("<title>") == 1

    def test_no_title(self) -> None:
        """Test that without a top-level heading nothing is wrapped."""
        soup = parse_markup("<h2>B</h2><h3>C</h3><p>x</p>")
        result, message = StructuralNormalizer().apply_with_summary(soup)
        assert serialize(result) == "<b>B</b><b>C</b><p>x</p>"
        assert message.startswith("structure: title=no")

    def test_section_wrapping_disabled(self) -> None:
        """Test the wrap_section switch."""
        stage = StructuralNormalizer(StructureOptions(wrap_section=False))
        assert stage.run("<h1>A</h1><p>x</p>") == "<title>A</title><p>x</p>"


@pytest.mark.unit
class TestCleanup:
    """Tests for style promotion, attribute and wrapper removal."""

    def test_marker_runs_dropped(self) -> None:
        """Test that leftover list-marker runs are removed."""
        assert StructuralNormalizer().run('<p><span style="mso-list:Ignore">1.</span>Text</p>') == "<p>Text</p>"

    def test_style_promoted_to_emphasis(self) -> None:
        """Test that emphasis declarations become wrapper elements."""
        assert StructuralNormalizer().run('<p>a <span style="font-weight:bold;font-style:italic">b</span></p>') == (
            "<p>a <i><b>b</b></i></p>"
        )

    def test_paragraph_style_promoted(self) -> None:
        """Test that a styled block wraps its content, not itself."""
        assert StructuralNormalizer().run('<p style="text-decoration:underline">x</p>') == "<p><u>x</u></p>"

    def test_structural_style_not_wrapped(self) -> None:
        """Test that list and table containers never get an emphasis child."""
        assert StructuralNormalizer().run('<ul style="font-weight:bold"><li>x</li></ul>') == "<ul><li>x</li></ul>"

    def test_presentational_wrappers_unwrapped(self) -> None:
        """Test that font, span and s are replaced by their content."""
        assert StructuralNormalizer().run("<p><font>a</font><span>b</span><s>c</s></p>") == "<p>abc</p>"

    def test_attributes_dropped(self) -> None:
        """Test presentational, data and empty-valued attribute removal."""
        markup = '<p class="c" id="i" align="left" lang="en" data-x="1" dir="" title="t">x</p>'
        assert StructuralNormalizer().run(markup) == '<p title="t">x</p>'

    def test_nbsp_converted(self) -> None:
        """Test that non-breaking spaces become collapsed spaces."""
        assert StructuralNormalizer().run("<p>a\xa0\xa0b</p>") == "<p>a b</p>"

    def test_nbsp_kept_when_disabled(self) -> None:
        """Test the convert_nbsp switch."""
        stage = StructuralNormalizer(StructureOptions(convert_nbsp=False))
        assert stage.run("<p>a\xa0b</p>") == "<p>a\xa0b</p>"

    def test_containers_become_paragraphs(self) -> None:
        """Test div to p conversion."""
        assert StructuralNormalizer().run("<div>x</div>") == "<p>x</p>"


@pytest.mark.unit
class TestLinksAndEmptyElements:
    """Tests for cross-references, empty-element removal and line breaks."""

    def test_links_to_xrefs(self) -> None:
        """Test that links become external cross-references and bare anchors unwrap."""
        markup = '<p><a href="https://example.com" target="_blank">site</a> <a name="x">here</a></p>'
        assert StructuralNormalizer().run(markup) == (
            '<p><xref scope="external" format="html" href="https://example.com">site</xref> here</p>'
        )

    def test_link_attributes_from_options(self) -> None:
        """Test configurable scope and format."""
        stage = StructuralNormalizer(StructureOptions(link_scope="peer", link_format="dita"))
        assert stage.run('<a href="t.dita">t</a>') == '<xref scope="peer" format="dita" href="t.dita">t</xref>'

    def test_empty_elements_removed(self) -> None:
        """Test that empty elements go unless they hold an image or are preserved."""
        soup = parse_markup('<p>keep</p><p> </p><p><b></b></p><p><img src="a.png"></p><ul><li></li></ul>')
        result, message = StructuralNormalizer().apply_with_summary(soup)
        assert serialize(result) == '<p>keep</p><p><img src="a.png"/></p><ul><li></li></ul>'
        assert message == "structure: title=no, 0 link(s), 3 empty removed"

    def test_empty_structured_table_kept(self) -> None:
        """Test that structured-table elements survive without content."""
        markup = "<tgroup><tbody><row><entry></entry></row></tbody></tgroup>"
        assert StructuralNormalizer().run(markup) == markup

    def test_line_breaks(self) -> None:
        """Test collapsing consecutive breaks and dropping a trailing one."""
        assert StructuralNormalizer().run("<p>a<br><br>b<br></p>") == "<p>a<br/>b</p>"

    def test_inline_trailing_break_kept(self) -> None:
        """Test that a trailing break inside inline content is not a block edge."""
        assert StructuralNormalizer().run("<p><b>a<br></b>c</p>") == "<p><b>a<br/></b>c</p>"


@pytest.mark.unit
class TestInlineMerge:
    """Tests for unwrapping and merging inline emphasis."""

    def test_adjacent_merged(self) -> None:
        """Test that siblings separated by whitespace merge into the first."""
        assert StructuralNormalizer().run("<p><b>a</b> <b>c</b></p>") == "<p><b>a c</b></p>"

    def test_chain_merged(self) -> None:
        """Test merging more than two siblings."""
        assert StructuralNormalizer().run("<p><i>a</i><i>b</i><i>c</i>d</p>") == "<p><i>abc</i>d</p>"

    def test_nested_unwrapped(self) -> None:
        """Test that an element directly inside an identical one is unwrapped."""
        assert StructuralNormalizer().run("<p><b>x<b>y</b></b></p>") == "<p><b>xy</b></p>"

    def test_different_tags_not_merged(self) -> None:
        """Test that different emphasis kinds stay apart."""
        assert StructuralNormalizer().run("<p><b>a</b><i>b</i></p>") == "<p><b>a</b><i>b</i></p>"

    def test_text_between_prevents_merge(self) -> None:
        """Test that non-whitespace text keeps siblings apart."""
        assert StructuralNormalizer().run("<p><b>a</b>, <b>c</b></p>") == "<p><b>a</b>, <b>c</b></p>"


@pytest.mark.unit
class TestHelpers:
    """Tests for the tree helpers and the functional entry point."""

    def test_wrap_contents(self) -> None:
        """Test wrapping all children of an element."""
        soup = parse_markup("<p>a<b>b</b></p>")
        wrapper = wrap_contents(soup, soup.p, "i")
        assert wrapper.name == "i"
        assert serialize(soup) == "<p><i>a<b>b</b></i></p>"

    def test_rename(self) -> None:
        """Test renaming replaces attributes."""
        soup = parse_markup('<a href="u" class="c">x</a>')
        rename(soup.a, "xref", {"href": "u"})
        assert serialize(soup) == '<xref href="u">x</xref>'

    def test_module_function(self) -> None:
        """Test the functional entry point."""
        assert serialize(normalize_structure(parse_markup("<div>x</div>"))) == "<p>x</p>"
