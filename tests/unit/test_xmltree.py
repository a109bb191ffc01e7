#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_xmltree.py
"""Tests for the order-preserving XML tree."""
import pytest
from utils import NS_A, NS_C

from pptx2html.exceptions import MalformedFileError
from pptx2html.xmltree import attr, element, parse_xml


@pytest.mark.unit
class TestParseXml:
    """Test parsing into canonical-prefix nodes."""

    def test_canonical_prefixes_regardless_of_document_prefix(self) -> None:
        """Test that a non-standard prefix is exposed under its canonical one."""
        root = parse_xml(f'<drw:xfrm xmlns:drw="{NS_A}"><drw:off x="1" y="2"/></drw:xfrm>')
        assert root.tag == "a:xfrm"
        assert attr(root, "a:off", "y") == "2"

    def test_default_namespace_is_prefixed(self) -> None:
        """Test that elements in a default namespace get their canonical prefix."""
        root = parse_xml(f'<chartSpace xmlns="{NS_C}"><chart/></chartSpace>')
        assert root.tag == "c:chartSpace"
        assert root.first("c:chart") is not None

    def test_children_keep_document_order(self) -> None:
        """Test that interleaved children are not regrouped by name."""
        root = parse_xml(
            f'<a:path xmlns:a="{NS_A}"><a:moveTo/><a:lnTo/><a:close/><a:moveTo/><a:lnTo/></a:path>'
        )
        assert [child.local for child in root.children] == ["moveTo", "lnTo", "close", "moveTo", "lnTo"]

    def test_malformed_xml_raises(self) -> None:
        """Test that broken markup raises MalformedFileError."""
        with pytest.raises(MalformedFileError):
            parse_xml("<a:b><unclosed></a:b>")

    def test_entity_expansion_is_rejected(self) -> None:
        """Test that DTD entity declarations are refused."""
        bomb = '<?xml version="1.0"?><!DOCTYPE x [<!ENTITY a "aaaa">]><x>&a;</x>'
        with pytest.raises(MalformedFileError):
            parse_xml(bomb)

    def test_bytes_input(self) -> None:
        """Test parsing from bytes."""
        root = parse_xml(b'<?xml version="1.0" encoding="UTF-8"?><root a="1"/>')
        assert root.get("a") == "1"
        assert root.declaration is not None


@pytest.mark.unit
class TestNavigation:
    """Test path lookups and attribute helpers."""

    def test_find_returns_none_for_missing_step(self) -> None:
        """Test that a missing step yields None instead of raising."""
        root = parse_xml(f'<a:xfrm xmlns:a="{NS_A}"><a:off x="1"/></a:xfrm>')
        assert root.find("a:ext/a:foo") is None
        assert root.find("") is root

    def test_attr_default(self) -> None:
        """Test attr() falls back to the default at any missing step."""
        assert attr(None, "a:off", "x", "7") == "7"
        root = parse_xml(f'<a:xfrm xmlns:a="{NS_A}"/>')
        assert attr(root, "a:off", "x") is None

    def test_find_all_and_iter(self) -> None:
        """Test find_all over a path and depth-first iter by name."""
        root = parse_xml(
            f'<c:ser xmlns:c="{NS_C}"><c:val><c:numCache><c:pt idx="0"/><c:pt idx="1"/></c:numCache></c:val></c:ser>'
        )
        assert len(root.find_all("c:val/c:numCache/c:pt")) == 2
        assert [pt.get("idx") for pt in root.iter("c:pt")] == ["0", "1"]

    def test_text_content(self) -> None:
        """Test concatenated text of a subtree."""
        root = parse_xml(f'<a:p xmlns:a="{NS_A}"><a:r><a:t>Hello </a:t></a:r><a:r><a:t>world</a:t></a:r></a:p>')
        assert root.text_content() == "Hello world"


@pytest.mark.unit
class TestTreeEdits:
    """Test tree edits and serialization."""

    def test_insert_after_and_serialize(self) -> None:
        """Test inserting a node after an anchor keeps document prefixes."""
        root = parse_xml(f'<cc:chartSpace xmlns:cc="{NS_C}"><cc:date1904 val="0"/><cc:chart/></cc:chartSpace>')
        anchor = root.first("c:date1904")
        root.insert_after(anchor, element("c:roundedCorners", {"val": "0"}))
        xml = root.to_xml()
        assert '<cc:roundedCorners val="0"/>' in xml
        assert xml.index("date1904") < xml.index("roundedCorners") < xml.index("<cc:chart/>")

    def test_declaration_is_preserved(self) -> None:
        """Test that the source XML declaration is written back."""
        source = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n<root/>'
        assert parse_xml(source).to_xml().startswith('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')

    def test_element_builder(self) -> None:
        """Test building nodes directly."""
        node = element("a:ln", {"w": "100"}, element("a:noFill"))
        assert node.get("w") == "100"
        assert node.first("a:noFill") is not None
        assert node.local == "ln"

    def test_index_of_foreign_child_raises(self) -> None:
        """Test that index() rejects a node that is not a child."""
        root = element("a:root")
        with pytest.raises(ValueError):
            root.index(element("a:other"))

    def test_comments_and_instructions_survive(self) -> None:
        """Test an edited tree still carries the source comments and PIs."""
        root = parse_xml(
            f'<?xml version="1.0"?><!-- head --><c:chartSpace xmlns:c="{NS_C}"><?keep me?>'
            '<c:chart/><!-- tail --></c:chartSpace>'
        )
        assert [child.tag for child in root.children] == ["c:chart"]
        root.insert(0, element("c:roundedCorners", {"val": "0"}))
        xml = root.to_xml()
        assert "<!-- head -->" in xml
        assert "<?keep me?>" in xml
        assert "<!-- tail -->" in xml
        assert xml.index("roundedCorners") < xml.index("<c:chart/>")

    def test_element_copies_children(self) -> None:
        """Test building a node does not move children out of their tree."""
        source = parse_xml(f'<a:ln xmlns:a="{NS_A}"><a:noFill/></a:ln>')
        built = element("a:ln", None, *source.children)
        assert source.first("a:noFill") is not None
        assert built.first("a:noFill") is not None
        assert built.first("a:noFill") != source.first("a:noFill")

    def test_attribute_edits_write_through(self) -> None:
        """Test attribute edits reach the serialized XML."""
        root = parse_xml(f'<a:ln xmlns:a="{NS_A}" w="12700" cap="flat"/>')
        root.attrs["w"] = "9525"
        del root.attrs["cap"]
        assert root.attrs.pop("missing", None) is None
        assert dict(root.attrs) == {"w": "9525"}
        assert root.to_xml() == f'<a:ln xmlns:a="{NS_A}" w="9525"/>'
