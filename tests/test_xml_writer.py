import html
import io
import xml.etree.ElementTree as ET

import pytest

from proptree.exceptions import FileParserError
from proptree.tree import PropertyTree
from proptree.xml_writer import (
    XMLATTR,
    XMLCOMMENT,
    XMLTEXT,
    XmlParserError,
    XmlWriterSettings,
    dumps_xml,
    encode_char_entities,
    write_xml,
)


def _parse(text):
    return ET.fromstring(text.encode("utf-8"))


def _sample_tree():
    tree = PropertyTree()
    tree.put("doc.first", "one")
    tree.put("doc.second", "two")
    tree.put(f"doc.{XMLATTR}.id", "7")
    return tree


def test_header_for_empty_tree():
    assert dumps_xml(PropertyTree()) == '<?xml version="1.0" encoding="utf-8"?>\n'


def test_header_uses_encoding():
    settings = XmlWriterSettings(encoding="latin-1")
    text = dumps_xml(PropertyTree(), settings)
    assert text.startswith('<?xml version="1.0" encoding="latin-1"?>')


def test_structure_round_trips():
    root = _parse(dumps_xml(_sample_tree()))
    assert root.tag == "doc"
    assert root.attrib == {"id": "7"}
    assert [child.tag for child in root] == ["first", "second"]
    assert [child.text for child in root] == ["one", "two"]


def test_special_characters_round_trip():
    value = '<tag attr="v"> & \'q\''
    tree = PropertyTree()
    tree.put("a", value)
    tree.put(f"a.{XMLATTR}.name", value)
    root = _parse(dumps_xml(tree))
    assert root.text == value
    assert root.attrib["name"] == value


def test_empty_node_is_self_closing():
    tree = PropertyTree()
    tree.add_child("a", PropertyTree())
    assert dumps_xml(tree).endswith("<a/>")


def test_attributes_only_element():
    tree = PropertyTree()
    tree.put(f"item.{XMLATTR}.id", "1")
    text = dumps_xml(tree)
    assert "</item>" not in text
    assert _parse(text).attrib == {"id": "1"}


def test_attributes_and_data():
    tree = PropertyTree()
    tree.put("item", "payload")
    tree.put(f"item.{XMLATTR}.id", "1")
    root = _parse(dumps_xml(tree))
    assert root.text == "payload"
    assert root.attrib == {"id": "1"}


def test_pretty_printing():
    settings = XmlWriterSettings(indent_count=2)
    tree = PropertyTree()
    tree.put("a.b", "x")
    header = dumps_xml(PropertyTree(), settings)
    assert dumps_xml(tree, settings) == header + "<a>\n  <b>x</b>\n</a>\n"


def test_pretty_indentation_grows_with_depth():
    settings = XmlWriterSettings(indent_char="\t", indent_count=1)
    tree = PropertyTree()
    tree.put("a.b.c", "x")
    lines = dumps_xml(tree, settings).splitlines()[1:]
    assert lines[0].startswith("<a>")
    assert lines[1].startswith("\t<b>")
    assert lines[2].startswith("\t\t<c>")
    assert lines[-1] == "</a>"


def test_pretty_output_parses_the_same():
    settings = XmlWriterSettings(indent_count=4)
    root = _parse(dumps_xml(_sample_tree(), settings))
    assert [child.text for child in root] == ["one", "two"]
    assert root.attrib == {"id": "7"}


def test_comment_written():
    tree = PropertyTree()
    tree.put(f"a.{XMLCOMMENT}", " note ")
    tree.put("a.b", "x")
    assert "<!-- note -->" in dumps_xml(tree)


def test_text_child_and_data():
    tree = PropertyTree()
    tree.put("a", "hello")
    tree.add(f"a.{XMLTEXT}", " world")
    root = _parse(dumps_xml(tree))
    assert root.text == "hello world"


def test_encode_char_entities_round_trip():
    for value in ["plain", "a<b>c", "x & y", "say \"hi\"", "it's", ""]:
        encoded = encode_char_entities(value)
        assert html.unescape(encoded) == value
        assert "<" not in encoded and ">" not in encoded and '"' not in encoded


def test_encode_all_spaces():
    encoded = encode_char_entities("   ")
    assert encoded.startswith("&#32;")
    assert html.unescape(encoded) == "   "


def test_write_to_stream_matches_dumps():
    stream = io.StringIO()
    write_xml(stream, _sample_tree())
    assert stream.getvalue() == dumps_xml(_sample_tree())


def test_write_to_file(tmp_path):
    target = tmp_path / "out.xml"
    write_xml(str(target), _sample_tree())
    assert target.read_text(encoding="utf-8") == dumps_xml(_sample_tree())


def test_write_cannot_open(tmp_path):
    target = tmp_path / "missing" / "out.xml"
    with pytest.raises(XmlParserError) as info:
        write_xml(str(target), _sample_tree())
    assert info.value.message == "cannot open file"
    assert info.value.filename == str(target)


class _FailingStream:
    def write(self, text):
        raise OSError("disk full")


def test_write_error_on_stream():
    with pytest.raises(FileParserError) as info:
        write_xml(_FailingStream(), _sample_tree())
    assert isinstance(info.value, XmlParserError)
    assert info.value.message == "write error"