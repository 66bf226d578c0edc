"""Writing property trees as XML."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import IO, Iterator, Optional, Union

from proptree.exceptions import FileParserError
from proptree.tree import PropertyTree

__all__ = [
    "XMLATTR",
    "XMLCOMMENT",
    "XMLTEXT",
    "XmlParserError",
    "XmlWriterSettings",
    "encode_char_entities",
    "dumps_xml",
    "write_xml",
]

XMLATTR = "<xmlattr>"
XMLCOMMENT = "<xmlcomment>"
XMLTEXT = "<xmltext>"

_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "'": "&apos;",
}


class XmlParserError(FileParserError):
    """An error found while reading or writing XML."""


@dataclass(frozen=True)
class XmlWriterSettings:
    """How XML output is laid out; an indent count of 0 disables pretty printing."""

    indent_char: str = " "
    indent_count: int = 0
    encoding: str = "utf-8"


def encode_char_entities(text: str) -> str:
    """Replace XML special characters with entity references.

    A string made only of spaces keeps its first space as ``&#32;`` so that
    it is not collapsed away.
    """
    if not text:
        return text
    if not text.strip(" "):
        return "&#32;" + " " * (len(text) - 1)
    return "".join(_ENTITIES.get(ch, ch) for ch in text)


def _indent(indent: int, settings: XmlWriterSettings) -> str:
    return settings.indent_char * (max(indent, 0) * settings.indent_count)


def _comment(text: str, indent: int, separate_line: bool,
             settings: XmlWriterSettings) -> Iterator[str]:
    if separate_line:
        yield _indent(indent, settings)
    yield f"<!--{text}-->"
    if separate_line:
        yield "\n"


def _text(text: str, indent: int, separate_line: bool,
          settings: XmlWriterSettings) -> Iterator[str]:
    if separate_line:
        yield _indent(indent, settings)
    yield encode_char_entities(text)
    if separate_line:
        yield "\n"


def _element(key: str, node: PropertyTree, indent: int,
             settings: XmlWriterSettings) -> Iterator[str]:
    want_pretty = settings.indent_count > 0
    has_elements = False
    has_attrs_only = not node.data
    for child_key, _ in node:
        if child_key != XMLATTR:
            has_attrs_only = False
            if child_key != XMLTEXT:
                has_elements = True
                break

    if not node.data and node.empty():
        if indent >= 0:
            yield _indent(indent, settings)
            yield f"<{key}/>"
            if want_pretty:
                yield "\n"
        return

    if indent >= 0:
        yield _indent(indent, settings)
        yield f"<{key}"
        attribs = node.find(XMLATTR)
        if attribs is not None:
            for name, attr in attribs:
                yield f' {name}="{encode_char_entities(attr.get_value(str))}"'
        if has_attrs_only:
            yield "/>"
            if want_pretty:
                yield "\n"
        else:
            yield ">"
            if has_elements and want_pretty:
                yield "\n"

    separate_text = has_elements and want_pretty
    if node.data:
        yield from _text(node.get_value(str), indent + 1, separate_text, settings)

    for child_key, child in node:
        if child_key == XMLATTR:
            continue
        if child_key == XMLCOMMENT:
            yield from _comment(child.get_value(str), indent + 1, want_pretty, settings)
        elif child_key == XMLTEXT:
            yield from _text(child.get_value(str), indent + 1, separate_text, settings)
        else:
            yield from _element(child_key, child, indent + 1, settings)

    if indent >= 0 and not has_attrs_only:
        if has_elements:
            yield _indent(indent, settings)
        yield f"</{key}>"
        if want_pretty:
            yield "\n"


def dumps_xml(tree: PropertyTree, settings: Optional[XmlWriterSettings] = None) -> str:
    """Render ``tree`` as an XML document; the root's children are top-level nodes."""
    settings = settings or XmlWriterSettings()
    header = f'<?xml version="1.0" encoding="{settings.encoding}"?>\n'
    return header + "".join(_element("", tree, -1, settings))


def write_xml(target: Union[str, "os.PathLike[str]", IO[str]], tree: PropertyTree,
              settings: Optional[XmlWriterSettings] = None) -> None:
    """Write ``tree`` as XML to a file name or a writable text stream."""
    settings = settings or XmlWriterSettings()
    text = dumps_xml(tree, settings)
    if isinstance(target, (str, os.PathLike)):
        filename = os.fspath(target)
        try:
            stream = open(filename, "w", encoding=settings.encoding)
        except OSError:
            raise XmlParserError("cannot open file", filename, 0) from None
        with stream:
            try:
                stream.write(text)
            except OSError:
                raise XmlParserError("write error", filename, 0) from None
        return
    try:
        target.write(text)
    except OSError:
        raise XmlParserError("write error", "", 0) from None