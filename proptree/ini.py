"""Reading and writing property trees in INI format."""

from __future__ import annotations

import os
from typing import IO, Union

from proptree.exceptions import FileParserError
from proptree.tree import PropertyTree

__all__ = [
    "IniParserError",
    "validate_flags",
    "loads_ini",
    "read_ini",
    "dumps_ini",
    "write_ini",
]

Source = Union[str, "os.PathLike[str]", IO[str]]


class IniParserError(FileParserError):
    """An error found while reading or writing INI data."""


def validate_flags(flags: int) -> bool:
    """Whether ``flags`` may be passed to the INI writer; none are defined."""
    return flags == 0


def loads_ini(text: str) -> PropertyTree:
    """Parse INI text into a new tree.

    Sections become children of the root holding their keys; keys before any
    section are children of the root. Empty sections are dropped.
    """
    result = PropertyTree()
    section: PropertyTree | None = None

    for line_no, raw in enumerate(text.split("\n"), start=1):
        line = raw.strip()
        if not line or line[0] in ";#":
            continue
        if line[0] == "[":
            if section is not None and section.empty():
                result.pop_back()
            end = line.find("]")
            if end == -1:
                raise IniParserError("unmatched '['", "", line_no)
            key = line[1:end].strip()
            if result.find(key) is not None:
                raise IniParserError("duplicate section name", "", line_no)
            section = result.push_back(key)
            continue

        container = section if section is not None else result
        eqpos = line.find("=")
        if eqpos == -1:
            raise IniParserError("'=' character not found in line", "", line_no)
        if eqpos == 0:
            raise IniParserError("key expected", "", line_no)
        key = line[:eqpos].strip()
        data = line[eqpos + 1:].strip()
        if container.find(key) is not None:
            raise IniParserError("duplicate key name", "", line_no)
        container.push_back(key, PropertyTree(data))

    if section is not None and section.empty():
        result.pop_back()
    return result


def read_ini(source: Source) -> PropertyTree:
    """Read INI from a file name or a readable text stream."""
    if isinstance(source, (str, os.PathLike)):
        filename = os.fspath(source)
        try:
            with open(filename, encoding="utf-8") as stream:
                text = stream.read()
        except OSError:
            raise IniParserError("cannot open file", filename, 0) from None
        try:
            return loads_ini(text)
        except IniParserError as error:
            raise IniParserError(error.message, filename, error.line) from None
    try:
        text = source.read()
    except OSError:
        raise IniParserError("read error", "", 0) from None
    return loads_ini(text)


def _check_dupes(tree: PropertyTree) -> None:
    keys = [key for key, _ in tree]
    if len(set(keys)) != len(keys):
        raise IniParserError("duplicate key", "", 0)


def _key_lines(tree: PropertyTree, throw_on_children: bool):
    for key, child in tree:
        if not child.empty():
            if throw_on_children:
                raise IniParserError("ptree is too deep", "", 0)
            continue
        yield f"{key}={child.get_value(str)}\n"


def _section_lines(tree: PropertyTree):
    for key, child in tree:
        if child.empty():
            continue
        _check_dupes(child)
        if child.data:
            raise IniParserError("mixed data and children", "", 0)
        yield f"[{key}]\n"
        yield from _key_lines(child, True)


def dumps_ini(tree: PropertyTree, flags: int = 0) -> str:
    """Render ``tree`` as INI text.

    The root may hold no data, nodes may not hold both data and children,
    the tree may be at most two levels deep, and no level may repeat a key.
    """
    if not validate_flags(flags):
        raise ValueError(f"invalid INI writer flags: {flags!r}")
    if tree.data:
        raise IniParserError("ptree has data on root", "", 0)
    _check_dupes(tree)
    parts = list(_key_lines(tree, False))
    parts.extend(_section_lines(tree))
    return "".join(parts)


def write_ini(target: Source, tree: PropertyTree, flags: int = 0) -> None:
    """Write ``tree`` as INI to a file name or a writable text stream."""
    if isinstance(target, (str, os.PathLike)):
        filename = os.fspath(target)
        try:
            text = dumps_ini(tree, flags)
        except IniParserError as error:
            raise IniParserError(error.message, filename, error.line) from None
        try:
            with open(filename, "w", encoding="utf-8") as stream:
                stream.write(text)
        except OSError:
            raise IniParserError("cannot open file", filename, 0) from None
        return
    text = dumps_ini(tree, flags)
    try:
        target.write(text)
    except OSError:
        raise IniParserError("write error", "", 0) from None