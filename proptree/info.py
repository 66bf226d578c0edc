"""Reading property trees from the INFO format."""

from __future__ import annotations

import os
from enum import Enum, auto
from typing import IO, Tuple, Union

from proptree.exceptions import FileParserError
from proptree.tree import PropertyTree

__all__ = ["InfoParserError", "expand_escapes", "loads_info", "read_info"]

Source = Union[str, "os.PathLike[str]", IO[str]]

_MAX_INCLUDE_DEPTH = 100

_SPACE = frozenset(" \t\n\v\f\r")

_ESCAPES = {
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


class InfoParserError(FileParserError):
    """An error found while reading INFO data."""


def expand_escapes(text: str) -> str:
    """Replace the known backslash escape sequences in ``text``."""
    parts = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            parts.append(ch)
            continue
        following = next(chars, None)
        if following is None:
            raise InfoParserError("character expected after backslash", "", 0)
        try:
            parts.append(_ESCAPES[following])
        except KeyError:
            raise InfoParserError("unknown escape sequence", "", 0) from None
    return "".join(parts)


class _Cursor:
    """A position within one line; a NUL character ends the line."""

    __slots__ = ("text", "pos")

    def __init__(self, line: str) -> None:
        self.text = line.split("\0", 1)[0]
        self.pos = 0

    @property
    def char(self) -> str:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def at_line_end(self) -> bool:
        return self.char in ("", ";")

    def skip_whitespace(self) -> None:
        while self.char in _SPACE:
            self.pos += 1


def _read_word(cur: _Cursor) -> str:
    cur.skip_whitespace()
    start = cur.pos
    while cur.char and cur.char not in _SPACE and cur.char != ";":
        cur.pos += 1
    return expand_escapes(cur.text[start:cur.pos])


def _read_string(cur: _Cursor, allow_continuation: bool) -> Tuple[str, bool]:
    """Read a quoted string; also report whether a trailing ``\\`` continues it."""
    cur.skip_whitespace()
    if cur.char != '"':
        raise InfoParserError('expected "', "", 0)
    cur.pos += 1
    escaped = False
    start = cur.pos
    while (escaped or cur.char != '"') and cur.char:
        escaped = not escaped and cur.char == "\\"
        cur.pos += 1
    if cur.char != '"':
        raise InfoParserError("unexpected end of line", "", 0)
    result = expand_escapes(cur.text[start:cur.pos])
    cur.pos += 1
    cur.skip_whitespace()
    if cur.char != "\\":
        return result, False
    if not allow_continuation:
        raise InfoParserError("unexpected \\", "", 0)
    cur.pos += 1
    cur.skip_whitespace()
    if not cur.at_line_end():
        raise InfoParserError("expected end of line after \\", "", 0)
    return result, True


def _read_key(cur: _Cursor) -> str:
    cur.skip_whitespace()
    if cur.char == '"':
        return _read_string(cur, False)[0]
    return _read_word(cur)


def _read_data(cur: _Cursor) -> Tuple[str, bool]:
    cur.skip_whitespace()
    if cur.char == '"':
        return _read_string(cur, True)
    return _read_word(cur), False


class _State(Enum):
    KEY = auto()
    DATA = auto()
    DATA_CONTINUATION = auto()


def _parse(text: str, tree: PropertyTree, filename: str, depth: int) -> None:
    stack = [tree]
    last: PropertyTree | None = None
    state = _State.KEY
    line_no = 0

    try:
        for line_no, raw in enumerate(text.split("\n"), start=1):
            cur = _Cursor(raw)
            cur.skip_whitespace()

            if cur.char == "#":
                cur.pos += 1
                directive = _read_word(cur)
                if directive != "include":
                    raise InfoParserError("unknown directive", filename, line_no)
                if depth > _MAX_INCLUDE_DEPTH:
                    raise InfoParserError(
                        "include depth too large, probably recursive include",
                        filename, line_no)
                include_name, _ = _read_string(cur, False)
                try:
                    with open(include_name, encoding="utf-8") as stream:
                        included = stream.read()
                except OSError:
                    raise InfoParserError(
                        "cannot open include file " + include_name,
                        filename, line_no) from None
                _parse(included, stack[-1], include_name, depth + 1)
                cur.skip_whitespace()
                if cur.char:
                    raise InfoParserError("expected end of line", filename, line_no)
                continue

            while True:
                cur.skip_whitespace()
                if cur.at_line_end():
                    if state is _State.DATA:
                        state = _State.KEY
                    break

                if state is _State.KEY:
                    if cur.char == "{":
                        if last is None:
                            raise InfoParserError("unexpected {", "", 0)
                        stack.append(last)
                        last = None
                        cur.pos += 1
                    elif cur.char == "}":
                        if len(stack) <= 1:
                            raise InfoParserError("unmatched }", "", 0)
                        stack.pop()
                        last = None
                        cur.pos += 1
                    else:
                        key = _read_key(cur)
                        last = stack[-1].push_back(key)
                        state = _State.DATA

                elif state is _State.DATA:
                    assert last is not None
                    if cur.char == "{":
                        stack.append(last)
                        last = None
                        cur.pos += 1
                        state = _State.KEY
                    elif cur.char == "}":
                        if len(stack) <= 1:
                            raise InfoParserError("unmatched }", "", 0)
                        stack.pop()
                        last = None
                        cur.pos += 1
                        state = _State.KEY
                    else:
                        data, more = _read_data(cur)
                        last.data = data
                        state = _State.DATA_CONTINUATION if more else _State.KEY

                else:
                    assert last is not None
                    if cur.char != '"':
                        raise InfoParserError(
                            'expected " after \\ in previous line', "", 0)
                    data, more = _read_string(cur, True)
                    last.data = last.data + data
                    state = _State.DATA_CONTINUATION if more else _State.KEY

        if len(stack) != 1:
            raise InfoParserError("unmatched {", "", 0)

    except InfoParserError as error:
        if error.line == 0:
            raise InfoParserError(error.message, filename, line_no) from None
        raise


def loads_info(text: str, filename: str = "") -> PropertyTree:
    """Parse INFO text into a new tree.

    ``filename`` is used in error messages. Include directives name files
    that are opened as given.
    """
    tree = PropertyTree()
    _parse(text, tree, filename, 0)
    return tree


def read_info(source: Source) -> PropertyTree:
    """Read INFO from a file name or a readable text stream."""
    if isinstance(source, (str, os.PathLike)):
        filename = os.fspath(source)
        try:
            with open(filename, encoding="utf-8") as stream:
                text = stream.read()
        except OSError:
            raise InfoParserError("cannot open file", filename, 0) from None
        return loads_info(text, filename)
    try:
        text = source.read()
    except OSError:
        raise InfoParserError("read error", "", 0) from None
    return loads_info(text, "")