"""Exception types raised by property trees and their parsers."""

from __future__ import annotations

from typing import Any

__all__ = [
    "PtreeError",
    "PtreeBadData",
    "PtreeBadPath",
    "FileParserError",
    "JsonParserError",
]


class PtreeError(RuntimeError):
    """Base class for every error raised by this package."""


class PtreeBadData(PtreeError):
    """A node's value could not be converted to or from the requested type."""

    def __init__(self, message: str, data: Any) -> None:
        super().__init__(message)
        self.message = message
        self.data = data

    def __reduce__(self):
        return (type(self), (self.message, self.data))


class PtreeBadPath(PtreeError):
    """A path does not lead to any node of the tree."""

    def __init__(self, message: str, path: Any) -> None:
        super().__init__(f"{message} ({_dump_path(path)})")
        self.message = message
        self.path = path

    def __reduce__(self):
        return (type(self), (self.message, self.path))


def _dump_path(path: Any) -> str:
    dump = getattr(path, "dump", None)
    if callable(dump):
        return str(dump())
    return str(path)


class FileParserError(PtreeError):
    """An error found while reading or writing a file format.

    ``line`` is 1-based; 0 means the line is not known.
    """

    def __init__(self, message: str, filename: str, line: int) -> None:
        self.message = message
        self.filename = filename
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.filename or "<unspecified file>"
        if self.line:
            where = f"{where}({self.line})"
        return f"{where}: {self.message}"

    def __reduce__(self):
        return (type(self), (self.message, self.filename, self.line))


class JsonParserError(FileParserError):
    """An error found while parsing JSON."""