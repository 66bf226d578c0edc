"""The property tree: a node with a string value and ordered, keyed children."""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Iterator, Optional, Sequence, Tuple, Union

from proptree.exceptions import PtreeBadData, PtreeBadPath

__all__ = ["split_path", "PropertyTree"]

PathLike = Union[str, Sequence[str]]

_MISSING: Any = object()

_INT_RE = re.compile(r"\s*[+-]?\d+\s*\Z")
_FLOAT_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*\Z")


def split_path(path: PathLike, separator: str = ".") -> list[str]:
    """Split a path into its key fragments.

    A string is split on ``separator``; the empty string is the empty path,
    which refers to the node itself. A sequence of keys is taken as it is.
    """
    if isinstance(path, str):
        if not path:
            return []
        return path.split(separator)
    return list(path)


def _describe_path(path: PathLike, separator: str = ".") -> str:
    if isinstance(path, str):
        return path
    return separator.join(path)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


def _to_bool(text: str) -> bool:
    word = text.strip()
    if word in ("1", "true"):
        return True
    if word in ("0", "false"):
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _to_int(text: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def _to_float(text: str) -> float:
    if not _FLOAT_RE.match(text):
        raise ValueError(f"not a number: {text!r}")
    return float(text)


def _translate_from(data: str, type_: Any) -> Any:
    """Convert node data to ``type_``; raise ValueError on failure."""
    if type_ is str:
        return data
    if type_ is bool:
        return _to_bool(data)
    if type_ is int:
        return _to_int(data)
    if type_ is float:
        return _to_float(data)
    return type_(data)


def _translate_to(value: Any) -> str:
    """Convert a value to node data; raise ValueError on failure."""
    if value is None:
        raise ValueError("None cannot be stored")
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            text = repr(value)
            if text.endswith(".0"):
                return text[:-2]
            return text
        return repr(value)
    return str(value)


class PropertyTree:
    """A node holding string data and an ordered sequence of keyed children.

    Keys are not unique. Iteration yields ``(key, child)`` pairs in insertion
    order. Paths address descendants by keys joined with ``.``.
    """

    __slots__ = ("data", "_children")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: str = "") -> None:
        self.data = data
        self._children: list[Tuple[str, PropertyTree]] = []

    # Container view

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Tuple[str, "PropertyTree"]]:
        return iter(list(self._children))

    def __reversed__(self) -> Iterator[Tuple[str, "PropertyTree"]]:
        return reversed(list(self._children))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyTree):
            return NotImplemented
        return self.data == other.data and self._children == other._children

    def __repr__(self) -> str:
        return f"PropertyTree({self.data!r}, children={self._children!r})"

    def copy(self) -> "PropertyTree":
        """Return a deep copy of this tree."""
        result = PropertyTree(self.data)
        result._children = [(key, child.copy()) for key, child in self._children]
        return result

    def empty(self) -> bool:
        """Whether this node has no children."""
        return not self._children

    def front(self) -> Tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("front of an empty tree")
        return self._children[0]

    def back(self) -> Tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("back of an empty tree")
        return self._children[-1]

    def insert(self, index: int, key: str, child: Optional["PropertyTree"] = None) -> "PropertyTree":
        """Insert a copy of ``child`` under ``key`` before ``index``; return the stored node."""
        node = child.copy() if child is not None else PropertyTree()
        self._children.insert(index, (key, node))
        return node

    def push_back(self, key: str, child: Optional["PropertyTree"] = None) -> "PropertyTree":
        return self.insert(len(self._children), key, child)

    def push_front(self, key: str, child: Optional["PropertyTree"] = None) -> "PropertyTree":
        return self.insert(0, key, child)

    def pop_back(self) -> Tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("pop from an empty tree")
        return self._children.pop()

    def pop_front(self) -> Tuple[str, "PropertyTree"]:
        if not self._children:
            raise IndexError("pop from an empty tree")
        return self._children.pop(0)

    def remove_at(self, index: int) -> Tuple[str, "PropertyTree"]:
        """Remove and return the child at ``index``."""
        return self._children.pop(index)

    def reverse(self) -> None:
        self._children.reverse()

    def sort(self, key: Optional[Callable[[Tuple[str, "PropertyTree"]], Any]] = None) -> None:
        """Stably sort the children; by key unless ``key`` is given a pair."""
        if key is None:
            self._children.sort(key=lambda pair: pair[0])
        else:
            self._children.sort(key=key)

    # Associative view

    def ordered_items(self) -> list[Tuple[str, "PropertyTree"]]:
        """The children in key order; equal keys keep insertion order."""
        return sorted(self._children, key=lambda pair: pair[0])

    def find(self, key: str) -> Optional["PropertyTree"]:
        """A child with ``key``, or None."""
        for child_key, child in self._children:
            if child_key == key:
                return child
        return None

    def equal_range(self, key: str) -> list[Tuple[str, "PropertyTree"]]:
        return [pair for pair in self._children if pair[0] == key]

    def count(self, key: str) -> int:
        return sum(1 for child_key, _ in self._children if child_key == key)

    def erase(self, key: str) -> int:
        """Remove every child with ``key``; return how many were removed."""
        before = len(self._children)
        self._children = [pair for pair in self._children if pair[0] != key]
        return before - len(self._children)

    def clear(self) -> None:
        """Remove both the data and all children."""
        self.data = ""
        self._children.clear()

    # Property tree view

    def _walk_path(self, path: PathLike) -> Optional["PropertyTree"]:
        node: Optional[PropertyTree] = self
        for fragment in split_path(path):
            node = node.find(fragment)
            if node is None:
                return None
        return node

    def _force_path(self, path: PathLike) -> Tuple["PropertyTree", str]:
        fragments = split_path(path)
        if not fragments:
            raise PtreeBadPath("Path is empty", _describe_path(path))
        node = self
        for fragment in fragments[:-1]:
            child = node.find(fragment)
            if child is None:
                child = node.push_back(fragment)
            node = child
        return node, fragments[-1]

    def get_child(self, path: PathLike, default: Any = _MISSING) -> Any:
        """The node at ``path``; ``default`` if missing, or PtreeBadPath."""
        node = self._walk_path(path)
        if node is not None:
            return node
        if default is _MISSING:
            raise PtreeBadPath("No such node", _describe_path(path))
        return default

    def get_child_optional(self, path: PathLike) -> Optional["PropertyTree"]:
        return self._walk_path(path)

    def put_child(self, path: PathLike, value: "PropertyTree") -> "PropertyTree":
        """Set the node at ``path`` to a copy of ``value``, creating parents."""
        parent, key = self._force_path(path)
        existing = parent.find(key)
        if existing is None:
            return parent.push_back(key, value)
        replacement = value.copy()
        existing.data = replacement.data
        existing._children = replacement._children
        return existing

    def add_child(self, path: PathLike, value: "PropertyTree") -> "PropertyTree":
        """Add a copy of ``value`` at ``path``, beside any node already there."""
        parent, key = self._force_path(path)
        return parent.push_back(key, value)

    def get_value(self, type_: Any = str, default: Any = _MISSING) -> Any:
        """This node's data converted to ``type_``.

        On failure return ``default`` if given, otherwise raise PtreeBadData.
        """
        if default is not _MISSING and type_ is str and not isinstance(default, str):
            type_ = type(default)
        try:
            return _translate_from(self.data, type_)
        except (ValueError, TypeError):
            if default is not _MISSING:
                return default
            raise PtreeBadData(
                f'conversion of data to type "{_type_name(type_)}" failed', self.data
            ) from None

    def get_value_optional(self, type_: Any = str) -> Any:
        try:
            return _translate_from(self.data, type_)
        except (ValueError, TypeError):
            return None

    def put_value(self, value: Any) -> None:
        """Replace this node's data with ``value`` converted to a string."""
        try:
            self.data = _translate_to(value)
        except (ValueError, TypeError):
            raise PtreeBadData(
                f'conversion of type "{type(value).__name__}" to data failed', value
            ) from None

    def get(self, path: PathLike, default: Any = _MISSING, type_: Any = None) -> Any:
        """The value at ``path`` converted to ``type_``.

        The type defaults to that of ``default``, or ``str``. With a default,
        a missing node or a failed conversion yields the default.
        """
        if type_ is None:
            type_ = str if default is _MISSING else type(default)
        if default is _MISSING:
            return self.get_child(path).get_value(type_)
        node = self._walk_path(path)
        if node is None:
            return default
        return node.get_value(type_, default)

    def get_optional(self, path: PathLike, type_: Any = str) -> Any:
        node = self._walk_path(path)
        if node is None:
            return None
        return node.get_value_optional(type_)

    def put(self, path: PathLike, value: Any) -> "PropertyTree":
        """Set the value at ``path``, creating the node and its parents."""
        node = self._walk_path(path)
        if node is not None:
            node.put_value(value)
            return node
        node = self.put_child(path, PropertyTree())
        node.put_value(value)
        return node

    def add(self, path: PathLike, value: Any) -> "PropertyTree":
        """Add a new node with ``value`` at ``path``, beside any already there."""
        node = self.add_child(path, PropertyTree())
        node.put_value(value)
        return node