# proptree

A small library for hierarchical configuration data. A `PropertyTree` node
holds a string value and an ordered list of keyed children. Keys need not be
unique. Dotted paths such as `"section.key"` reach into nested nodes.

The package reads INI and INFO documents into a tree. It writes trees out as
INI or XML. It needs Python 3.10 or later and has no dependencies outside the
standard library.

## Installation

```
pip install proptree
```

## Working with trees

```python
from proptree.tree import PropertyTree

tree = PropertyTree()
tree.put("server.host", "localhost")
tree.put("server.port", 8080)

tree.get("server.host", "unknown")      # "localhost"
tree.get("server.timeout", 30)          # 30, because the node does not exist
tree.get_optional("server.port", int)   # 8080

server = tree.get_child("server")
for key, child in server:
    print(key, child.get_value(str, ""))
```

Values are stored as strings. When you read a value, `get` and `get_value`
convert it to the type you ask for, or to the type of the default you pass.
Booleans are stored as `true` and `false`, and `1` and `0` are also accepted
when reading. With a default, a missing node or a failed conversion gives the
default back. Without a default, they raise an exception instead:

- `get_child` raises `PtreeBadPath` when the path does not lead to a node.
- `get_value` raises `PtreeBadData` when the value cannot be converted.

The `get_optional` and `get_child_optional` variants return `None` instead of
raising.

`put` sets the value of an existing node, or creates the node if it is
missing. `add` always appends a new sibling with the same key. `put_child` and
`add_child` do the same for whole subtrees, and they store copies of the
trees you pass.

Trees also offer a list-like interface:

- `len()`, iteration over `(key, child)` pairs, and `reversed()`
- `front`, `back`
- `insert`, `push_back`, `push_front`
- `pop_back`, `pop_front`, `remove_at`
- `reverse`, `sort`

They also offer a lookup interface by key: `find`, `count`, `equal_range`,
`erase` and `ordered_items`.

`copy` makes a deep copy. `clear` removes both the data and the children.
`split_path` splits a dotted path into its keys.

## Errors

All errors derive from `PtreeError` in `proptree.exceptions`.

`FileParserError` carries three attributes:

- `message`
- `filename`
- `line`, counted from 1, where 0 means the line is not known

`IniParserError`, `InfoParserError` and `XmlParserError` are its subclasses
for each format.

## INI files

```python
from proptree.ini import loads_ini, dumps_ini

tree = loads_ini("[Section1]\nKey1 = Data1\n")
tree.get("Section1.Key1", "")           # "Data1"
print(dumps_ini(tree, 0))
```

When reading:

- Lines starting with `;` or `#` are comments.
- Keys before any section belong to the root.
- Empty sections are dropped.

When writing:

- Top-level keys come first, then the sections.
- The tree may be at most two levels deep.
- No level may repeat a key.
- A section may not hold both data and keys.
- The root may not hold data.

Breaking any of these rules raises `IniParserError`, and so do malformed
input and duplicate keys or sections when reading.

`read_ini` and `write_ini` accept either a file name or a text stream. No
writer flags are defined: `validate_flags` accepts only `0`, and any other
value raises `ValueError`.

## INFO files

```python
from proptree.info import loads_info

text = 'settings\n{\n    setting1 15\n    setting3 "hello"\n}\n'
tree = loads_info(text, "inline")
tree.get("settings.setting1", 0)        # 15
```

The INFO format supports:

- braces for nesting
- quoted strings with backslash escapes (see `expand_escapes`)
- lines continued with a trailing `\`
- `;` comments
- `#include "file"` directives

Included files are opened by the name given in the directive. Includes may be
nested at most about 100 levels deep.

`read_info` accepts a file name or a text stream. Errors raise
`InfoParserError`, with the file name and line number.

## XML output

```python
from proptree.xml_writer import XmlWriterSettings, dumps_xml

print(dumps_xml(tree, XmlWriterSettings(indent_char=" ", indent_count=2)))
```

The children of the root become the top-level elements. Children with these
special keys are written as attributes, comments and text:

- `XMLATTR` (`"<xmlattr>"`) for attributes
- `XMLCOMMENT` (`"<xmlcomment>"`) for comments
- `XMLTEXT` (`"<xmltext>"`) for text

`XmlWriterSettings` has these fields:

- `indent_char`
- `indent_count`, where `0`, the default, writes everything without line breaks
- `encoding`, which is named in the XML declaration

`write_xml` writes the same document to a file name or a text stream. Special
characters in text and attributes are escaped by `encode_char_entities`.

## Command line

The `proptree-settings` command reads INFO settings files. For each file it
prints `setting1`, `setting2` and `setting3` from the `settings` section,
using the defaults `0`, `0` and `default` for anything missing:

```
proptree-settings my-settings.info
```

Each file is processed twice:

1. with an empty tree standing in for a missing section
2. with the missing section handled separately

Both passes give the same output.

Without arguments, the command looks in the current directory for three
files:

- `settings_fully-existent.info`
- `settings_partially-existent.info`
- `settings_non-existent.info`

If a file cannot be read, the command prints an `Error:` line and stops.

## What is not included

The package does not read XML, and it does not write INFO. It also has no
JSON reader or writer: `JsonParserError` exists only as an exception type.