"""Report settings read from INFO files, with defaults for missing values."""

from __future__ import annotations

import sys
from typing import IO, Optional, Sequence

from proptree.exceptions import PtreeError
from proptree.info import read_info
from proptree.tree import PropertyTree

__all__ = ["process_settings", "process_settings_without_trick", "main"]

_EMPTY = PropertyTree()

_DEFAULT_FILES = (
    "settings_fully-existent.info",
    "settings_partially-existent.info",
    "settings_non-existent.info",
)


def _report(filename, setting1: int, setting2: float, setting3: str, out: IO[str]) -> None:
    print(f"\n    Processing {filename}", file=out)
    print(f"        Setting 1 is {setting1}", file=out)
    print(f"        Setting 2 is {setting2:g}", file=out)
    print(f"        Setting 3 is {setting3}", file=out)


def process_settings(filename, out: Optional[IO[str]] = None) -> None:
    """Print the settings in ``filename``, falling back on an empty section."""
    out = sys.stdout if out is None else out
    tree = read_info(filename)
    settings = tree.get_child("settings", _EMPTY)
    _report(
        filename,
        settings.get("setting1", 0),
        settings.get("setting2", 0.0),
        settings.get("setting3", "default"),
        out,
    )


def process_settings_without_trick(filename, out: Optional[IO[str]] = None) -> None:
    """Print the settings in ``filename``, handling a missing section apart."""
    out = sys.stdout if out is None else out
    tree = read_info(filename)
    settings = tree.get_child_optional("settings")
    if settings is not None:
        _report(
            filename,
            settings.get("setting1", 0),
            settings.get("setting2", 0.0),
            settings.get("setting3", "default"),
            out,
        )
    else:
        _report(filename, 0, 0.0, "default", out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Process each settings file both ways; errors are printed, not raised."""
    args = list(sys.argv[1:] if argv is None else argv)
    filenames = args or list(_DEFAULT_FILES)
    out = sys.stdout
    try:
        print("Processing settings with empty-ptree-trick:", file=out)
        for filename in filenames:
            process_settings(filename, out)
        print("\nProcessing settings without empty-ptree-trick:", file=out)
        for filename in filenames:
            process_settings_without_trick(filename, out)
    except PtreeError as error:
        print(f"Error: {error}", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())