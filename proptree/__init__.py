"""Hierarchical property trees: INI and INFO reading, INI and XML writing."""

__version__ = "0.1.0"

__all__ = ["exceptions", "tree", "ini", "xml_writer", "info", "settings"]