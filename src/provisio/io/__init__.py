"""Shared file I/O helpers."""

from .json_io import load_json_file, write_bytes_atomic, write_json_atomic, write_text_atomic
from .plist_io import load_plist_file, loads_plist, write_plist_atomic

__all__ = [
    "load_json_file",
    "load_plist_file",
    "loads_plist",
    "write_bytes_atomic",
    "write_json_atomic",
    "write_plist_atomic",
    "write_text_atomic",
]
