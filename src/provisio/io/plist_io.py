"""Property list read/write helpers."""

from __future__ import annotations

import plistlib
from pathlib import Path
from typing import Any
from xml.parsers.expat import ExpatError

from provisio.io.json_io import write_bytes_atomic


def loads_plist(content: bytes, *, source: str = "<bytes>") -> dict[str, Any]:
    """Parse a property list whose root is a dictionary.

    Raises ``ValueError`` when the content is not a plist or its root is not a dict.
    """
    try:
        payload = plistlib.loads(content)
    except ExpatError as exc:
        raise ValueError(f"Malformed XML property list in {source}: {exc}") from exc
    except (AttributeError, TypeError, ValueError) as exc:
        # plistlib surfaces bad <date> and <integer> text as AttributeError or ValueError.
        raise ValueError(f"Malformed property list in {source}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Property list root in {source} is not a dictionary")
    return payload


def load_plist_file(path: Path) -> dict[str, Any]:
    """Load a dictionary-rooted property list from disk."""
    return loads_plist(path.read_bytes(), source=str(path))


def write_plist_atomic(
    *,
    path: Path,
    payload: dict[str, Any],
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Serialize ``payload`` as an XML plist and persist it atomically."""
    content = plistlib.dumps(payload, fmt=plistlib.FMT_XML, sort_keys=True)
    write_bytes_atomic(path=path, content=content, temp_prefix=temp_prefix, temp_suffix=temp_suffix)
