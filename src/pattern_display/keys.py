"""Composite mapping keys: plugin id + separator + source field name."""

from __future__ import annotations

from .config import SEPARATOR
from .validation import MalformedKeyError


def mapping_key(plugin: str, source: str, separator: str = SEPARATOR) -> str:
    return f"{plugin}{separator}{source}"


def split_mapping_key(key: str, separator: str = SEPARATOR) -> tuple[str, str]:
    """Split a mapping key into (plugin, source); anything but two parts is rejected."""
    parts = key.split(separator)
    if len(parts) != 2:
        raise MalformedKeyError(key, separator)
    return parts[0], parts[1]
