"""Normalization of submitted pattern display values and destination lookups."""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any

from .config import DisplayConfig, resolve
from .keys import mapping_key, split_mapping_key
from .validation import ValidationError

logger = logging.getLogger(__name__)


def _weight(key: str, entry: dict[str, Any]) -> int:
    value = entry.get("weight")
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"pattern_mapping['{key}'].weight must be integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"pattern_mapping['{key}'].weight must be integer, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"pattern_mapping['{key}'].weight must be integer, got {value!r}") from exc


def _selected_settings(settings: dict[str, Any]) -> dict[str, Any] | None:
    mapping = settings.get("pattern_mapping")
    pattern = settings.get("pattern")
    if not isinstance(mapping, dict) or not isinstance(pattern, str):
        return None
    subtree = mapping.get(pattern)
    if not isinstance(subtree, dict) or subtree.get("settings") is None:
        return None
    selected = subtree["settings"]
    if not isinstance(selected, dict):
        raise ValidationError(f"pattern_mapping['{pattern}'].settings must be an object")
    return selected


def process_form_state_values(settings: dict[str, Any], *, config: DisplayConfig | None = None) -> None:
    """Normalize submitted values in place.

    Keeps only the selected pattern's mapping, drops hidden entries, records
    the plugin and source of every remaining key and renumbers weights from 0
    in stable weight order. Values without a nested mapping for the selected
    pattern are left untouched. Nothing is mutated when a key is rejected.
    """
    cfg = resolve(config)
    selected = _selected_settings(settings)
    if selected is None:
        return

    kept: list[tuple[int, str, dict[str, Any]]] = []
    for key, entry in selected.items():
        if not isinstance(entry, dict):
            raise ValidationError(f"pattern_mapping['{key}'] must be object")
        if entry.get("destination") == cfg.hidden_value:
            logger.debug("Dropping hidden mapping entry %s", key)
            continue
        plugin, source = split_mapping_key(key, cfg.separator)
        kept.append((_weight(key, entry), key, {**entry, "plugin": plugin, "source": source}))

    # sorted() is stable: equal weights keep their submitted order.
    kept = sorted(kept, key=lambda item: item[0])

    normalized: dict[str, Any] = {}
    for weight, (_, key, entry) in enumerate(kept):
        entry["weight"] = weight
        normalized[key] = entry

    settings["pattern_mapping"] = normalized
    logger.debug("Normalized pattern %s mapping to %d entries", settings["pattern"], len(normalized))


def normalize_settings(settings: dict[str, Any], *, config: DisplayConfig | None = None) -> dict[str, Any]:
    """Return a normalized copy of submitted values, leaving the input untouched."""
    out = deepcopy(settings)
    process_form_state_values(out, config=config)
    return out


def get_mapping_destination(
    plugin: str,
    source: str,
    settings: dict[str, Any],
    *,
    config: DisplayConfig | None = None,
) -> str | None:
    """Return the slot a source field is mapped to, or None when it is unmapped."""
    cfg = resolve(config)
    mapping = settings.get("pattern_mapping") or {}
    entry = mapping.get(mapping_key(plugin, source, cfg.separator))
    if isinstance(entry, dict):
        return entry.get("destination")
    return None


def has_mapping_destination(
    plugin: str,
    source: str,
    settings: dict[str, Any],
    *,
    config: DisplayConfig | None = None,
) -> bool:
    return get_mapping_destination(plugin, source, settings, config=config) is not None
