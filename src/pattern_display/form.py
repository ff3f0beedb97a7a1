"""Pattern display form tree: pattern selector plus one mapping table per pattern."""

from __future__ import annotations

import logging
from typing import Any

from .config import DisplayConfig, resolve
from .registry import PatternRegistry, SourceRegistry

logger = logging.getLogger(__name__)


def _default_value(configuration: dict[str, Any], key: str, name: str) -> Any:
    mapping = configuration.get("pattern_mapping") or {}
    entry = mapping.get(key)
    if isinstance(entry, dict) and entry.get(name) is not None:
        return entry[name]
    return None


def build_pattern_display_form(
    patterns: PatternRegistry,
    sources: SourceRegistry,
    tag: str,
    context: dict[str, Any],
    configuration: dict[str, Any],
    *,
    config: DisplayConfig | None = None,
) -> dict[str, Any]:
    """Build the pattern selector and a visibility-gated mapping table for every pattern."""
    cfg = resolve(config)
    form: dict[str, Any] = {
        "pattern": {
            "type": "select",
            "empty_value": cfg.empty_value,
            "title": "Pattern",
            "options": dict(patterns.pattern_options()),
            "default_value": configuration.get("pattern"),
            "required": True,
            "attributes": {"id": cfg.selector_id},
        },
        "pattern_mapping": {},
    }

    selector = f'select[id="{cfg.selector_id}"]'
    for pattern_id in patterns.definitions():
        form["pattern_mapping"][pattern_id] = {
            "type": "container",
            "states": {"visible": {selector: {"value": pattern_id}}},
            "settings": get_mapping_form(patterns, sources, pattern_id, tag, context, configuration, config=cfg),
        }
    return form


def get_mapping_form(
    patterns: PatternRegistry,
    sources: SourceRegistry,
    pattern_id: str,
    tag: str,
    context: dict[str, Any],
    configuration: dict[str, Any],
    *,
    config: DisplayConfig | None = None,
) -> dict[str, Any]:
    """Build the mapping table of one pattern: one draggable row per source field."""
    cfg = resolve(config)
    destinations = {cfg.hidden_value: "- Hidden -"}
    destinations.update(patterns.slot_options(pattern_id))

    rows: dict[str, Any] = {}
    for key, source_field in sources.fields_by_tag(tag, context).items():
        rows[key] = {
            "info": {"plain_text": source_field.label},
            "plugin": {"plain_text": source_field.plugin_label},
            "destination": {
                "type": "select",
                "title": f"Destination for {source_field.label}",
                "title_display": "invisible",
                "default_value": _default_value(configuration, key, "destination"),
                "options": dict(destinations),
            },
            "weight": {
                "type": "weight",
                "default_value": _default_value(configuration, key, "weight"),
                "delta": cfg.weight_delta,
                "title": f"Weight for {source_field.label} field",
                "title_display": "invisible",
                "attributes": {"class": ["field-weight"]},
            },
            "attributes": {"class": ["draggable"]},
        }
    logger.debug("Built mapping table for pattern %s with %d rows", pattern_id, len(rows))

    return {
        "type": "table",
        "header": ["Source", "Plugin", "Destination", "Weight"],
        "tabledrag": [{"action": "order", "relationship": "sibling", "group": "field-weight"}],
        "rows": rows,
    }
