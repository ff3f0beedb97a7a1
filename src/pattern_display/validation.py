"""Validation layer for catalogs and submitted pattern display values."""

from __future__ import annotations

from typing import Any


class ValidationError(ValueError):
    """Raised when input contracts are violated."""


class MalformedKeyError(ValidationError):
    """Raised when a mapping key does not split into exactly plugin and source."""

    def __init__(self, key: str, separator: str) -> None:
        super().__init__(f"mapping key '{key}' must contain exactly one '{separator}' separator")
        self.key = key
        self.separator = separator


def _ensure(condition: bool, message: str) -> None:
    if not condition:
        raise ValidationError(message)


def build_error_envelope(error: str, reason: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build an error envelope reported back to the host form."""
    _ensure(error in {"Validation"}, "error type is not allowed")
    _ensure(isinstance(reason, str) and reason != "", "reason must be non-empty string")
    payload: dict[str, Any] = {
        "error": error,
        "reason": reason,
        "details": details if details is not None else {},
    }
    return payload


def is_envelope(payload: Any) -> bool:
    return isinstance(payload, dict) and set(payload.keys()) == {"error", "reason", "details"}


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(x, str) for x in value)


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _validate_named_list(items: Any, context: str, separator: str | None = None) -> None:
    _ensure(isinstance(items, list), f"{context} must be an array")
    names: list[str] = []
    for idx, item in enumerate(items):
        _ensure(isinstance(item, dict), f"{context}[{idx}] must be object")
        name = item.get("name")
        _ensure(_is_name(name), f"{context}[{idx}].name is required")
        if separator is not None:
            _ensure(separator not in name, f"{context}[{idx}].name must not contain '{separator}'")
        label = item.get("label", name)
        _ensure(isinstance(label, str), f"{context}[{idx}].label must be string")
        names.append(name)
    _ensure(len(names) == len(set(names)), f"{context} names must be unique")


def validate_pattern_catalog(patterns: Any) -> None:
    _ensure(isinstance(patterns, list), "catalog.patterns must be an array")
    ids: list[str] = []
    for idx, pattern in enumerate(patterns):
        _ensure(isinstance(pattern, dict), f"catalog.patterns[{idx}] must be object")
        pattern_id = pattern.get("id")
        _ensure(_is_name(pattern_id), f"catalog.patterns[{idx}].id is required")
        _ensure(isinstance(pattern.get("label", pattern_id), str), f"catalog.patterns[{idx}].label must be string")
        _validate_named_list(pattern.get("fields", []), f"catalog.patterns[{idx}].fields")
        ids.append(pattern_id)
    _ensure(len(ids) == len(set(ids)), "catalog.patterns ids must be unique")


def validate_source_catalog(sources: Any, separator: str) -> None:
    _ensure(isinstance(sources, list), "catalog.sources must be an array")
    plugins: list[str] = []
    for idx, source in enumerate(sources):
        _ensure(isinstance(source, dict), f"catalog.sources[{idx}] must be object")
        plugin = source.get("plugin")
        _ensure(_is_name(plugin), f"catalog.sources[{idx}].plugin is required")
        _ensure(separator not in plugin, f"catalog.sources[{idx}].plugin must not contain '{separator}'")
        _ensure(isinstance(source.get("label", plugin), str), f"catalog.sources[{idx}].label must be string")
        _ensure(_is_str_list(source.get("tags", [])), f"catalog.sources[{idx}].tags must be array of strings")
        _ensure(_is_str_list(source.get("context", [])), f"catalog.sources[{idx}].context must be array of strings")
        _validate_named_list(source.get("fields", []), f"catalog.sources[{idx}].fields", separator)
        plugins.append(plugin)
    _ensure(len(plugins) == len(set(plugins)), "catalog.sources plugins must be unique")


def validate_catalog(payload: Any, separator: str) -> None:
    _ensure(isinstance(payload, dict), "catalog must be an object")
    validate_pattern_catalog(payload.get("patterns", []))
    validate_source_catalog(payload.get("sources", []), separator)


def validate_form_values(values: Any, empty_value: str) -> None:
    """Required-field checks the host form runs before normalization."""
    _ensure(isinstance(values, dict), "form values must be an object")
    pattern = values.get("pattern")
    _ensure(_is_name(pattern) and pattern != empty_value, "pattern is required")
    mapping = values.get("pattern_mapping", {})
    _ensure(isinstance(mapping, dict), "pattern_mapping must be an object")
