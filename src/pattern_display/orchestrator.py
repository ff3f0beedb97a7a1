"""Form submission handling (validation -> normalization -> configuration)."""

from __future__ import annotations

from typing import Any

from .config import DisplayConfig, resolve
from .keys import split_mapping_key
from .normalize import normalize_settings
from .validation import MalformedKeyError, ValidationError, build_error_envelope, validate_form_values


def _persisted_mapping(mapping: dict[str, Any], separator: str) -> dict[str, Any]:
    # Raw per-pattern sub-trees left over when the selected pattern had none.
    if any(isinstance(entry, dict) and "settings" in entry for entry in mapping.values()):
        return {}
    for key, entry in mapping.items():
        split_mapping_key(key, separator)
        if not isinstance(entry, dict):
            raise ValidationError(f"pattern_mapping['{key}'] must be object")
    return mapping


def run_form_submission(values: dict[str, Any], *, config: DisplayConfig | None = None) -> dict[str, Any]:
    """Turn submitted form values into a configuration or a validation envelope."""
    cfg = resolve(config)
    try:
        validate_form_values(values, cfg.empty_value)
    except ValidationError as exc:
        return build_error_envelope("Validation", f"form: {exc}", {"section": "form"})

    try:
        normalized = normalize_settings(values, config=cfg)
        mapping = _persisted_mapping(normalized.get("pattern_mapping", {}), cfg.separator)
    except MalformedKeyError as exc:
        return build_error_envelope(
            "Validation",
            f"pattern_mapping: {exc}",
            {"section": "pattern_mapping", "key": exc.key},
        )
    except ValidationError as exc:
        return build_error_envelope("Validation", f"pattern_mapping: {exc}", {"section": "pattern_mapping"})

    configuration = {
        "pattern": normalized["pattern"],
        "pattern_mapping": mapping,
    }
    return {"configuration": configuration}
