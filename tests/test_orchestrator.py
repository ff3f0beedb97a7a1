from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pattern_display.orchestrator import run_form_submission  # noqa: E402
from pattern_display.validation import (  # noqa: E402
    ValidationError,
    build_error_envelope,
    is_envelope,
    validate_form_values,
)


def _values() -> dict:
    return {
        "pattern": "card",
        "pattern_mapping": {
            "card": {
                "settings": {
                    "text:title": {"destination": "heading", "weight": "3"},
                    "text:body": {"destination": "_hidden", "weight": "0"},
                    "text:sub": {"destination": "subheading", "weight": "-1"},
                }
            },
        },
    }


def test_submission_produces_configuration() -> None:
    out = run_form_submission(_values())
    assert not is_envelope(out)
    assert out["configuration"] == {
        "pattern": "card",
        "pattern_mapping": {
            "text:sub": {"destination": "subheading", "weight": 0, "plugin": "text", "source": "sub"},
            "text:title": {"destination": "heading", "weight": 1, "plugin": "text", "source": "title"},
        },
    }


def test_submission_is_deterministic() -> None:
    assert run_form_submission(_values()) == run_form_submission(_values())


def test_submission_without_pattern_returns_validation_envelope() -> None:
    values = _values()
    values["pattern"] = "_none"
    out = run_form_submission(values)
    assert is_envelope(out)
    assert out["error"] == "Validation"
    assert out["details"] == {"section": "form"}


def test_submission_with_malformed_key_reports_key() -> None:
    values = _values()
    values["pattern_mapping"]["card"]["settings"]["a:b:c"] = {"destination": "heading", "weight": 0}
    out = run_form_submission(values)
    assert is_envelope(out)
    assert out["error"] == "Validation"
    assert out["details"] == {"section": "pattern_mapping", "key": "a:b:c"}


def test_submission_with_bad_weight_reports_section() -> None:
    values = _values()
    values["pattern_mapping"]["card"]["settings"]["text:title"]["weight"] = "heavy"
    out = run_form_submission(values)
    assert is_envelope(out)
    assert out["details"] == {"section": "pattern_mapping"}


def test_submission_without_mapping_yields_empty_mapping() -> None:
    out = run_form_submission({"pattern": "card"})
    assert out == {"configuration": {"pattern": "card", "pattern_mapping": {}}}


def test_validate_form_values_requires_object_mapping() -> None:
    with pytest.raises(ValidationError, match="pattern_mapping must be an object"):
        validate_form_values({"pattern": "card", "pattern_mapping": []}, "_none")
    with pytest.raises(ValidationError, match="form values must be an object"):
        validate_form_values(["card"], "_none")


def test_error_envelope_shape_and_allowed_types() -> None:
    env = build_error_envelope("Validation", "bad input")
    assert env == {"error": "Validation", "reason": "bad input", "details": {}}
    with pytest.raises(ValidationError):
        build_error_envelope("Render", "bad input")
    with pytest.raises(ValidationError):
        build_error_envelope("Validation", "")


def test_submission_drops_other_patterns_raw_subtrees() -> None:
    values = {
        "pattern": "card",
        "pattern_mapping": {"hero": {"settings": {"text:a": {"destination": "title", "weight": 0}}}},
    }
    out = run_form_submission(values)
    assert out == {"configuration": {"pattern": "card", "pattern_mapping": {}}}


def test_submission_passes_through_already_normalized_mapping() -> None:
    configuration = run_form_submission(_values())["configuration"]
    assert run_form_submission(configuration) == {"configuration": configuration}


def test_submission_rejects_flat_mapping_with_malformed_key() -> None:
    values = {"pattern": "card", "pattern_mapping": {"broken": {"destination": "heading", "weight": 0}}}
    out = run_form_submission(values)
    assert is_envelope(out)
    assert out["details"] == {"section": "pattern_mapping", "key": "broken"}
