from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pattern_display.config import DEFAULT_CONFIG, DisplayConfig, resolve  # noqa: E402
from pattern_display.validation import ValidationError  # noqa: E402


def test_defaults() -> None:
    cfg = DisplayConfig()
    assert cfg.separator == ":"
    assert cfg.hidden_value == "_hidden"
    assert cfg.empty_value == "_none"
    assert cfg.selector_id == "patterns-select"
    assert cfg.weight_delta == 20
    assert resolve(None) is DEFAULT_CONFIG
    assert resolve(cfg) is cfg


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATTERN_DISPLAY_SEPARATOR", ".")
    monkeypatch.setenv("PATTERN_DISPLAY_HIDDEN_VALUE", "_skip")
    monkeypatch.setenv("PATTERN_DISPLAY_WEIGHT_DELTA", "50")
    cfg = DisplayConfig.from_env()
    assert cfg.separator == "."
    assert cfg.hidden_value == "_skip"
    assert cfg.weight_delta == 50
    assert cfg.empty_value == "_none"


def test_from_env_rejects_non_integer_delta(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATTERN_DISPLAY_WEIGHT_DELTA", "wide")
    with pytest.raises(ValidationError, match="PATTERN_DISPLAY_WEIGHT_DELTA"):
        DisplayConfig.from_env()


def test_empty_separator_is_rejected() -> None:
    with pytest.raises(ValidationError, match="separator"):
        DisplayConfig(separator="")
