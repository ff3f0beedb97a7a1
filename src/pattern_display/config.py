"""Runtime configuration for pattern display forms."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .validation import ValidationError

SEPARATOR = ":"
HIDDEN = "_hidden"
EMPTY_PATTERN = "_none"
SELECTOR_ID = "patterns-select"
WEIGHT_DELTA = 20


@dataclass(frozen=True)
class DisplayConfig:
    """Separator, sentinels and widget settings shared by form and normalizer."""

    separator: str = SEPARATOR
    hidden_value: str = HIDDEN
    empty_value: str = EMPTY_PATTERN
    selector_id: str = SELECTOR_ID
    weight_delta: int = WEIGHT_DELTA

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValidationError("separator must be non-empty string")
        if not self.hidden_value:
            raise ValidationError("hidden_value must be non-empty string")
        if self.weight_delta <= 0:
            raise ValidationError("weight_delta must be positive integer")

    @classmethod
    def from_env(cls) -> "DisplayConfig":
        """Load config from PATTERN_DISPLAY_* environment variables."""
        raw_delta = os.getenv("PATTERN_DISPLAY_WEIGHT_DELTA", str(WEIGHT_DELTA))
        try:
            weight_delta = int(raw_delta)
        except ValueError as exc:
            raise ValidationError(f"PATTERN_DISPLAY_WEIGHT_DELTA must be integer, got '{raw_delta}'") from exc
        return cls(
            separator=os.getenv("PATTERN_DISPLAY_SEPARATOR", SEPARATOR),
            hidden_value=os.getenv("PATTERN_DISPLAY_HIDDEN_VALUE", HIDDEN),
            empty_value=os.getenv("PATTERN_DISPLAY_EMPTY_VALUE", EMPTY_PATTERN),
            selector_id=os.getenv("PATTERN_DISPLAY_SELECTOR_ID", SELECTOR_ID),
            weight_delta=weight_delta,
        )


DEFAULT_CONFIG = DisplayConfig()


def resolve(config: DisplayConfig | None) -> DisplayConfig:
    return config if config is not None else DEFAULT_CONFIG
