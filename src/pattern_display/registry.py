"""Pattern and source registries consumed by the form builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from .config import SEPARATOR, DisplayConfig, resolve
from .keys import mapping_key
from .validation import validate_catalog


@dataclass(frozen=True)
class Pattern:
    id: str
    label: str
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SourceField:
    """A field offered by a source plugin as mapping input."""

    plugin: str
    name: str
    label: str
    plugin_label: str
    separator: str = SEPARATOR

    @property
    def key(self) -> str:
        return mapping_key(self.plugin, self.name, self.separator)


class PatternRegistry(Protocol):
    def pattern_options(self) -> dict[str, str]: ...

    def definitions(self) -> dict[str, Pattern]: ...

    def slot_options(self, pattern_id: str) -> dict[str, str]: ...


class SourceRegistry(Protocol):
    def fields_by_tag(self, tag: str, context: dict[str, Any]) -> dict[str, SourceField]: ...


class PatternCatalog:
    """Pattern registry backed by the `patterns` section of a catalog document."""

    def __init__(self, patterns: list[Pattern]) -> None:
        self._patterns = {p.id: p for p in patterns}

    def pattern_options(self) -> dict[str, str]:
        return {pattern_id: p.label for pattern_id, p in self._patterns.items()}

    def definitions(self) -> dict[str, Pattern]:
        return dict(self._patterns)

    def slot_options(self, pattern_id: str) -> dict[str, str]:
        pattern = self._patterns.get(pattern_id)
        if pattern is None:
            return {}
        return dict(pattern.fields)


@dataclass(frozen=True)
class _SourcePlugin:
    plugin: str
    label: str
    tags: tuple[str, ...]
    context: tuple[str, ...]
    fields: tuple[tuple[str, str], ...]


class SourceCatalog:
    """Source registry backed by the `sources` section of a catalog document.

    A plugin contributes its fields for a tag when it declares that tag and
    every context key it requires is present in the caller's context.
    """

    def __init__(self, plugins: list[_SourcePlugin], separator: str = SEPARATOR) -> None:
        self._plugins = plugins
        self._separator = separator

    def fields_by_tag(self, tag: str, context: dict[str, Any]) -> dict[str, SourceField]:
        out: dict[str, SourceField] = {}
        for plugin in self._plugins:
            if tag not in plugin.tags:
                continue
            if any(name not in context for name in plugin.context):
                continue
            for name, label in plugin.fields:
                source_field = SourceField(
                    plugin=plugin.plugin,
                    name=name,
                    label=label,
                    plugin_label=plugin.label,
                    separator=self._separator,
                )
                out[source_field.key] = source_field
        return out


def _pattern_from_payload(entry: dict[str, Any]) -> Pattern:
    fields = {f["name"]: f.get("label", f["name"]) for f in entry.get("fields", [])}
    return Pattern(id=entry["id"], label=entry.get("label", entry["id"]), fields=fields)


def _plugin_from_payload(entry: dict[str, Any]) -> _SourcePlugin:
    return _SourcePlugin(
        plugin=entry["plugin"],
        label=entry.get("label", entry["plugin"]),
        tags=tuple(entry.get("tags", [])),
        context=tuple(entry.get("context", [])),
        fields=tuple((f["name"], f.get("label", f["name"])) for f in entry.get("fields", [])),
    )


def load_catalog(payload: dict[str, Any], config: DisplayConfig | None = None) -> tuple[PatternCatalog, SourceCatalog]:
    """Validate a catalog document and build both registries from it."""
    cfg = resolve(config)
    validate_catalog(payload, cfg.separator)
    patterns = PatternCatalog([_pattern_from_payload(p) for p in payload.get("patterns", [])])
    sources = SourceCatalog([_plugin_from_payload(s) for s in payload.get("sources", [])], cfg.separator)
    return patterns, sources
