"""CLI for pattern display forms."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from .config import DisplayConfig
from .form import build_pattern_display_form
from .normalize import get_mapping_destination
from .orchestrator import run_form_submission
from .registry import load_catalog
from .validation import ValidationError, build_error_envelope, is_envelope

app = typer.Typer(help="Pattern display mapping CLI.")
logger = logging.getLogger(__name__)


@app.callback()
def configure(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for diagnostics on stderr"),
) -> None:
    """Configure logging for every command."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        _fail("option-error", ValidationError(f"unknown log level '{log_level}'"))
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Show version output."""
    typer.echo("pattern-display 0.1.0")


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _dumps(payload: Any) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def _dump_json(path: Path, payload: Any) -> None:
    path.write_text(_dumps(payload), encoding="utf-8")


def _fail(reason: str, exc: Exception) -> None:
    typer.echo(_dumps(build_error_envelope("Validation", f"{reason}: {exc}")))
    raise typer.Exit(code=2) from exc


@app.command("build-form")
def build_form(
    catalog: Path = typer.Option(..., exists=True, file_okay=True, dir_okay=False, help="Path to pattern/source catalog JSON"),
    tag: str = typer.Option(..., help="Source field tag"),
    context: Optional[Path] = typer.Option(None, exists=True, file_okay=True, dir_okay=False, help="Path to plugin context JSON"),
    configuration: Optional[Path] = typer.Option(None, exists=True, file_okay=True, dir_okay=False, help="Path to current configuration JSON"),
    output: Path = typer.Option(..., file_okay=True, dir_okay=False, help="Output path for the form tree"),
) -> None:
    """Build the pattern display form tree for a tag and write it as JSON."""
    try:
        cfg = DisplayConfig.from_env()
        patterns, sources = load_catalog(_load_json(catalog), cfg)
        ctx = _load_json(context) if context is not None else {}
        current = _load_json(configuration) if configuration is not None else {}
    except (ValueError, OSError) as exc:
        _fail("input-parse-error", exc)

    form = build_pattern_display_form(patterns, sources, tag, ctx, current, config=cfg)
    output.parent.mkdir(parents=True, exist_ok=True)
    _dump_json(output, form)
    logger.info("Wrote form with %d pattern tables to %s", len(form["pattern_mapping"]), output)
    typer.echo(f"Wrote form to {output}")


@app.command("normalize")
def normalize(
    values: Path = typer.Option(..., exists=True, file_okay=True, dir_okay=False, help="Path to submitted form values JSON"),
    output: Path = typer.Option(..., file_okay=True, dir_okay=False, help="Output path for the configuration"),
) -> None:
    """Normalize submitted form values into a pattern display configuration."""
    try:
        cfg = DisplayConfig.from_env()
        submitted = _load_json(values)
    except (ValueError, OSError) as exc:
        _fail("input-parse-error", exc)

    result = run_form_submission(submitted, config=cfg)
    if is_envelope(result):
        typer.echo(_dumps(result))
        raise typer.Exit(code=2)

    output.parent.mkdir(parents=True, exist_ok=True)
    _dump_json(output, result["configuration"])
    count = len(result["configuration"]["pattern_mapping"])
    logger.info("Normalized %d mapping entries into %s", count, output)
    typer.echo(f"Wrote configuration with {count} mappings to {output}")


@app.command("lookup")
def lookup(
    configuration: Path = typer.Option(..., exists=True, file_okay=True, dir_okay=False, help="Path to normalized configuration JSON"),
    plugin: str = typer.Option(..., help="Source plugin ID"),
    source: str = typer.Option(..., help="Source field name"),
) -> None:
    """Print the destination slot of a source field; exit 1 when it is unmapped."""
    try:
        cfg = DisplayConfig.from_env()
        settings = _load_json(configuration)
        if not isinstance(settings, dict):
            raise ValidationError("configuration must be an object")
    except (ValueError, OSError) as exc:
        _fail("input-parse-error", exc)

    destination = get_mapping_destination(plugin, source, settings, config=cfg)
    if destination is None:
        typer.echo(f"{plugin}{cfg.separator}{source} is not mapped")
        raise typer.Exit(code=1)
    typer.echo(destination)


def main() -> None:
    """Entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
