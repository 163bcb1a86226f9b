"""Options and pipeline steps shared by the catalog commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from click.core import ParameterSource

from propcat.catalog import Catalog, build_catalog
from propcat.config import Settings, load_settings
from propcat.languages.registry import parse_file

log = logging.getLogger(__name__)

_EXPLICIT_SOURCES = {ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT}


def catalog_options(f):
    """Attach FILE plus the options that control catalog building."""
    options = [
        click.argument("file", type=click.Path(dir_okay=False)),
        click.option("--start-class", "start_class", default=None,
                     help="Catalog only this class (and, with --nested, its nested classes)."),
        click.option("--nested/--no-nested", "include_nested", default=True,
                     help="Include properties of nested classes.  [default: nested]"),
        click.option("--track-exits/--enter-only", "track_exits", default=True,
                     help="Resolve paths with exit events, or by name truncation only.  [default: track-exits]"),
        click.option("--strict-docs/--lenient-docs", "strict_docs", default=False,
                     help="Fail on malformed documentation comments instead of leaving the summary empty."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def resolve_settings(ctx: click.Context, **params) -> Settings:
    """Settings from config and environment, overridden by explicitly passed options."""
    overrides = {
        name: value
        for name, value in params.items()
        if ctx.get_parameter_source(name) in _EXPLICIT_SOURCES
    }
    return load_settings(overrides)


def build_from_file(file: str, settings: Settings) -> Catalog:
    root = parse_file(file)
    return build_catalog(
        root,
        settings.start_class,
        settings.include_nested,
        track_exits=settings.track_exits,
        strict_docs=settings.strict_docs,
    )


def write_artifact(text: str, output: str | None, settings: Settings, default_name: str) -> str | None:
    """Write *text* to *output* (``-`` for stdout) or the configured output directory.

    Returns the written path, or None when printed to stdout.
    """
    if output == "-":
        click.echo(text, nl=False)
        return None
    path = Path(output) if output else settings.output_path / default_name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    log.info("Wrote %s", path)
    return str(path)
