"""Manage per-project propcat configuration (.propcat/config.json)."""

from __future__ import annotations

import click

from propcat.config import coerce_value, find_project_root, load_settings, write_project_config
from propcat.exit_codes import EXIT_USAGE, exit_with
from propcat.output.formatter import json_envelope, to_json


@click.command("config")
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE",
              help="Persist a setting, e.g. --set start_class=Car (repeatable).")
@click.option("--show", is_flag=True, help="Print the effective configuration.")
@click.pass_context
def config(ctx, assignments, show):
    """Manage per-project propcat configuration (.propcat/config.json).

    Settings resolve per key from command line options, then the
    PROPCAT_OUTPUT_DIR, PROPCAT_START_CLASS and PROPCAT_STRICT_DOCS
    environment variables, then this file, then defaults.

    \b
      propcat config --set start_class=Car --set include_nested=false
      propcat config --show
    """
    updates = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep:
            exit_with(EXIT_USAGE, f"expected KEY=VALUE, got {item!r}")
        try:
            updates[key] = coerce_value(key, raw)
        except KeyError:
            exit_with(EXIT_USAGE, f"unknown setting {key!r}")
        except ValueError as exc:
            exit_with(EXIT_USAGE, str(exc))

    root = find_project_root()
    written = None
    if updates:
        written = str(write_project_config(updates, root))

    if not show and written is None:
        show = True

    settings = load_settings(project_root=root)
    if ctx.obj.get("json"):
        click.echo(to_json(json_envelope(
            "config",
            summary={"updated": sorted(updates)},
            config_file=written,
            settings=settings.to_dict(),
        )))
        return

    if written:
        click.echo(f"Updated {written}: {', '.join(sorted(updates))}")
    if show:
        for key, value in settings.to_dict().items():
            click.echo(f"{key:18s} {value}")
