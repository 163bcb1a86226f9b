"""List every catalogued property with its canonical path and summary."""

from __future__ import annotations

import click

from propcat.commands._common import build_from_file, catalog_options, resolve_settings
from propcat.output.formatter import json_envelope, to_json
from propcat.output.reports import catalog_to_dicts, render_listing, render_table


@click.command("list")
@catalog_options
@click.option("--table", is_flag=True, help="Aligned table instead of the two-line listing.")
@click.option("--limit", default=0, show_default=True, help="Maximum rows in --table output (0 = all).")
@click.pass_context
def list_cmd(ctx, file, start_class, include_nested, track_exits, strict_docs, table, limit):
    """Print the property catalog of FILE."""
    settings = resolve_settings(
        ctx,
        start_class=start_class,
        include_nested=include_nested,
        track_exits=track_exits,
        strict_docs=strict_docs,
    )
    catalog = build_from_file(file, settings)

    if ctx.obj.get("json"):
        click.echo(to_json(json_envelope(
            "list",
            summary={
                "properties": len(catalog),
                "start_class": settings.start_class,
                "include_nested": settings.include_nested,
            },
            file=file,
            properties=catalog_to_dicts(catalog),
        )))
        return

    if table:
        click.echo(render_table(catalog, budget=limit))
    else:
        click.echo(render_listing(catalog), nl=False)
