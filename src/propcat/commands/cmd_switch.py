"""Generate a C# switch statement that reads each property by canonical path."""

from __future__ import annotations

import click

from propcat.commands._common import build_from_file, catalog_options, resolve_settings, write_artifact
from propcat.config import DISPATCH_FILE
from propcat.output.formatter import json_envelope, to_json
from propcat.output.reports import render_dispatch


@click.command("switch")
@catalog_options
@click.option("-o", "--output", default=None,
              help=f"Output file, or - for stdout.  [default: <output_dir>/{DISPATCH_FILE}]")
@click.option("--target", "dispatch_target", default=None,
              help="Object expression each case reads from.  [default: object]")
@click.option("--selector", "dispatch_selector", default=None,
              help="Expression switched on.  [default: expression]")
@click.pass_context
def switch(ctx, file, start_class, include_nested, track_exits, strict_docs, output,
           dispatch_target, dispatch_selector):
    """Write the switch dispatch for the properties of FILE."""
    settings = resolve_settings(
        ctx,
        start_class=start_class,
        include_nested=include_nested,
        track_exits=track_exits,
        strict_docs=strict_docs,
        dispatch_target=dispatch_target,
        dispatch_selector=dispatch_selector,
    )
    catalog = build_from_file(file, settings)
    text = render_dispatch(
        catalog,
        selector=settings.dispatch_selector,
        target=settings.dispatch_target,
    )
    path = write_artifact(text, output, settings, DISPATCH_FILE)
    if path is None:
        return

    if ctx.obj.get("json"):
        click.echo(to_json(json_envelope("switch", summary={"cases": len(catalog)}, output=path)))
    else:
        click.echo(f"Wrote {len(catalog)} cases to {path}")
