"""Export the property catalog as CSV."""

from __future__ import annotations

import click

from propcat.commands._common import build_from_file, catalog_options, resolve_settings, write_artifact
from propcat.config import CSV_FILE
from propcat.output.formatter import json_envelope, to_json
from propcat.output.reports import render_csv


@click.command("csv")
@catalog_options
@click.option("-o", "--output", default=None,
              help=f"Output file, or - for stdout.  [default: <output_dir>/{CSV_FILE}]")
@click.option("--delimiter", "csv_delimiter", default=None, help="Field separator.  [default: ,]")
@click.option("--sep-line/--no-sep-line", "csv_sep_line", default=True,
              help="Start the file with a sep=<delimiter> marker line.  [default: sep-line]")
@click.option("--quote/--no-quote", "csv_quote", default=True,
              help="Quote fields that contain the separator; with --no-quote such fields are an error.")
@click.pass_context
def csv_cmd(ctx, file, start_class, include_nested, track_exits, strict_docs, output,
            csv_delimiter, csv_sep_line, csv_quote):
    """Write one CSV row per property of FILE."""
    if csv_delimiter is not None and len(csv_delimiter) != 1:
        raise click.BadParameter("must be a single character", param_hint="--delimiter")
    settings = resolve_settings(
        ctx,
        start_class=start_class,
        include_nested=include_nested,
        track_exits=track_exits,
        strict_docs=strict_docs,
        csv_delimiter=csv_delimiter,
        csv_sep_line=csv_sep_line,
        csv_quote=csv_quote,
    )
    catalog = build_from_file(file, settings)
    text = render_csv(
        catalog,
        delimiter=settings.csv_delimiter,
        sep_line=settings.csv_sep_line,
        quote=settings.csv_quote,
    )
    path = write_artifact(text, output, settings, CSV_FILE)
    if path is None:
        return

    if ctx.obj.get("json"):
        click.echo(to_json(json_envelope("csv", summary={"rows": len(catalog)}, output=path)))
    else:
        click.echo(f"Wrote {len(catalog)} rows to {path}")
