"""Full run: print the listing and write both the switch dispatch and the CSV."""

from __future__ import annotations

import click

from propcat.commands._common import build_from_file, catalog_options, resolve_settings, write_artifact
from propcat.config import CSV_FILE, DISPATCH_FILE
from propcat.output.formatter import json_envelope, to_json
from propcat.output.reports import catalog_to_dicts, render_csv, render_dispatch, render_listing


@click.command("export")
@catalog_options
@click.option("-d", "--output-dir", "output_dir", default=None,
              type=click.Path(file_okay=False),
              help="Directory for the generated files.  [default: .]")
@click.pass_context
def export(ctx, file, start_class, include_nested, track_exits, strict_docs, output_dir):
    """List the properties of FILE and write SwitchCase.txt and Properties.csv."""
    settings = resolve_settings(
        ctx,
        start_class=start_class,
        include_nested=include_nested,
        track_exits=track_exits,
        strict_docs=strict_docs,
        output_dir=output_dir,
    )
    catalog = build_from_file(file, settings)

    # render everything before writing so a CSV error leaves no partial output
    dispatch_text = render_dispatch(
        catalog,
        selector=settings.dispatch_selector,
        target=settings.dispatch_target,
    )
    csv_text = render_csv(
        catalog,
        delimiter=settings.csv_delimiter,
        sep_line=settings.csv_sep_line,
        quote=settings.csv_quote,
    )
    dispatch_path = write_artifact(dispatch_text, None, settings, DISPATCH_FILE)
    csv_path = write_artifact(csv_text, None, settings, CSV_FILE)

    if ctx.obj.get("json"):
        click.echo(to_json(json_envelope(
            "export",
            summary={"properties": len(catalog)},
            file=file,
            artifacts={"switch": dispatch_path, "csv": csv_path},
            properties=catalog_to_dicts(catalog),
        )))
        return

    click.echo(render_listing(catalog), nl=False)
    click.echo(f"Wrote {dispatch_path}")
    click.echo(f"Wrote {csv_path}")
