"""Generators over a finished catalog: listing, switch dispatch, CSV.

All functions are read-only over the catalog and emit records in catalog
order.
"""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from propcat.catalog import Catalog
from propcat.exit_codes import EmbeddedSeparatorError
from propcat.output.formatter import format_table

CSV_FIELDS = ("class_name", "name", "canonical_path", "type_name", "summary")
TABLE_HEADERS = ["Class", "Property", "Path", "Type", "Summary"]


def render_listing(catalog: Catalog) -> str:
    """Two lines per record: class, name, path and type, then the summary."""
    lines = []
    for record in catalog.values():
        lines.append(f"{record.class_name}\t{record.name}\t{record.canonical_path}\t{record.type_name}")
        lines.append(record.summary)
        lines.append("")
    return "\n".join(lines)


def render_table(catalog: Catalog, budget: int = 0) -> str:
    rows = [[getattr(record, f) for f in CSV_FIELDS] for record in catalog.values()]
    return format_table(TABLE_HEADERS, rows, budget=budget)


def render_dispatch(
    catalog: Catalog,
    *,
    selector: str = "expression",
    target: str = "object",
    result: str = "result",
    base_indent: int = 4,
    indent_unit: str = "\t",
) -> str:
    """C# ``switch`` with one case per canonical path and a null default.

    ::

        switch (expression)
            {
            case "Car.Name":
                result = object.Car.Name;
                break;

            default:
                result = null;
                break;
            }
    """
    lines: list[tuple[int, str]] = [(0, f"switch ({selector})"), (1, "{")]
    for path in catalog:
        lines.append((1, f'case "{path}":'))
        lines.append((2, f"{result} = {target}.{path};"))
        lines.append((2, "break;"))
        lines.append((0, ""))
    lines.append((1, "default:"))
    lines.append((2, f"{result} = null;"))
    lines.append((2, "break;"))
    lines.append((1, "}"))

    out = []
    for level, text in lines:
        out.append(indent_unit * (base_indent + level) + text if text else "")
    return "\n".join(out) + "\n"


def render_csv(
    catalog: Catalog,
    *,
    delimiter: str = ",",
    sep_line: bool = True,
    quote: bool = True,
) -> str:
    """One row per record, summary last.

    *sep_line* prepends ``sep=<delimiter>`` so spreadsheet tools pick the
    right separator; it is not a data row. With *quote* off, a field that
    would need quoting raises EmbeddedSeparatorError instead.
    """
    buf = io.StringIO()
    if sep_line:
        buf.write(f"sep={delimiter}\n")
    writer = csv.writer(
        buf,
        delimiter=delimiter,
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL if quote else csv.QUOTE_NONE,
    )
    for record in catalog.values():
        row = [getattr(record, f) for f in CSV_FIELDS]
        if not quote:
            _check_unquoted(record.canonical_path, row, delimiter)
        writer.writerow(row)
    return buf.getvalue()


def _check_unquoted(canonical_path: str, row: list[str], delimiter: str) -> None:
    for name, value in zip(CSV_FIELDS, row):
        if any(ch in value for ch in (delimiter, '"', "\n", "\r")):
            raise EmbeddedSeparatorError(canonical_path, name)


def catalog_to_dicts(catalog: Catalog) -> list[dict]:
    return [asdict(record) for record in catalog.values()]
