"""Summary extraction from XML documentation comments.

A declaration's leading trivia is a sequence of raw comment texts. The
first run of ``///`` comments is the documentation fragment; its lines are
parsed as XML and the text of the top-level ``<summary>`` element is
returned::

    /// <summary>
    /// This is the summary for property Id.
    /// </summary>

yields ``"This is the summary for property Id."``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterable

from propcat.exit_codes import DocumentationParseError

log = logging.getLogger(__name__)

DOC_MARKER = "///"
_WRAPPER = "doc"


def is_doc_comment(text: str) -> bool:
    """True for a single-line documentation comment (``///`` but not ``////``)."""
    stripped = text.lstrip()
    return stripped.startswith(DOC_MARKER) and not stripped.startswith(DOC_MARKER + "/")


def doc_fragment(trivia: Iterable[str]) -> list[str]:
    """Lines of the first run of documentation comments in *trivia*.

    Returns an empty list when there is none.
    """
    lines: list[str] = []
    for item in trivia:
        if is_doc_comment(item):
            lines.extend(item.splitlines())
        elif lines:
            break
    return lines


def _strip_marker(line: str) -> str:
    line = line.strip()
    if line.startswith(DOC_MARKER):
        line = line[len(DOC_MARKER):]
    return line


def extract_summary(trivia: Iterable[str], *, strict: bool = False, context: str | None = None) -> str:
    """Return the whitespace-normalized text of the ``<summary>`` element.

    Without a documentation comment the result is ``""``. A comment that is
    not well-formed XML, or has no top-level ``<summary>``, raises
    DocumentationParseError when *strict* is set; otherwise it is logged
    and ``""`` is returned. *context* (usually the canonical path) is only
    used in messages.
    """
    lines = doc_fragment(trivia)
    if not lines:
        return ""

    body = "\n".join(_strip_marker(line) for line in lines)
    try:
        root = ET.fromstring(f"<{_WRAPPER}>{body}</{_WRAPPER}>")
    except ET.ParseError as exc:
        return _degrade(f"invalid XML ({exc})", strict, context)

    summary = root.find("summary")
    if summary is None:
        return _degrade("no <summary> element", strict, context)

    text = "".join(summary.itertext()).replace(DOC_MARKER, "")
    return " ".join(text.split())


def _degrade(reason: str, strict: bool, context: str | None) -> str:
    if strict:
        raise DocumentationParseError(reason, context)
    log.warning("Ignoring documentation for %s: %s", context or "<unknown>", reason)
    return ""
