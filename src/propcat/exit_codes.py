"""Standardized CLI exit codes and error types for propcat.

Exit code scheme:

    0  SUCCESS          -- catalog built and every artifact written
    1  GENERAL_ERROR    -- unexpected failure, internal misuse
    2  USAGE_ERROR      -- invalid arguments, bad flags (Click default)
    3  STRUCTURE        -- requested start class not found in the tree
    4  DUPLICATE        -- two properties (or classes) collide on a name
    5  DOCUMENTATION    -- malformed documentation comment under --strict-docs
    6  EMBEDDED_SEP     -- CSV field contains the separator and quoting is off
    7  SOURCE           -- input file missing, unreadable or unsupported

Every error below is a ``click.ClickException`` so the CLI prints
``Error: <message>`` and exits with the code, while library callers can
catch them like ordinary exceptions.
"""

from __future__ import annotations

import sys

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_STRUCTURE: int = 3
EXIT_DUPLICATE: int = 4
EXIT_DOCUMENTATION: int = 5
EXIT_EMBEDDED_SEPARATOR: int = 6
EXIT_SOURCE: int = 7

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
    EXIT_STRUCTURE: "start class not found",
    EXIT_DUPLICATE: "duplicate canonical path or class name",
    EXIT_DOCUMENTATION: "malformed documentation comment",
    EXIT_EMBEDDED_SEPARATOR: "field contains the CSV separator",
    EXIT_SOURCE: "source file missing or unsupported",
}

# ---------------------------------------------------------------------------
# Custom exceptions
# ---------------------------------------------------------------------------


class PropcatError(click.ClickException):
    """Base class for propcat errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class StartClassNotFoundError(PropcatError):
    """Raised when the requested start class does not exist in the tree."""

    def __init__(self, class_name: str):
        super().__init__(f"Start class '{class_name}' not found in the declaration tree.", EXIT_STRUCTURE)
        self.class_name = class_name


class DuplicateCanonicalPathError(PropcatError):
    """Raised when a second property resolves to an existing canonical path."""

    def __init__(self, canonical_path: str, first_line: int | None = None, second_line: int | None = None):
        where = ""
        if first_line is not None and second_line is not None:
            where = f" (lines {first_line} and {second_line})"
        super().__init__(
            f"Duplicate canonical path '{canonical_path}'{where}. "
            "Two properties resolve to the same path; check for repeated class names.",
            EXIT_DUPLICATE,
        )
        self.canonical_path = canonical_path


class DuplicateClassNameError(PropcatError):
    """Raised when enter-only resolution meets a class name used at two positions."""

    def __init__(self, class_name: str, lineages: list[str]):
        joined = ", ".join(lineages)
        super().__init__(
            f"Class name '{class_name}' is declared at more than one position ({joined}); "
            "enter-only path resolution needs globally unique class names.",
            EXIT_DUPLICATE,
        )
        self.class_name = class_name
        self.lineages = lineages


class DocumentationParseError(PropcatError):
    """Raised when a documentation comment cannot be parsed or has no summary."""

    def __init__(self, reason: str, context: str | None = None):
        where = f" for '{context}'" if context else ""
        super().__init__(f"Malformed documentation comment{where}: {reason}", EXIT_DOCUMENTATION)
        self.reason = reason
        self.context = context


class EmbeddedSeparatorError(PropcatError):
    """Raised when an unquoted CSV field would contain the separator or a line break."""

    def __init__(self, canonical_path: str, field: str):
        super().__init__(
            f"Field '{field}' of '{canonical_path}' contains the CSV separator, a quote or a line break.",
            EXIT_EMBEDDED_SEPARATOR,
        )
        self.canonical_path = canonical_path
        self.field = field


class SourceNotFoundError(PropcatError):
    """Raised when the input source file does not exist or cannot be read."""

    def __init__(self, path: str):
        super().__init__(f"Source file not found or unreadable: {path}", EXIT_SOURCE)
        self.path = path


class UnsupportedLanguageError(PropcatError):
    """Raised when no tree provider handles the input file."""

    def __init__(self, path: str):
        super().__init__(f"No declaration tree provider for {path}", EXIT_SOURCE)
        self.path = path


class CatalogFrozenError(PropcatError):
    """Raised when a frozen catalog is modified."""

    def __init__(self, canonical_path: str):
        super().__init__(f"Catalog is frozen; cannot add '{canonical_path}'.")


class ResolverStateError(PropcatError):
    """Raised when the resolver is asked to leave a class it never entered."""


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------


def exit_with(code: int, message: str | None = None) -> None:
    """Print an optional message to stderr and exit with the given code.

    Uses click.echo(err=True) for consistent output handling.
    """
    if message:
        click.echo(f"Error: {message}", err=True)
    sys.exit(code)
