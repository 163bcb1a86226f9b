"""Tests for standardized CLI exit codes.

Validates that:
- Exit code constants have correct values
- exit_with() helper works correctly
- Custom exceptions carry the right exit codes
- CLI failures surface those codes
"""

from __future__ import annotations

import click
import pytest

from propcat.exit_codes import (
    DESCRIPTIONS,
    EXIT_DOCUMENTATION,
    EXIT_DUPLICATE,
    EXIT_EMBEDDED_SEPARATOR,
    EXIT_ERROR,
    EXIT_SOURCE,
    EXIT_STRUCTURE,
    EXIT_SUCCESS,
    EXIT_USAGE,
    CatalogFrozenError,
    DocumentationParseError,
    DuplicateCanonicalPathError,
    DuplicateClassNameError,
    EmbeddedSeparatorError,
    PropcatError,
    ResolverStateError,
    SourceNotFoundError,
    StartClassNotFoundError,
    UnsupportedLanguageError,
    exit_with,
)
from tests.conftest import invoke_cli

# ===========================================================================
# Test exit code constants
# ===========================================================================


class TestExitCodeConstants:
    """Verify exit code integer values match the documented scheme."""

    def test_values(self):
        assert EXIT_SUCCESS == 0
        assert EXIT_ERROR == 1
        assert EXIT_USAGE == 2
        assert EXIT_STRUCTURE == 3
        assert EXIT_DUPLICATE == 4
        assert EXIT_DOCUMENTATION == 5
        assert EXIT_EMBEDDED_SEPARATOR == 6
        assert EXIT_SOURCE == 7

    def test_descriptions_cover_all_codes(self):
        for code in range(8):
            assert code in DESCRIPTIONS, f"Missing description for exit code {code}"
            assert DESCRIPTIONS[code]


# ===========================================================================
# Test exit_with() helper
# ===========================================================================


class TestExitWith:
    def test_exit_with_message(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            exit_with(EXIT_USAGE, "bad key")
        assert exc_info.value.code == EXIT_USAGE
        assert "Error: bad key" in capsys.readouterr().err

    def test_exit_with_no_message(self):
        with pytest.raises(SystemExit) as exc_info:
            exit_with(0)
        assert exc_info.value.code == 0


# ===========================================================================
# Test custom exceptions
# ===========================================================================


class TestCustomExceptions:
    def test_propcat_error_default(self):
        err = PropcatError("something broke")
        assert err.exit_code == EXIT_ERROR
        assert err.format_message() == "something broke"

    def test_propcat_error_custom_code(self):
        assert PropcatError("custom", exit_code=42).exit_code == 42

    @pytest.mark.parametrize(
        "err, code",
        [
            (StartClassNotFoundError("Car"), EXIT_STRUCTURE),
            (DuplicateCanonicalPathError("Car.Name"), EXIT_DUPLICATE),
            (DuplicateClassNameError("Item", ["A.Item", "B.Item"]), EXIT_DUPLICATE),
            (DocumentationParseError("no <summary> element"), EXIT_DOCUMENTATION),
            (EmbeddedSeparatorError("Car.Name", "summary"), EXIT_EMBEDDED_SEPARATOR),
            (SourceNotFoundError("missing.cs"), EXIT_SOURCE),
            (UnsupportedLanguageError("notes.txt"), EXIT_SOURCE),
            (CatalogFrozenError("Car.Name"), EXIT_ERROR),
            (ResolverStateError("no class to exit"), EXIT_ERROR),
        ],
    )
    def test_exit_code(self, err, code):
        assert err.exit_code == code

    def test_duplicate_path_message_without_lines(self):
        msg = DuplicateCanonicalPathError("Car.Name").format_message()
        assert "'Car.Name'" in msg
        assert "lines" not in msg

    def test_documentation_error_without_context(self):
        msg = DocumentationParseError("invalid XML").format_message()
        assert msg == "Malformed documentation comment: invalid XML"

    def test_exceptions_inherit_click_exception(self):
        for cls in [PropcatError, StartClassNotFoundError, EmbeddedSeparatorError, SourceNotFoundError]:
            assert issubclass(cls, click.ClickException)


# ===========================================================================
# CLI exit codes
# ===========================================================================


class TestCliExitCodes:
    def test_missing_source(self, cli_runner, tmp_path):
        result = invoke_cli(cli_runner, ["list", "Missing.cs"], cwd=tmp_path)
        assert result.exit_code == EXIT_SOURCE
        assert "Missing.cs" in result.output

    def test_unsupported_extension(self, cli_runner, tmp_path):
        (tmp_path / "notes.txt").write_text("class A {}\n")
        result = invoke_cli(cli_runner, ["list", "notes.txt"], cwd=tmp_path)
        assert result.exit_code == EXIT_SOURCE

    def test_start_class_not_found(self, cli_runner, sample_cs):
        result = invoke_cli(cli_runner, ["list", sample_cs, "--start-class", "Truck"], cwd=sample_cs.parent)
        assert result.exit_code == EXIT_STRUCTURE
        assert "Truck" in result.output

    def test_unknown_command_is_usage_error(self, cli_runner, tmp_path):
        result = invoke_cli(cli_runner, ["frobnicate"], cwd=tmp_path)
        assert result.exit_code == EXIT_USAGE
