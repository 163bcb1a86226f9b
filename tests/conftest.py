"""Shared test fixtures and helpers for propcat tests.

Provides:
- In-memory tree builders: unit(), ns(), struct(), cls(), prop(), doc()
- Sample C# source: SAMPLE_CS (the Car / Interior hierarchy)
- CliRunner fixtures: cli_runner, invoke_cli()
- File fixtures: sample_cs (SAMPLE_CS written under tmp_path)
- parse_cs() for tests that need the tree-sitter provider
"""

from __future__ import annotations

import logging
import os

import pytest
from click.testing import CliRunner

from propcat.languages.base import DeclarationNode, NodeKind

# ===========================================================================
# In-memory declaration trees (no parser needed)
# ===========================================================================


def _attach(node, children):
    for child in children:
        node.add(child)
    return node


def unit(*children):
    """Compilation unit root."""
    return _attach(DeclarationNode(NodeKind.OTHER, syntax="compilation_unit"), children)


def ns(name, *children):
    """Namespace (or any other non-class container)."""
    return _attach(DeclarationNode(NodeKind.OTHER, name, syntax="namespace_declaration"), children)


def struct(name, *children):
    return _attach(DeclarationNode(NodeKind.OTHER, name, syntax="struct_declaration"), children)


def cls(name, *children, trivia=()):
    return _attach(DeclarationNode(NodeKind.CLASS, name, leading_trivia=trivia), children)


def prop(name, type_name="int", trivia=(), line=0):
    return DeclarationNode(NodeKind.PROPERTY, name, type_name=type_name, leading_trivia=trivia, line=line)


def doc(summary):
    """Leading trivia of a one-line-summary documentation comment."""
    return ("/// <summary>", f"/// {summary}", "/// </summary>")


def car_tree():
    """SyntaxTreeTest { Id, Car { Name, SerialNumber, CurrentSpeed, Automatic, Interior { ... } } }."""
    return unit(ns(
        "PropertyCollector",
        cls(
            "SyntaxTreeTest",
            prop("Id", trivia=doc("This is the summary for property Id.")),
            cls(
                "Car",
                prop("Name", "string", trivia=doc("This is the summary for property Name.")),
                prop("SerialNumber"),
                prop("CurrentSpeed", "double"),
                prop("Automatic", "bool", trivia=doc("This is the summary for property Automatic.")),
                cls(
                    "Interior",
                    prop("NumberSeats", trivia=doc("This is the summary for property NumberSeats.")),
                    prop("CupHolder", trivia=doc("This is the summary for property CupHolder.")),
                    prop("CurrentDriver", "string"),
                ),
            ),
        ),
    ))


# ===========================================================================
# Sample C# source
# ===========================================================================

SAMPLE_CS = """\
namespace PropertyCollector
{
    /// <summary>
    /// This is a test class that provides a declaration tree.
    /// </summary>
    class SyntaxTreeTest
    {
        /// <summary>
        /// This is the summary for property Id.
        /// </summary>
        public int Id
        { get; set; }

        /// <summary>
        /// Internal Class Car.
        /// </summary>
        public class Car
        {
            /// <summary>
            /// This is the summary for property Name.
            /// </summary>
            public string Name
            { get; set; }

            public int SerialNumber
            { get; set; }

            /// <summary>
            /// This is the summary for property CurrentSpeed.
            /// </summary>
            public double CurrentSpeed { get; set; }

            /// <summary>
            /// This is the summary for property Automatic.
            /// </summary>
            protected bool Automatic
            { get; set; }

            /// <summary>
            /// Internal Class Interior.
            /// </summary>
            public class Interior
            {
                /// <summary>
                /// This is the summary for property NumberSeats.
                /// </summary>
                public int NumberSeats
                { get; set; }

                /// <summary>
                /// This is the summary for property CupHolder.
                /// </summary>
                public int CupHolder
                { get; set; }

                public string CurrentDriver { get; set; }
            }
        }
    }
}
"""


def parse_cs(source_text: str, file_path: str = "Sample.cs"):
    """Parse C# text with the tree-sitter provider (skips if the grammar is missing)."""
    pytest.importorskip("tree_sitter_language_pack")
    from propcat.languages.registry import get_provider

    return get_provider("c_sharp").parse(source_text.encode("utf-8"), file_path)


@pytest.fixture
def sample_cs(tmp_path):
    """SAMPLE_CS written to tmp_path/src/SyntaxTreeTest.cs; returns its path."""
    pytest.importorskip("tree_sitter_language_pack")
    src = tmp_path / "src"
    src.mkdir()
    path = src / "SyntaxTreeTest.cs"
    path.write_text(SAMPLE_CS, encoding="utf-8")
    return path


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep PROPCAT_* variables from the developer's shell out of tests."""
    for var in ("PROPCAT_OUTPUT_DIR", "PROPCAT_START_CLASS", "PROPCAT_STRICT_DOCS"):
        monkeypatch.delenv(var, raising=False)
    yield
    logger = logging.getLogger("propcat")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the propcat CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["list", "A.cs"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from propcat.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(str(a) for a in args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args, catch_exceptions=False)
    finally:
        os.chdir(old_cwd)

    return result
