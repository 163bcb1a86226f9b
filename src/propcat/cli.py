"""Click CLI entry point with lazy-loaded subcommands."""

import logging
import os
import sys

# Fix Unicode output on Windows consoles (cp1253, cp1252, etc.)
if sys.platform == "win32" and not os.environ.get("PYTHONIOENCODING"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click


# Lazy-loading command group: imports command modules only when invoked.
# This avoids importing tree-sitter on `--help` and `config`.
_COMMANDS = {
    "list":   ("propcat.commands.cmd_list",   "list_cmd"),
    "switch": ("propcat.commands.cmd_switch", "switch"),
    "csv":    ("propcat.commands.cmd_csv",    "csv_cmd"),
    "export": ("propcat.commands.cmd_export", "export"),
    "config": ("propcat.commands.cmd_config", "config"),
}

# Command categories for organized --help display
_CATEGORIES = {
    "Catalog": ["list"],
    "Artifacts": ["switch", "csv", "export"],
    "Settings": ["config"],
}

_LOG_LEVELS = {-1: logging.ERROR, 0: logging.WARNING, 1: logging.INFO}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)

    def format_help(self, ctx, formatter):
        """Categorized help display instead of flat alphabetical list."""
        self.format_usage(ctx, formatter)
        formatter.write("\n")
        if self.help:
            formatter.write(self.help + "\n\n")

        for cat_name, cmds in _CATEGORIES.items():
            formatter.write(f"  {cat_name}:\n")
            for cmd_name in cmds:
                cmd = self.get_command(ctx, cmd_name)
                if cmd is None:
                    continue
                help_text = cmd.get_short_help_str(limit=60)
                formatter.write(f"    {cmd_name:10s} {help_text}\n")
            formatter.write("\n")

        formatter.write("  Run `propcat <command> --help` for details on any command.\n")


class ClickEchoHandler(logging.Handler):
    """Logging handler that writes through click.echo to stderr."""

    def emit(self, record):
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Route the ``propcat`` logger to stderr at the requested level.

    Repeated calls replace the previous handler.
    """
    level = logging.DEBUG if verbose > 1 else _LOG_LEVELS[-1 if quiet else min(verbose, 1)]
    logger = logging.getLogger("propcat")
    for handler in list(logger.handlers):
        if isinstance(handler, ClickEchoHandler):
            logger.removeHandler(handler)
    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


@click.group(cls=LazyGroup)
@click.version_option(package_name="propcat")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('-v', '--verbose', count=True, help='More log output (-vv for debug)')
@click.option('-q', '--quiet', is_flag=True, help='Only log errors')
@click.pass_context
def cli(ctx, json_mode, verbose, quiet):
    """propcat: catalog C# properties by canonical path."""
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    configure_logging(verbose, quiet)
