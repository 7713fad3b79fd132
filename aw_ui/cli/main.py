"""
Command-line interface for the Alfred workflow toolkit.

Alfred's Script Filter runs ``aw menu "{query}"``; the other commands are
helpers for triggers and troubleshooting.
"""

from __future__ import annotations

from typing import Optional

import typer

from aw_common.api import configure_logging
from aw_ui.cli.commands.config import create_config_app
from aw_ui.cli.commands.menu import register_menu_command
from aw_ui.cli.commands.trigger import register_trigger_command
from aw_ui.wiring import CLIContext

ctx_store = CLIContext()

app = typer.Typer(help="Alfred workflow menus and triggers.", no_args_is_help=True)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level to stderr."),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file."),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug, log_file=log_file, force=True)


register_menu_command(app, ctx_store)
register_trigger_command(app, ctx_store)
app.add_typer(create_config_app(ctx_store), name="config")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
