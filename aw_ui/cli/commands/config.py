from __future__ import annotations

import json

import typer
from rich.table import Table

from aw_common.errors import ConfigurationError
from aw_ui.wiring import CLIContext


def create_config_app(ctx: CLIContext) -> typer.Typer:
    """Build the config Typer app, wired to the given context."""
    app = typer.Typer(help="Inspect the workflow configuration.", no_args_is_help=True)

    @app.command("show")
    def config_show(
        as_json: bool = typer.Option(False, "--json", help="Print JSON to stdout instead of a table."),
    ) -> None:
        """Show the resolved configuration with credentials masked."""
        try:
            data = ctx.config.masked()
        except ConfigurationError as exc:
            ctx.console.print(f"[red]{exc}[/red]")
            for entry in exc.context.get("errors", []):
                ctx.console.print(f"  {entry['loc']}: {entry['msg']}")
            raise typer.Exit(1)

        if as_json:
            typer.echo(json.dumps(data, indent=2))
            return

        table = Table(title="Workflow configuration", show_header=True, header_style="bold magenta")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in data.items():
            table.add_row(key, str(value))
        ctx.console.print(table)

    return app
