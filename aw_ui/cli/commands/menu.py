from __future__ import annotations

from typing import List, Optional

import typer
from rich.table import Table

from aw_menu.output import render_or_error
from aw_producers.registry import generate_collection
from aw_ui.wiring import CLIContext


def register_menu_command(app: typer.Typer, ctx: CLIContext) -> None:
    """Register the Script Filter entry point on the root app."""

    @app.command("menu")
    def menu(
        query: str = typer.Argument("", help="Text typed after the keyword in Alfred."),
        producer: Optional[List[str]] = typer.Option(
            None,
            "--producer",
            "-p",
            help="Run only these producers, in this order (repeatable).",
        ),
    ) -> None:
        """Print the Script Filter JSON for the current query."""
        code = render_or_error(
            lambda: generate_collection(
                ctx.config,
                registry=ctx.registry,
                names=producer or None,
                query=query.strip(),
            )
        )
        if code:
            raise typer.Exit(code)

    @app.command("producers")
    def producers() -> None:
        """List registered producers and whether they run by default."""
        table = Table(title="Menu producers", show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan")
        table.add_column("Default", justify="center")
        table.add_column("Description")
        for name, item in ctx.registry.available().items():
            enabled = "yes" if item.enabled(ctx.config) else "no"
            table.add_row(name, enabled, item.description)
        ctx.console.print(table)
