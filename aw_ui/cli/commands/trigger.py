from __future__ import annotations

import typer

from aw_common.errors import AWError
from aw_ui.services.alfred import TriggerAction, run_trigger
from aw_ui.wiring import CLIContext


def register_trigger_command(app: typer.Typer, ctx: CLIContext) -> None:
    @app.command("trigger")
    def trigger(
        action: TriggerAction = typer.Argument(..., help="External trigger to fire."),
        argument: str = typer.Argument("", help="Argument passed to the trigger."),
    ) -> None:
        """Fire one of the workflow's Alfred external triggers."""
        try:
            run_trigger(action, ctx.config.bundle_id, argument)
        except AWError as exc:
            ctx.console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)
