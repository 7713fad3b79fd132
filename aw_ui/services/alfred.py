"""Run Alfred external triggers through osascript."""

from __future__ import annotations

import logging
import re
import subprocess
from enum import Enum
from typing import Callable

from aw_common.errors import AWError

logger = logging.getLogger(__name__)

ALFRED_APP_ID = "com.runningwithcrayons.Alfred"
MAX_ARGUMENT_LENGTH = 155
_OSA_SPECIAL = re.compile(r'(["\\$`])')


class TriggerAction(str, Enum):
    NOTIFY = "notify"
    HOME = "home"
    TERMINAL_COMMAND = "terminal-command"


class TriggerError(AWError):
    """osascript could not run the Alfred trigger."""


def osa_escape(argument: str) -> str:
    """Escape an argument for embedding in a double-quoted AppleScript string.

    Straight single quotes become typographic ones so the shell quoting of
    ``osascript -e '...'`` callers stays intact.
    """
    return _OSA_SPECIAL.sub(r"\\\1", argument.replace("'", "’"))


def build_trigger_script(action: TriggerAction, bundle_id: str, argument: str = "") -> str:
    if len(argument) > MAX_ARGUMENT_LENGTH:
        raise TriggerError(
            f"Trigger argument longer than {MAX_ARGUMENT_LENGTH} characters",
            context={"length": len(argument)},
        )
    return (
        f'tell application id "{ALFRED_APP_ID}"\n'
        f'  run trigger "{action.value}" in workflow "{bundle_id}" '
        f'with argument "{osa_escape(argument)}"\n'
        "end tell"
    )


def run_trigger(
    action: TriggerAction,
    bundle_id: str,
    argument: str = "",
    *,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> None:
    """Ask Alfred to fire one of this workflow's external triggers."""
    script = build_trigger_script(action, bundle_id, argument)
    try:
        result = runner(
            ["osascript", "-e", script],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise TriggerError(f"osascript failed: {exc}", cause=exc) from exc
    if result.returncode != 0:
        raise TriggerError(
            f"osascript exited with {result.returncode}: {result.stderr.strip()}",
            context={"returncode": result.returncode},
        )
    logger.debug("Ran Alfred trigger %s", action.value)
