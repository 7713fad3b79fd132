"""Logging setup for the workflow toolkit.

stdout belongs to the Script Filter document, so every handler configured
here writes to stderr or to a file. Alfred shows stderr in its workflow
debugger, so tracebacks are rendered without local variables and anything
shaped like a credential is masked before it is written.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Any, MutableMapping

import structlog

from aw_common.config.env import parse_bool_env

# Known token prefixes: GitHub, OpenAI, Linear, Notion.
CREDENTIAL_PATTERN = re.compile(
    r"\b(ghp_|gho_|github_pat_|sk-|lin_api_|secret_|ntn_)[A-Za-z0-9_\-]{8,}"
)


def redact_credentials(text: str) -> str:
    """Keep a token's prefix and replace the rest with ``****``."""
    return CREDENTIAL_PATTERN.sub(lambda match: f"{match.group(1)}****", text)


def _redact_event(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_credentials(value)
    return event_dict


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.WARNING
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    return logging._nameToLevel.get(value.upper(), logging.WARNING)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _build_formatter(as_json: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if as_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False, exception_formatter=structlog.dev.plain_traceback
        )
    # Exceptions become plain text first so the redactor sees the traceback.
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            _redact_event,
            renderer,
        ],
        foreign_pre_chain=_shared_processors(),
    )


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Route stdlib and structlog records to stderr (and optionally a file).

    Explicit arguments win over ``AW_LOG_LEVEL``, ``AW_LOG_JSON`` and
    ``AW_LOG_FILE``. The default level is WARNING so a normal Script Filter
    run stays quiet in Alfred's debugger.
    """
    env_json = parse_bool_env(os.environ.get("AW_LOG_JSON"))
    resolved_level = _resolve_level(level or os.environ.get("AW_LOG_LEVEL"), debug)
    resolved_json = bool(env_json if json is None else json)
    resolved_log_file = os.environ.get("AW_LOG_FILE") if log_file is None else log_file

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        _configure_structlog()
        return

    formatter = _build_formatter(resolved_json)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if resolved_log_file:
        handlers.append(logging.FileHandler(resolved_log_file))

    if force:
        root_logger.handlers.clear()

    root_logger.setLevel(resolved_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    _configure_structlog()
