"""Environment variable parsing utilities."""

from __future__ import annotations

from typing import Mapping


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_int_env(value: str | None) -> int | None:
    """Parse an integer from an environment variable string.

    Returns None if value is None or cannot be parsed.
    """
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def pick_env(environ: Mapping[str, str], mapping: Mapping[str, str]) -> dict[str, str]:
    """Collect ``{field: environ[var]}`` for every variable that is set.

    Example: pick_env(os.environ, {"port": "SERVER_PORT"}) -> {"port": "9393"}
    Empty strings are treated as unset.
    """
    picked: dict[str, str] = {}
    for field_name, var_name in mapping.items():
        value = environ.get(var_name)
        if value is None or value == "":
            continue
        picked[field_name] = value
    return picked
