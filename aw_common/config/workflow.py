"""Workflow configuration model and loaders.

The configuration is built once at process start by ``load_workflow_config``
and handed to whatever needs it; nothing in the toolkit reads a module-level
config object.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from aw_common.config.env import pick_env
from aw_common.errors import ConfigurationError, format_locations

logger = logging.getLogger(__name__)

DEFAULT_BUNDLE_ID = "com.ben-willenbring.ts"
DEFAULT_CREATOR = "Ben Willenbring"
DEFAULT_ICON_DIR = "img/icons"
CONFIG_FILE_NAME = "config.json"

# Environment variable names Alfred (and the user) export to script filters.
ENV_FIELDS: Dict[str, str] = {
    "bundle_id": "alfred_workflow_bundleid",
    "workflow_name": "alfred_workflow_name",
    "workflow_version": "alfred_workflow_version",
    "workflow_uid": "alfred_workflow_uid",
    "data_dir": "alfred_workflow_data",
    "cache_dir": "alfred_workflow_cache",
    "keyword": "alfred_keyword",
    "host": "HOST",
    "port": "SERVER_PORT",
    "icon_dir": "AW_ICON_DIR",
    "strict_icons": "AW_STRICT_ICONS",
    "repo_owner": "REPO_OWNER",
    "repo_name": "REPO_NAME",
    "github_user": "GITHUB_USER",
    "github_token": "GITHUB_TOKEN",
    "linear_api_key": "LINEAR_API_KEY",
    "openai_key": "OPENAI_KEY",
    "notion_api_key": "NOTION_API_KEY",
    "testmo_api_key": "TESTMO_API_KEY",
}

# Keys accepted under ``variables`` in <data_dir>/config.json.
FILE_VARIABLES: Dict[str, str] = {
    "GITHUB_TOKEN": "github_token",
    "LINEAR_API_KEY": "linear_api_key",
    "OPENAI_KEY": "openai_key",
    "NOTION_API_KEY": "notion_api_key",
    "TESTMO_API_KEY": "testmo_api_key",
}

SECRET_FIELDS = frozenset(FILE_VARIABLES.values())


class WorkflowConfig(BaseModel):
    """Read-only settings consumed by producers, the icon resolver and the CLI."""

    bundle_id: str = Field(default=DEFAULT_BUNDLE_ID, min_length=1)
    workflow_name: str = ""
    workflow_version: str = ""
    workflow_uid: str = ""
    data_dir: str = Field(default="./", description="Alfred persistent data folder")
    cache_dir: str = ""
    keyword: str = ""
    host: str = "127.0.0.1"
    port: int = Field(default=9393, ge=1, le=65535)
    icon_dir: str = Field(default=DEFAULT_ICON_DIR, min_length=1)
    strict_icons: bool = Field(
        default=False,
        description="Reject missing icon files instead of substituting the default icon",
    )
    creator: str = DEFAULT_CREATOR
    repo_owner: str = "Onebrief"
    repo_name: str = "bc"
    github_user: str = "gnirbnelliw"
    github_token: str = Field(default="", repr=False)
    linear_api_key: str = Field(default="", repr=False)
    openai_key: str = Field(default="", repr=False)
    notion_api_key: str = Field(default="", repr=False)
    testmo_api_key: str = Field(default="", repr=False)

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("icon_dir")
    @classmethod
    def _strip_trailing_separator(cls, value: str) -> str:
        stripped = value.rstrip("/")
        return stripped or "/"

    @property
    def config_path(self) -> Path:
        return Path(self.data_dir) / CONFIG_FILE_NAME

    @property
    def has_github_access(self) -> bool:
        return is_valid_github_token(self.github_token)

    def variables(self) -> Dict[str, str]:
        """Launcher-global variables attached to every menu collection."""
        return {"creator": self.creator, "bundleid": self.bundle_id}

    def masked(self) -> Dict[str, Any]:
        """Return a dump safe for printing, with credentials redacted."""
        data = self.model_dump()
        for key in SECRET_FIELDS:
            if data.get(key):
                data[key] = "****" + data[key][-4:]
        return data


def load_config_file(path: Path) -> Dict[str, str]:
    """Load credential overrides from a workflow ``config.json``.

    Returns an empty mapping when the file is missing or unreadable; the
    problem is logged and the environment values stay in effect.
    """
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable workflow config %s: %s", path, exc)
        return {}

    variables = raw.get("variables") if isinstance(raw, dict) else None
    if not isinstance(variables, dict):
        logger.warning("Ignoring workflow config %s: missing 'variables' mapping", path)
        return {}

    overrides: Dict[str, str] = {}
    for key, field_name in FILE_VARIABLES.items():
        value = variables.get(key)
        if isinstance(value, str) and value:
            overrides[field_name] = value
    return overrides


def load_workflow_config(
    environ: Optional[Mapping[str, str]] = None,
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    read_file: bool = True,
) -> WorkflowConfig:
    """Build the process-wide configuration.

    Precedence, lowest to highest: model defaults, environment,
    ``<data_dir>/config.json`` variables, explicit ``overrides``.
    """
    env = os.environ if environ is None else environ
    data: Dict[str, Any] = pick_env(env, ENV_FIELDS)
    if overrides:
        data.update(overrides)

    if read_file:
        data_dir = data.get("data_dir") or WorkflowConfig.model_fields["data_dir"].default
        file_values = load_config_file(Path(data_dir) / CONFIG_FILE_NAME)
        for key, value in file_values.items():
            if not overrides or key not in overrides:
                data[key] = value

    try:
        return WorkflowConfig(**data)
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid workflow configuration",
            context={"errors": format_locations(exc.errors())},
            cause=exc,
        ) from exc


def is_valid_github_token(token: Optional[str]) -> bool:
    """GitHub classic tokens start with ``ghp_`` and are at least 40 chars."""
    return token is not None and len(token.strip()) >= 40 and token.startswith("ghp_")


def is_valid_openai_key(key: Optional[str]) -> bool:
    return key is not None and len(key.strip()) >= 40 and key.startswith("sk-")


def is_valid_api_key(key: Optional[str]) -> bool:
    return key is not None and len(key.strip()) >= 20
