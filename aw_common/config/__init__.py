"""Configuration helpers for aw_common."""

from .env import parse_bool_env, parse_int_env, pick_env
from .workflow import (
    WorkflowConfig,
    is_valid_api_key,
    is_valid_github_token,
    is_valid_openai_key,
    load_workflow_config,
)

__all__ = [
    "WorkflowConfig",
    "is_valid_api_key",
    "is_valid_github_token",
    "is_valid_openai_key",
    "load_workflow_config",
    "parse_bool_env",
    "parse_int_env",
    "pick_env",
]
