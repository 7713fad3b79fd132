"""Public API surface for aw_common."""

from aw_common.config import (
    WorkflowConfig,
    is_valid_api_key,
    is_valid_github_token,
    is_valid_openai_key,
    load_workflow_config,
)
from aw_common.errors import (
    AWError,
    CollectionValidationError,
    ConfigurationError,
    GitHubError,
    IconNotFoundError,
    MenuValidationError,
    ProducerError,
)
from aw_common.logging import configure_logging

__all__ = [
    "AWError",
    "CollectionValidationError",
    "ConfigurationError",
    "GitHubError",
    "IconNotFoundError",
    "MenuValidationError",
    "ProducerError",
    "WorkflowConfig",
    "configure_logging",
    "is_valid_api_key",
    "is_valid_github_token",
    "is_valid_openai_key",
    "load_workflow_config",
]
