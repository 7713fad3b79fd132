"""Shared helpers for the Alfred workflow toolkit."""

from aw_common.api import WorkflowConfig, configure_logging, load_workflow_config

__all__ = ["WorkflowConfig", "configure_logging", "load_workflow_config"]
