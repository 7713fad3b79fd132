"""Lazily constructed services shared by CLI commands."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from aw_common.api import WorkflowConfig, load_workflow_config
from aw_producers.builtin import builtin_producers
from aw_producers.registry import ProducerRegistry


@dataclass
class CLIContext:
    """Container for the workflow config and producer registry, built on first use."""

    _config: Optional[WorkflowConfig] = None
    _registry: Optional[ProducerRegistry] = None
    _console: Optional[Console] = None

    @property
    def config(self) -> WorkflowConfig:
        if self._config is None:
            self._config = load_workflow_config()
        return self._config

    @config.setter
    def config(self, value: WorkflowConfig) -> None:
        self._config = value

    @property
    def registry(self) -> ProducerRegistry:
        if self._registry is None:
            self._registry = ProducerRegistry(builtin_producers())
        return self._registry

    @registry.setter
    def registry(self, value: ProducerRegistry) -> None:
        self._registry = value

    @property
    def console(self) -> Console:
        # stdout carries Script Filter JSON, so human output goes to stderr.
        if self._console is None:
            self._console = Console(file=sys.stderr)
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value
