"""Producer interface and the YAML-backed static producer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List

import yaml

from aw_common.config.workflow import WorkflowConfig
from aw_common.errors import ProducerError
from aw_menu.custom_function import (
    ArgumentFunction,
    CustomFunction,
    InputItem,
    arg_of,
)
from aw_menu.icons import IconResolver
from aw_menu.items import MenuItem

logger = logging.getLogger(__name__)

DATA_ROOT = Path(__file__).resolve().parent / "data"


class MenuProducer(ABC):
    """
    Abstract base class for anything that contributes items to a collection.

    A producer owns its input definitions, the icon shared by its items and
    the policy that turns an input into the ``arg`` handed back to Alfred.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier used on the command line (e.g. 'emojis')."""

    @property
    def description(self) -> str:
        return ""

    def enabled(self, config: WorkflowConfig) -> bool:
        """Whether the producer runs by default under ``config``."""
        return True

    @abstractmethod
    async def build(self, config: WorkflowConfig, query: str = "") -> List[MenuItem]:
        """Return this producer's validated menu items."""

    def icon_path(self, config: WorkflowConfig, icon_name: str) -> str:
        return f"{config.icon_dir}/{icon_name}"


def load_inputs(data_file: Path) -> List[Any]:
    """Read a YAML list of input definitions (strings or mappings)."""
    if not data_file.exists():
        raise ProducerError(
            f"Producer data file not found: {data_file}",
            context={"path": data_file},
        )
    with open(data_file, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or []
    if not isinstance(data, list):
        raise ProducerError(
            f"Producer data file must contain a list: {data_file}",
            context={"path": data_file},
        )
    return data


def matches_query(item: InputItem, query: str) -> bool:
    """Case-insensitive substring match over title, subtitle and arg."""
    if not query:
        return True
    needle = query.lower()
    if isinstance(item, str):
        fields = [item]
    else:
        fields = [item.title, item.subtitle or "", item.arg or ""]
    return any(needle in field.lower() for field in fields)


class StaticProducer(MenuProducer):
    """Producer whose inputs come from a YAML file shipped with the package."""

    def __init__(
        self,
        name: str,
        data_file: str,
        icon_name: str,
        *,
        description: str = "",
        argument: ArgumentFunction = arg_of,
        filter_by_query: bool = False,
        loader: Callable[[Path], List[Any]] = load_inputs,
    ) -> None:
        self._name = name
        self._description = description
        self.data_file = DATA_ROOT / data_file
        self.icon_name = icon_name
        self.argument = argument
        self.filter_by_query = filter_by_query
        self._loader = loader

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def raw_inputs(self) -> List[Any]:
        return self._loader(self.data_file)

    async def build(self, config: WorkflowConfig, query: str = "") -> List[MenuItem]:
        function = CustomFunction(
            self.raw_inputs(),
            icon_path=self.icon_path(config, self.icon_name),
            icons=IconResolver.from_config(config),
        )
        if self.filter_by_query:
            function.inputs = [item for item in function.inputs if matches_query(item, query)]
        logger.debug("Producer %s built from %d inputs", self.name, len(function.inputs))
        return function.menus(self.argument)
