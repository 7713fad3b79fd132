"""Producer registry and the asynchronous assembly pass."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from aw_common.config.workflow import WorkflowConfig
from aw_common.errors import AWError, ProducerError
from aw_menu.collection import MenuCollection, assemble
from aw_menu.icons import IconResolver
from aw_menu.items import MenuItem
from aw_producers.base import MenuProducer
from aw_producers.builtin import builtin_producers

logger = logging.getLogger(__name__)


class ProducerRegistry:
    """In-memory registry of menu producers, kept in registration order."""

    def __init__(self, producers: Optional[Iterable[MenuProducer]] = None):
        self._producers: Dict[str, MenuProducer] = {}
        if producers:
            for producer in producers:
                self.register(producer)

    def register(self, producer: MenuProducer) -> None:
        if not isinstance(producer, MenuProducer):
            raise TypeError(f"Unknown producer type: {type(producer)}")
        if producer.name in self._producers:
            raise ValueError(f"Producer '{producer.name}' is already registered")
        self._producers[producer.name] = producer

    def get(self, name: str) -> MenuProducer:
        if name not in self._producers:
            raise KeyError(f"Menu producer '{name}' not found")
        return self._producers[name]

    def available(self) -> Dict[str, MenuProducer]:
        return dict(self._producers)

    def select(
        self, config: WorkflowConfig, names: Optional[Sequence[str]] = None
    ) -> List[MenuProducer]:
        """Producers to run: the named ones in the given order, else all enabled ones.

        An unknown name raises ProducerError so callers render it like any
        other generation failure.
        """
        if names:
            unknown = [name for name in names if name not in self._producers]
            if unknown:
                raise ProducerError(
                    f"Unknown menu producer: {', '.join(unknown)}",
                    context={"producer": unknown[0], "unknown": unknown},
                )
            return [self.get(name) for name in names]
        return [producer for producer in self._producers.values() if producer.enabled(config)]


async def _run_producer(
    producer: MenuProducer, config: WorkflowConfig, query: str
) -> List[MenuItem]:
    try:
        return await producer.build(config, query)
    except ProducerError:
        raise
    except AWError as exc:
        raise ProducerError(
            f"{producer.name}: {exc}",
            context={"producer": producer.name, **exc.context},
            cause=exc,
        ) from exc
    except Exception as exc:
        raise ProducerError(
            f"{producer.name}: {exc}",
            context={"producer": producer.name},
            cause=exc,
        ) from exc


async def assemble_async(
    producers: Sequence[MenuProducer],
    config: WorkflowConfig,
    *,
    query: str = "",
    variables: Optional[Mapping[str, str]] = None,
) -> MenuCollection:
    """Run producers concurrently and assemble their items in caller order.

    The first failing producer (in caller order) fails the whole pass.
    """
    results = await asyncio.gather(
        *(_run_producer(producer, config, query) for producer in producers),
        return_exceptions=True,
    )
    outputs: List[List[MenuItem]] = []
    for producer, result in zip(producers, results):
        if isinstance(result, BaseException):
            logger.error("Producer %s failed: %s", producer.name, result)
            raise result
        outputs.append(result)
    return assemble(outputs, variables, icons=IconResolver.from_config(config))


def generate_collection(
    config: WorkflowConfig,
    *,
    registry: Optional[ProducerRegistry] = None,
    names: Optional[Sequence[str]] = None,
    query: str = "",
) -> MenuCollection:
    """Synchronous entry point for one generation pass."""
    resolved = registry or ProducerRegistry(builtin_producers())
    producers = resolved.select(config, names)
    return asyncio.run(
        assemble_async(producers, config, query=query, variables=config.variables())
    )
