"""Menu producers: the independent sources of Script Filter items."""

from aw_producers.base import MenuProducer, StaticProducer
from aw_producers.builtin import builtin_producers
from aw_producers.registry import ProducerRegistry, assemble_async, generate_collection

__all__ = [
    "MenuProducer",
    "ProducerRegistry",
    "StaticProducer",
    "assemble_async",
    "builtin_producers",
    "generate_collection",
]
