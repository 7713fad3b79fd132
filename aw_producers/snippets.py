"""Text snippet producers: lorem ipsum passages and batched military orders."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from aw_common.errors import ProducerError
from aw_producers.base import DATA_ROOT, StaticProducer

SNIPPETS_FILE = DATA_ROOT / "snippets.yml"
PREVIEW_LENGTH = 60
ORDERS_PER_ITEM = 5


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    if len(text) <= length:
        return text
    return f"{text[:length]}..."


def _load_section(path: Path, section: str) -> List[Any]:
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    entries = data.get(section) if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ProducerError(
            f"Snippet section '{section}' missing from {path}",
            context={"path": path, "section": section},
        )
    return entries


def lorem_inputs(path: Path = SNIPPETS_FILE) -> List[Dict[str, str]]:
    return [
        {"title": entry["title"], "subtitle": preview(entry["text"]), "arg": entry["text"]}
        for entry in _load_section(path, "lorem")
    ]


def military_order_inputs(
    path: Path = SNIPPETS_FILE, batch_size: int = ORDERS_PER_ITEM
) -> List[Dict[str, str]]:
    """Group orders into batches; each batch becomes one item joined by blank lines."""
    orders = [str(order) for order in _load_section(path, "military_orders")]
    inputs: List[Dict[str, str]] = []
    for start in range(0, len(orders), batch_size):
        batch = orders[start : start + batch_size]
        label = f"{start + 1}-{start + len(batch)}"
        inputs.append(
            {
                "title": f"Military Orders: {label}",
                "subtitle": f"{label}: e.g. {preview(', '.join(batch))}",
                "arg": "\n\n".join(batch),
            }
        )
    return inputs


def lorem_producer() -> StaticProducer:
    return StaticProducer(
        "lorem",
        "snippets.yml",
        "lorem.png",
        description="Lorem ipsum and other filler passages",
        loader=lorem_inputs,
    )


def military_orders_producer() -> StaticProducer:
    return StaticProducer(
        "military-orders",
        "snippets.yml",
        "dod.png",
        description="Sample operation orders, five per item",
        loader=military_order_inputs,
    )
