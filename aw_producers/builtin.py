"""Built-in producers shipped with the workflow, in their default menu order."""

from __future__ import annotations

from typing import List

from aw_menu.custom_function import InputItem, arg_of
from aw_menu.links import validate_https_url
from aw_producers.base import MenuProducer, StaticProducer
from aw_producers.github import GitHubProducer
from aw_producers.snippets import lorem_producer, military_orders_producer


def https_arg(item: InputItem) -> str:
    """Argument policy for link producers: the arg must be an https URL."""
    return validate_https_url(arg_of(item))


def builtin_producers() -> List[MenuProducer]:
    return [
        StaticProducer(
            "commands",
            "commands.yml",
            "bash.png",
            description="Shell commands run through eval: or terminal:",
        ),
        StaticProducer(
            "emojis",
            "emojis.yml",
            "emoji.png",
            description="Emoji picker filtered by the typed query",
            filter_by_query=True,
        ),
        StaticProducer("mermaid", "mermaid.yml", "mermaid.png", description="Mermaid shapes"),
        StaticProducer(
            "notion",
            "notion.yml",
            "notion.png",
            description="Bookmarked Notion pages",
            argument=https_arg,
        ),
        StaticProducer("unicode", "unicode.yml", "unicode.png", description="Unicode symbols"),
        military_orders_producer(),
        lorem_producer(),
        GitHubProducer(),
    ]
