"""Turn lists of custom function inputs into validated menu items.

An input is either a bare string or a ``CustomFunctionInput`` record. A bare
string behaves exactly like a record whose title is that string. The caller
supplies the function that computes each item's ``arg``; that is where a
producer decides whether the payload is a literal, an ``eval:`` shell command,
a ``terminal:`` command or a value fetched ahead of time.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from aw_common.errors import AWError, MenuValidationError, ProducerError, format_locations
from aw_menu.icons import IconResolver
from aw_menu.items import MenuItem, validate_menu_item

logger = logging.getLogger(__name__)

UID_PREFIX = "custom-function-"
MIN_ICON_PATH_LENGTH = 18


class CustomFunctionInput(BaseModel):
    """Structured input definition."""

    title: str = Field(min_length=2)
    subtitle: Optional[str] = Field(default=None, min_length=1)
    autocomplete: Optional[str] = Field(
        default=None, min_length=1, description="Extra search keywords"
    )
    arg: Optional[str] = Field(default=None, min_length=1)
    icon_path: Optional[str] = Field(
        default=None, min_length=MIN_ICON_PATH_LENGTH, alias="iconPath"
    )

    model_config = {"extra": "ignore", "populate_by_name": True}


InputItem = Union[CustomFunctionInput, str]
ArgumentFunction = Callable[[InputItem], str]
AsyncArgumentFunction = Callable[[InputItem], Union[str, Awaitable[str]]]

_INPUTS_ADAPTER: TypeAdapter[List[InputItem]] = TypeAdapter(List[InputItem])


def parse_inputs(raw: Iterable[Any]) -> List[InputItem]:
    """Validate raw definitions (strings or mappings) into input items."""
    try:
        return _INPUTS_ADAPTER.validate_python(list(raw))
    except ValidationError as exc:
        errors = format_locations(exc.errors())
        raise MenuValidationError(
            "Invalid custom function inputs",
            context={"errors": errors},
            cause=exc,
        ) from exc


def title_of(item: InputItem) -> str:
    if isinstance(item, str):
        return item
    return item.title


def subtitle_of(item: InputItem) -> str:
    if isinstance(item, str):
        return ""
    return item.subtitle or ""


def arg_of(item: InputItem) -> str:
    """Default argument function: the explicit ``arg`` or the title itself."""
    if isinstance(item, str):
        return item
    return item.arg or ""


def matching_words(text: str) -> str:
    """Collapse ``text`` into unique whitespace-separated tokens, first occurrence wins.

    >>> matching_words("smiling face face")
    'smiling face'
    """
    return " ".join(dict.fromkeys(text.split()))


class CustomFunction:
    """A producer's inputs plus the icon shared by its items."""

    def __init__(
        self,
        inputs: Sequence[Any],
        icon_path: Optional[str] = None,
        *,
        icons: Optional[IconResolver] = None,
        uid_prefix: str = UID_PREFIX,
    ) -> None:
        self.inputs: List[InputItem] = parse_inputs(inputs)
        self.icon_path = icon_path
        self.icons = icons or IconResolver()
        self.uid_prefix = uid_prefix

    def get_matching_words(self, item: InputItem, arg: Optional[str] = None) -> str:
        """Search text from title, subtitle and argument, duplicates removed."""
        if isinstance(item, str):
            return matching_words(f"{item} {arg or ''}")
        argument = item.arg if item.arg else (arg or "")
        return matching_words(f"{item.title} {item.subtitle or ''} {argument}")

    def menus(self, fn: ArgumentFunction = arg_of) -> List[MenuItem]:
        """Build one validated MenuItem per input.

        Any failure, in ``fn`` or in validation, fails the whole batch.
        """
        return [self._build(item, self._call(fn, item)) for item in self.inputs]

    async def amenus(self, fn: AsyncArgumentFunction) -> List[MenuItem]:
        """Like ``menus`` but ``fn`` may return an awaitable.

        All pending arguments are awaited together, so the whole batch has a
        single suspension point. The first failure in input order wins.
        """
        results: List[Any] = [self._call(fn, item) for item in self.inputs]
        pending = [index for index, result in enumerate(results) if inspect.isawaitable(result)]
        if pending:
            settled = await asyncio.gather(
                *(results[index] for index in pending), return_exceptions=True
            )
            for index, value in zip(pending, settled):
                if isinstance(value, AWError):
                    raise value
                if isinstance(value, Exception):
                    raise self._producer_error(self.inputs[index], value) from value
                if isinstance(value, BaseException):
                    raise value
                results[index] = value
        return [self._build(item, result) for item, result in zip(self.inputs, results)]

    def _call(self, fn: Callable[[InputItem], Any], item: InputItem) -> Any:
        try:
            return fn(item)
        except AWError:
            raise
        except Exception as exc:
            raise self._producer_error(item, exc) from exc

    def _producer_error(self, item: InputItem, exc: Exception) -> ProducerError:
        title = title_of(item)
        logger.debug("Argument function failed for %r: %s", title, exc)
        return ProducerError(
            f"Argument function failed for '{title}': {exc}",
            context={"title": title},
            cause=exc,
        )

    def _build(self, item: InputItem, arg: Any) -> MenuItem:
        title = title_of(item)
        subtitle = subtitle_of(item)
        argument = arg if isinstance(arg, str) else ""
        autocomplete = matching_words(f"{title} {subtitle} {argument}")
        keywords = autocomplete
        if isinstance(item, CustomFunctionInput) and item.autocomplete:
            keywords = matching_words(f"{autocomplete} {item.autocomplete}")
        return validate_menu_item(
            {
                "uid": f"{self.uid_prefix}{title}",
                "title": title,
                "subtitle": subtitle,
                "arg": arg,
                "autocomplete": autocomplete,
                "match": keywords,
                "icon": {"path": self._icon_for(item)},
            },
            icons=self.icons,
        )

    def _icon_for(self, item: InputItem) -> str:
        if isinstance(item, CustomFunctionInput) and item.icon_path:
            return item.icon_path
        return self.icon_path or self.icons.default_path
