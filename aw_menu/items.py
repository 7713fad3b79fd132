"""Script Filter menu item model and validation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from aw_common.errors import MenuValidationError, format_locations
from aw_menu.icons import IconReference, IconResolver

MIN_TITLE_LENGTH = 2
MIN_ARG_LENGTH = 1


class MenuItemType(str, Enum):
    DEFAULT = "default"
    FILE = "file"
    FILE_SKIPCHECK = "file:skipcheck"


class MenuItem(BaseModel):
    """A single selectable entry in an Alfred result list."""

    uid: str = Field(description="Identifier, unique within one collection")
    type: Optional[MenuItemType] = None
    title: str = Field(min_length=MIN_TITLE_LENGTH)
    subtitle: str = ""
    arg: str = Field(min_length=MIN_ARG_LENGTH, description="Payload passed to the action")
    autocomplete: str = ""
    match: Optional[str] = None
    icon: Optional[IconReference] = None

    model_config = {"extra": "ignore", "use_enum_values": True}

    def to_alfred(self) -> Dict[str, Any]:
        """Serialise using Alfred's field names, omitting unset optionals."""
        return self.model_dump(mode="json", exclude_none=True)


def validation_context(icons: Optional[IconResolver]) -> Dict[str, Any]:
    return {"icons": icons} if icons is not None else {}


def validate_menu_item(
    candidate: Union[Mapping[str, Any], MenuItem],
    *,
    icons: Optional[IconResolver] = None,
) -> MenuItem:
    """Validate raw fields (or re-validate an item) into a MenuItem.

    Raises MenuValidationError with dotted field paths on failure.
    """
    data = candidate.to_alfred() if isinstance(candidate, MenuItem) else candidate
    try:
        return MenuItem.model_validate(data, context=validation_context(icons))
    except ValidationError as exc:
        errors = format_locations(exc.errors())
        summary = "; ".join(f"{entry['loc']}: {entry['msg']}" for entry in errors)
        raise MenuValidationError(
            f"Invalid menu item: {summary}",
            context={"errors": errors, "uid": _uid_of(data)},
            cause=exc,
        ) from exc


def _uid_of(data: Any) -> Optional[str]:
    if isinstance(data, Mapping):
        uid = data.get("uid")
        return uid if isinstance(uid, str) else None
    return None
