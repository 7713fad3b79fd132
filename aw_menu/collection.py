"""Assembly of producer outputs into one Script Filter collection."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from aw_common.errors import CollectionValidationError, MenuValidationError, format_locations
from aw_menu.icons import IconResolver
from aw_menu.items import MenuItem, validation_context

logger = logging.getLogger(__name__)

DUPLICATE_UID_ERROR = "duplicate_uid"


def duplicate_uids(items: Sequence[MenuItem]) -> List[str]:
    """Return every uid that occurs more than once, in first-seen order."""
    counts = Counter(item.uid for item in items)
    return [uid for uid, count in counts.items() if count > 1]


class MenuCollection(BaseModel):
    """Ordered menu items plus optional launcher-global variables."""

    items: List[MenuItem] = Field(default_factory=list)
    variables: Optional[Dict[str, str]] = None

    model_config = {"extra": "ignore"}

    @field_validator("items")
    @classmethod
    def _unique_uids(cls, items: List[MenuItem]) -> List[MenuItem]:
        duplicates = duplicate_uids(items)
        if duplicates:
            raise PydanticCustomError(
                DUPLICATE_UID_ERROR,
                "All menu item UIDs must be unique (duplicates: {duplicates})",
                {"duplicates": ", ".join(duplicates)},
            )
        return items

    def to_alfred(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {"items": [item.to_alfred() for item in self.items]}
        if self.variables is not None:
            document["variables"] = dict(self.variables)
        return document


def validate_collection(
    data: Mapping[str, Any],
    *,
    icons: Optional[IconResolver] = None,
) -> MenuCollection:
    """Validate a whole Script Filter document.

    Duplicate uids raise CollectionValidationError naming the ``items`` path;
    any other failure raises MenuValidationError.
    """
    try:
        return MenuCollection.model_validate(data, context=validation_context(icons))
    except ValidationError as exc:
        raw_errors = exc.errors()
        errors = format_locations(raw_errors)
        for entry in raw_errors:
            if entry.get("type") == DUPLICATE_UID_ERROR:
                raise CollectionValidationError(
                    entry["msg"],
                    context={
                        "path": [str(part) for part in entry["loc"]],
                        "duplicates": entry.get("ctx", {}).get("duplicates", "").split(", "),
                    },
                    cause=exc,
                ) from exc
        summary = "; ".join(f"{entry['loc']}: {entry['msg']}" for entry in errors)
        raise MenuValidationError(
            f"Invalid menu collection: {summary}",
            context={"errors": errors},
            cause=exc,
        ) from exc


def assemble(
    producers: Sequence[Sequence[MenuItem]],
    variables: Optional[Mapping[str, str]] = None,
    *,
    icons: Optional[IconResolver] = None,
) -> MenuCollection:
    """Concatenate producer outputs in the given order and check global invariants.

    Items are not modified. A duplicate uid anywhere fails the whole assembly.
    """
    items: List[MenuItem] = [item for produced in producers for item in produced]
    duplicates = duplicate_uids(items)
    if duplicates:
        logger.debug("Rejecting collection with duplicate uids: %s", duplicates)
        raise CollectionValidationError(
            f"All menu item UIDs must be unique (duplicates: {', '.join(duplicates)})",
            context={"path": ["items"], "duplicates": duplicates},
        )
    return validate_collection(
        {"items": items, "variables": dict(variables) if variables is not None else None},
        icons=icons,
    )
