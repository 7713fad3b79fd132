"""Icon resolution for menu items.

Every icon path emitted to Alfred is rewritten to ``<icon_root>/<basename>``.
When that file is missing the workflow's own ``alfred.png`` is used instead,
unless the resolver runs in strict mode, where a missing icon is an error.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationInfo, field_validator

from aw_common.config.workflow import DEFAULT_ICON_DIR, WorkflowConfig
from aw_common.errors import IconNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ICON_NAME = "alfred.png"
ICON_TYPES = frozenset({"fileicon", "filetype"})
# Hyphenated spellings some producers use for the same two tags.
ICON_TYPE_ALIASES = {"file-icon": "fileicon", "file-type": "filetype"}


class IconResolver:
    """Map requested icon paths onto files shipped in the icon folder."""

    def __init__(
        self,
        icon_root: str = DEFAULT_ICON_DIR,
        *,
        strict: bool = False,
        is_file: Callable[[str], bool] = os.path.isfile,
    ) -> None:
        self.icon_root = icon_root.rstrip("/") or "/"
        self.strict = strict
        self._is_file = is_file

    @classmethod
    def from_config(cls, config: WorkflowConfig) -> "IconResolver":
        return cls(config.icon_dir, strict=config.strict_icons)

    @property
    def default_path(self) -> str:
        return os.path.join(self.icon_root, DEFAULT_ICON_NAME)

    def canonical(self, requested: Any) -> str:
        """Return ``<icon_root>/<basename>`` without touching the filesystem."""
        try:
            name = os.path.basename(requested)
        except (TypeError, ValueError) as exc:
            logger.debug("Cannot normalize icon path %r: %s", requested, exc)
            return self.default_path
        if not name:
            return self.default_path
        return os.path.join(self.icon_root, name)

    def exists(self, requested: Any) -> bool:
        return self._is_file(self.canonical(requested))

    def resolve(self, requested: Any) -> str:
        """Return a path that points at a real icon file.

        In lenient mode this never raises; in strict mode a missing file
        raises IconNotFoundError.
        """
        canonical = self.canonical(requested)
        if self._is_file(canonical):
            return canonical
        if self.strict:
            raise IconNotFoundError(
                f"Icon not found: {requested}",
                context={"requested": requested, "canonical": canonical},
            )
        logger.debug("Icon %r not found at %s; using default", requested, canonical)
        return self.default_path


def resolver_from_context(info: ValidationInfo) -> IconResolver:
    """Pick the resolver passed in the validation context, or a default one."""
    context = info.context or {}
    resolver = context.get("icons")
    if isinstance(resolver, IconResolver):
        return resolver
    return IconResolver()


class IconReference(BaseModel):
    """The ``icon`` object of a Script Filter item."""

    path: str
    type: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("type", mode="before")
    @classmethod
    def _drop_unknown_type(cls, value: Any) -> Optional[str]:
        # Unrecognised tags are stripped rather than rejected.
        if not isinstance(value, str):
            return None
        value = ICON_TYPE_ALIASES.get(value, value)
        if value in ICON_TYPES:
            return value
        return None

    @field_validator("path")
    @classmethod
    def _resolve_path(cls, value: str, info: ValidationInfo) -> str:
        return resolver_from_context(info).resolve(value)


def default_icon(resolver: Optional[IconResolver] = None) -> IconReference:
    """Icon reference for the workflow's built-in icon."""
    resolver = resolver or IconResolver()
    return IconReference.model_validate(
        {"type": "fileicon", "path": resolver.default_path},
        context={"icons": resolver},
    )
