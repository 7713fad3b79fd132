"""Menu items built directly from links and shell command fragments."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from aw_common.errors import MenuValidationError
from aw_menu.icons import IconResolver
from aw_menu.items import MenuItem, MenuItemType, validate_menu_item

URL_ICON = "url.png"
COMMAND_ICON = "command.png"


def validate_https_url(link: str) -> str:
    """Accept only absolute https URLs."""
    parsed = urlparse(link.strip())
    if parsed.scheme != "https" or not parsed.netloc:
        raise MenuValidationError(
            "Only HTTPS URLs are allowed",
            context={
                "errors": [{"loc": "url", "msg": "Only HTTPS URLs are allowed", "type": "url_scheme"}],
                "url": link,
            },
        )
    return link.strip()


def menu_item_from_link(
    link: str,
    text: Optional[str] = None,
    icon_path: Optional[str] = None,
    *,
    icons: Optional[IconResolver] = None,
) -> MenuItem:
    url = validate_https_url(link)
    return validate_menu_item(
        {
            "uid": url,
            "type": MenuItemType.FILE,
            "title": text or url,
            "arg": url,
            "autocomplete": url if not text else f"{text} {url}",
            "icon": {"type": "fileicon", "path": icon_path or URL_ICON},
        },
        icons=icons,
    )


def menu_item_from_command_fragment(
    cmd: str,
    *,
    icons: Optional[IconResolver] = None,
) -> MenuItem:
    return validate_menu_item(
        {
            "uid": cmd,
            "type": MenuItemType.DEFAULT,
            "title": cmd,
            "arg": cmd,
            "autocomplete": cmd,
            "icon": {"type": "fileicon", "path": COMMAND_ICON},
        },
        icons=icons,
    )
