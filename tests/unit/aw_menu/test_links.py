"""Tests for link and command-fragment menu items."""

from __future__ import annotations

import pytest

from aw_common.errors import MenuValidationError
from aw_menu.icons import IconResolver
from aw_menu.links import menu_item_from_command_fragment, menu_item_from_link, validate_https_url


pytestmark = pytest.mark.unit_menu


def test_https_link_becomes_file_item(icons: IconResolver) -> None:
    item = menu_item_from_link("https://example.com/docs", "Docs", icons=icons)
    assert item.uid == "https://example.com/docs"
    assert item.type == "file"
    assert item.title == "Docs"
    assert item.arg == "https://example.com/docs"
    assert item.autocomplete == "Docs https://example.com/docs"
    assert item.icon.type == "fileicon"
    assert item.icon.path.endswith("url.png")


def test_link_without_text_uses_url(icons: IconResolver) -> None:
    item = menu_item_from_link("  https://example.com  ", icons=icons)
    assert item.title == "https://example.com"
    assert item.autocomplete == "https://example.com"


@pytest.mark.parametrize("link", ["http://example.com", "ftp://example.com", "example.com", "https://"])
def test_non_https_links_rejected(link: str) -> None:
    with pytest.raises(MenuValidationError) as excinfo:
        validate_https_url(link)
    assert excinfo.value.paths == ["url"]


def test_command_fragment(icons: IconResolver) -> None:
    item = menu_item_from_command_fragment("ls -la", icons=icons)
    assert item.uid == item.title == item.arg == item.autocomplete == "ls -la"
    assert item.type == "default"
    assert item.icon.path.endswith("command.png")
