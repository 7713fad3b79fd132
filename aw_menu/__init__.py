"""Script Filter menu generation: icons, items, normalization and assembly."""

from aw_menu.collection import MenuCollection, assemble, validate_collection
from aw_menu.custom_function import CustomFunction, CustomFunctionInput, matching_words
from aw_menu.icons import IconReference, IconResolver
from aw_menu.items import MenuItem, MenuItemType, validate_menu_item
from aw_menu.output import error_document, render, render_or_error

__all__ = [
    "CustomFunction",
    "CustomFunctionInput",
    "IconReference",
    "IconResolver",
    "MenuCollection",
    "MenuItem",
    "MenuItemType",
    "assemble",
    "error_document",
    "matching_words",
    "render",
    "render_or_error",
    "validate_collection",
    "validate_menu_item",
]
