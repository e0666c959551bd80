"""Presentation layer: menu projection and the Textual host."""

from .menu import MenuAdapter, MenuEntry, MenuView, scroll_into_view

__all__ = ["MenuAdapter", "MenuEntry", "MenuView", "scroll_into_view"]
