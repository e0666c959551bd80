"""Textual widgets hosting the composer and its enhancer menu."""

from .chat_panel import ChatPanel
from .composer_input import ComposerInput
from .enhancer_menu import EnhancerMenu
from .enhancer_toolbar import EnhancerToolbar

__all__ = [
    "ChatPanel",
    "ComposerInput",
    "EnhancerMenu",
    "EnhancerToolbar",
]
