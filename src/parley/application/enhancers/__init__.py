"""
Built-in enhancers for the chat composer.
"""

from .factory import build_enhancers
from .mentions import MentionItem, MentionsEnhancer
from .slash_commands import SlashCommand, SlashCommandEnhancer

__all__ = [
    "MentionItem",
    "MentionsEnhancer",
    "SlashCommand",
    "SlashCommandEnhancer",
    "build_enhancers",
]
