"""
Assemble the enhancer set for a conversation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from parley.domain.protocols import InputEnhancer

from .mentions import MentionsEnhancer
from .slash_commands import SlashCommand, SlashCommandEnhancer


def build_enhancers(
    commands: Iterable[SlashCommand] = (),
    contributors: Iterable[str] = (),
    conversation_type: str | None = None,
) -> list[InputEnhancer[Any]]:
    """
    Build the enhancers offered in a conversation, in priority order.

    Slash commands come first; each enhancer is registered only when it has
    something to offer.

    Args:
        commands: All configured slash commands
        contributors: Pseudonyms that can be mentioned
        conversation_type: Filters commands restricted to other conversation types

    Returns:
        Ordered enhancer list for an ``EnhancerEngine``
    """
    registered: list[InputEnhancer[Any]] = []

    slash = SlashCommandEnhancer(commands, conversation_type=conversation_type)
    if slash.commands:
        registered.append(slash)

    mentions = MentionsEnhancer(contributors)
    if mentions.contributors:
        registered.append(mentions)

    return registered
