"""
Slash-command enhancer for ``/`` typed at the start of the composer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from parley.domain.protocols import EnhancerButton, InputEnhancer
from parley.domain.types import InputChangeRequest, MenuLabel, Trigger
from parley.logger import get_logger

from ..detection import find_marker_trigger
from ..editing import replace_span

logger = get_logger("enhancer.slash")

SLASH_MARKER = "/"


@dataclass(frozen=True, slots=True)
class SlashCommand:
    """
    Slash command configuration.

    Attributes:
        command: Command text without the slash
        description: What the command does
        value: Text inserted on selection (defaults to ``/{command} ``)
        conversation_types: Conversation types the command is offered in;
            empty means every type
    """

    command: str
    description: str
    value: str | None = None
    conversation_types: tuple[str, ...] = ()

    @property
    def insert_text(self) -> str:
        return self.value or f"/{self.command} "

    def available_for(self, conversation_type: str | None) -> bool:
        if not self.conversation_types or conversation_type is None:
            return True
        return conversation_type in self.conversation_types


def _toggle_slash(text: str, caret: int) -> InputChangeRequest:
    if text.startswith(SLASH_MARKER):
        # Drop the leading command token and the space after it
        end = 0
        while end < len(text) and not text[end].isspace():
            end += 1
        if end < len(text):
            end += 1
        return InputChangeRequest(value=text[end:], cursor_pos=0)
    return InputChangeRequest(value=f"{SLASH_MARKER}{text}", cursor_pos=1)


class SlashCommandEnhancer(InputEnhancer[SlashCommand]):
    """Offers commands while the input is ``/`` followed by a partial name."""

    id = "slash-commands"

    def __init__(
        self,
        commands: Iterable[SlashCommand],
        conversation_type: str | None = None,
    ) -> None:
        self._commands = tuple(cmd for cmd in commands if cmd.available_for(conversation_type))
        self.button = EnhancerButton(
            icon=SLASH_MARKER,
            active_title="Remove / command",
            inactive_title="Insert / to show commands",
            action=_toggle_slash,
        )
        logger.debug(
            f"SlashCommandEnhancer created with {len(self._commands)} command(s) "
            f"(conversation_type={conversation_type!r})"
        )

    @property
    def commands(self) -> tuple[SlashCommand, ...]:
        return self._commands

    def detect(self, text: str, caret: int) -> Trigger | None:
        return find_marker_trigger(text, caret, SLASH_MARKER, anchored=True)

    def resolve(self, query: str) -> list[SlashCommand]:
        prefix = query.lower()
        return [cmd for cmd in self._commands if cmd.command.lower().startswith(prefix)]

    def apply(self, item: SlashCommand, text: str, caret: int) -> InputChangeRequest:
        trigger = self.detect(text, caret)
        # Without an open trigger the command replaces everything before the caret
        start = trigger.start_index if trigger is not None else 0
        caret = max(start, min(caret, len(text)))
        return replace_span(text, start, caret, item.insert_text)

    def render(self, item: SlashCommand, is_selected: bool) -> MenuLabel:
        return MenuLabel(main=f"/{item.command}", detail=item.description)

    def item_key(self, item: SlashCommand, index: int) -> str:
        return item.command
