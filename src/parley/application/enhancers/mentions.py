"""
Mentions enhancer for ``@`` followed by letters.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from parley.domain.protocols import EnhancerButton, InputEnhancer
from parley.domain.types import InputChangeRequest, MenuLabel, Trigger
from parley.logger import get_logger

from ..detection import find_marker_trigger
from ..editing import replace_span

logger = get_logger("enhancer.mentions")

MENTION_MARKER = "@"


@dataclass(frozen=True, slots=True)
class MentionItem:
    pseudonym: str


def _detect_mention(text: str, caret: int) -> Trigger | None:
    return find_marker_trigger(text, caret, MENTION_MARKER, word_only=True)


def _toggle_mention(text: str, caret: int) -> InputChangeRequest:
    caret = max(0, min(caret, len(text)))
    trigger = _detect_mention(text, caret)
    if trigger is not None:
        return replace_span(text, trigger.start_index, caret, "")
    return replace_span(text, caret, caret, MENTION_MARKER)


class MentionsEnhancer(InputEnhancer[MentionItem]):
    """Completes contributor pseudonyms after ``@``."""

    id = "mentions"

    def __init__(self, contributors: Iterable[str]) -> None:
        # Keep first occurrence order, ignore blanks
        self._contributors = tuple(dict.fromkeys(name for name in contributors if name))
        self.button = EnhancerButton(
            icon=MENTION_MARKER,
            active_title="Remove @ mention",
            inactive_title="Insert @ to mention someone",
            action=_toggle_mention,
        )
        logger.debug(f"MentionsEnhancer created with {len(self._contributors)} contributor(s)")

    @property
    def contributors(self) -> tuple[str, ...]:
        return self._contributors

    def detect(self, text: str, caret: int) -> Trigger | None:
        return _detect_mention(text, caret)

    def resolve(self, query: str) -> list[MentionItem]:
        prefix = query.lower()
        return [
            MentionItem(pseudonym=name)
            for name in self._contributors
            if name.lower().startswith(prefix)
        ]

    def apply(self, item: MentionItem, text: str, caret: int) -> InputChangeRequest:
        caret = max(0, min(caret, len(text)))
        trigger = self.detect(text, caret)
        start = trigger.start_index if trigger is not None else caret
        return replace_span(text, start, caret, f"{MENTION_MARKER}{item.pseudonym} ")

    def render(self, item: MentionItem, is_selected: bool) -> MenuLabel:
        return MenuLabel(main=f"@{item.pseudonym}")

    def item_key(self, item: MentionItem, index: int) -> str:
        return item.pseudonym
