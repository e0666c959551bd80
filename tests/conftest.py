"""Shared fixtures and stub enhancers for composer tests."""

from collections.abc import Sequence

import pytest

from parley.application.detection import find_marker_trigger
from parley.application.editing import replace_span
from parley.application.enhancers import SlashCommand
from parley.domain.events import Event, EventBus
from parley.domain.protocols import EnhancerButton, InputEnhancer
from parley.domain.types import InputChangeRequest, MenuLabel, Trigger


class StubEnhancer(InputEnhancer[str]):
    """Marker-based enhancer over a fixed word list, with call counters."""

    def __init__(
        self,
        enhancer_id: str,
        marker: str,
        words: Sequence[str],
        *,
        fail_detect: bool = False,
        fail_resolve: bool = False,
        fail_apply: bool = False,
        cursor_shift: int = 0,
    ) -> None:
        self.id = enhancer_id
        self.marker = marker
        self.words = list(words)
        self.fail_detect = fail_detect
        self.fail_resolve = fail_resolve
        self.fail_apply = fail_apply
        self.cursor_shift = cursor_shift
        self.detect_calls = 0
        self.resolve_calls = 0
        self.button = EnhancerButton(
            icon=marker,
            active_title=f"Remove {marker}",
            inactive_title=f"Insert {marker}",
            action=lambda text, caret: InputChangeRequest(value=f"{marker}{text}", cursor_pos=1),
        )

    def detect(self, text: str, caret: int) -> Trigger | None:
        self.detect_calls += 1
        if self.fail_detect:
            raise RuntimeError("detector exploded")
        return find_marker_trigger(text, caret, self.marker)

    def resolve(self, query: str) -> list[str]:
        self.resolve_calls += 1
        if self.fail_resolve:
            raise RuntimeError("resolver exploded")
        return [word for word in self.words if word.startswith(query)]

    def apply(self, item: str, text: str, caret: int) -> InputChangeRequest:
        if self.fail_apply:
            raise RuntimeError("applier exploded")
        trigger = self.detect(text, caret)
        start = trigger.start_index if trigger is not None else caret
        change = replace_span(text, start, caret, f"{self.marker}{item} ")
        return InputChangeRequest(value=change.value, cursor_pos=change.cursor_pos + self.cursor_shift)

    def render(self, item: str, is_selected: bool) -> MenuLabel:
        return MenuLabel(main=f"{self.marker}{item}")

    def item_key(self, item: str, index: int) -> str:
        return item


class RecordingBus(EventBus):
    """Event bus that remembers every published event."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[Event] = []

    def publish(self, event: Event) -> None:
        self.events.append(event)
        super().publish(event)

    def of_type(self, event_type: type) -> list:
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def slash_commands() -> list[SlashCommand]:
    return [
        SlashCommand(
            command="mod",
            description="Submit a question to the moderator",
            value="/mod ",
            conversation_types=("eventAssistantPlus",),
        ),
        SlashCommand(command="help", description="Show available commands", value="/help "),
        SlashCommand(command="feedback", description="Provide feedback"),
    ]


@pytest.fixture
def bus() -> RecordingBus:
    return RecordingBus()
