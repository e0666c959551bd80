"""Event types published by the composer and its enhancement engine.

The host subscribes to these to keep its widgets (menu, toolbar, transcript)
in sync without reaching into engine internals.
"""

import time
from dataclasses import dataclass, field

from parley.domain.types import Trigger


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class EnhancerActivated(Event):
    """Published when an enhancer opens its menu (Idle -> Active).

    Attributes:
        enhancer_id: Id of the enhancer that matched
        trigger: Trigger that produced the candidates
        item_count: Number of candidates offered
    """

    enhancer_id: str
    trigger: Trigger
    item_count: int


@dataclass
class EnhancerDismissed(Event):
    """Published when an open menu closes.

    Attributes:
        enhancer_id: Id of the enhancer that was active
        reason: One of "selected", "escape", "caret_moved", "no_match", "replaced"
    """

    enhancer_id: str
    reason: str


@dataclass
class ValueCommitted(Event):
    """Published when the engine hands a new value to the composer.

    Attributes:
        value: New composer text
        cursor_pos: New caret offset (already clamped into ``value``)
        enhancer_id: Enhancer that produced the change
        source: "selection" for menu picks, "button" for toolbar actions
    """

    value: str
    cursor_pos: int
    enhancer_id: str
    source: str = "selection"


@dataclass
class EnhancersReplaced(Event):
    """Published when the host swaps the enhancer set."""

    enhancer_ids: tuple[str, ...]


@dataclass
class MessageSent(Event):
    """Published when the composer sends a message.

    Attributes:
        text: Message text as typed
        mode_label: Label of the restricted input mode, if one was active
    """

    text: str
    mode_label: str | None = None
