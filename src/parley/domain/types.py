"""Value types shared by the enhancement engine and its host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Trigger:
    """Where in the composer text a candidate search applies.

    Only valid for the ``(text, caret)`` pair that produced it.
    """

    start_index: int
    """Offset of the triggering marker."""
    query: str
    """Text typed since the marker, lower-cased for matching."""
    end_index: int
    """Caret offset the trigger was detected at."""

    def __post_init__(self) -> None:
        if self.start_index < 0 or self.end_index < self.start_index:
            raise ValueError(
                f"Invalid trigger span [{self.start_index}, {self.end_index})"
            )


@dataclass(frozen=True, slots=True)
class InputChangeRequest:
    """New composer value and caret position proposed by an enhancer."""

    value: str
    cursor_pos: int


@dataclass(frozen=True, slots=True)
class MenuLabel:
    """Render hint for a single menu entry."""

    main: str
    prefix: str | None = None
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class AnchorRect:
    """Bounding box of the composer, in screen cells."""

    left: int
    top: int
    width: int
    height: int

    @property
    def bottom(self) -> int:
        return self.top + self.height


class NavigationKey(str, Enum):
    """Keys the composer forwards to the engine."""

    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ENTER = "Enter"
    ESCAPE = "Escape"

    @classmethod
    def from_textual(cls, key: str) -> NavigationKey | None:
        """Map a Textual key name (``up``, ``enter``...) to a navigation key."""
        return _TEXTUAL_KEYS.get(key)


_TEXTUAL_KEYS = {
    "up": NavigationKey.ARROW_UP,
    "down": NavigationKey.ARROW_DOWN,
    "enter": NavigationKey.ENTER,
    "escape": NavigationKey.ESCAPE,
}


class KeyOutcome(str, Enum):
    """What the engine did with a navigation key."""

    IGNORED = "ignored"
    NAVIGATED = "navigated"
    SELECTED = "selected"
    DISMISSED = "dismissed"

    @property
    def consumed(self) -> bool:
        return self is not KeyOutcome.IGNORED
