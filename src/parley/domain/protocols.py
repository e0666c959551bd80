"""Enhancer protocol.

An enhancer bundles one trigger pattern with its completion behaviour
(slash commands, @-mentions...). The engine never inspects candidate items;
it only hands them back to the enhancer that produced them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar

from .types import InputChangeRequest, MenuLabel, Trigger

__all__ = ["EnhancerButton", "InputEnhancer", "T"]

T = TypeVar("T")

ButtonAction = Callable[[str, int], InputChangeRequest]


@dataclass(frozen=True, slots=True)
class EnhancerButton:
    """Toolbar button associated with an enhancer."""

    icon: str
    active_title: str
    inactive_title: str
    action: ButtonAction

    def title(self, is_active: bool) -> str:
        return self.active_title if is_active else self.inactive_title


class InputEnhancer(Protocol[T]):
    """Contract implemented by every enhancer.

    All methods must be synchronous and free of side effects: the engine
    probes every registered enhancer on each keystroke.
    """

    id: str
    button: EnhancerButton | None

    def detect(self, text: str, caret: int) -> Trigger | None:
        """Return the trigger around ``caret`` or ``None`` when there is none."""

        ...

    def resolve(self, query: str) -> Sequence[T]:
        """Return the ordered candidates for ``query``."""

        ...

    def apply(self, item: T, text: str, caret: int) -> InputChangeRequest:
        """Replace the trigger span before ``caret`` with ``item``."""

        ...

    def render(self, item: T, is_selected: bool) -> MenuLabel:
        """Describe how ``item`` is shown in the menu."""

        ...

    def item_key(self, item: T, index: int) -> str:
        """Stable key for ``item`` within one candidate list."""

        ...
