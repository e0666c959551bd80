"""
Active-enhancer state machine.

The engine is either Idle (``state is None``) or Active with one enhancer,
its candidates and the highlighted index. Every buffer change re-probes the
registry from scratch; keyboard navigation only acts while Active.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any, Generic, NamedTuple

from parley.domain.events import (
    EnhancerActivated,
    EnhancerDismissed,
    EnhancersReplaced,
    EventBus,
    ValueCommitted,
)
from parley.domain.protocols import InputEnhancer, T
from parley.domain.types import InputChangeRequest, KeyOutcome, NavigationKey, Trigger
from parley.logger import get_logger

from .editing import clamp_change
from .registry import EnhancerRegistry

logger = get_logger("enhancer.engine")


@dataclass(frozen=True, slots=True)
class ActiveEnhancerState(Generic[T]):
    """Open menu: the matching enhancer, its candidates and the highlight."""

    enhancer: InputEnhancer[T]
    items: tuple[T, ...]
    selected_index: int
    trigger: Trigger

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("An active enhancer needs at least one candidate")
        if not 0 <= self.selected_index < len(self.items):
            raise ValueError(
                f"selected_index {self.selected_index} outside [0, {len(self.items)})"
            )

    @property
    def selected_item(self) -> T:
        return self.items[self.selected_index]

    def with_index(self, index: int) -> ActiveEnhancerState[T]:
        return replace(self, selected_index=index)


class KeyResult(NamedTuple):
    """Outcome of a navigation key; ``change`` is set only for selections."""

    outcome: KeyOutcome
    change: InputChangeRequest | None = None

    @property
    def consumed(self) -> bool:
        return self.outcome.consumed


class EnhancerEngine:
    """Runs the registered enhancers against the composer buffer."""

    def __init__(
        self,
        enhancers: Iterable[InputEnhancer[Any]] | EnhancerRegistry = (),
        event_bus: EventBus | None = None,
    ) -> None:
        self._registry = (
            enhancers if isinstance(enhancers, EnhancerRegistry) else EnhancerRegistry(enhancers)
        )
        self._event_bus = event_bus
        self._state: ActiveEnhancerState[Any] | None = None

    @property
    def registry(self) -> EnhancerRegistry:
        return self._registry

    @property
    def state(self) -> ActiveEnhancerState[Any] | None:
        return self._state

    @property
    def is_menu_open(self) -> bool:
        """True while a candidate menu is showing; the send path must wait."""
        return self._state is not None

    def is_enhancer_active(self, enhancer_id: str) -> bool:
        return self._state is not None and self._state.enhancer.id == enhancer_id

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def update(self, text: str, caret: int) -> ActiveEnhancerState[Any] | None:
        """Re-run detection for a new ``(text, caret)`` pair.

        The first enhancer, in registry order, that detects a trigger and
        resolves a non-empty candidate list becomes active.
        """
        new_state: ActiveEnhancerState[Any] | None = None

        for enhancer in self._registry:
            try:
                trigger = enhancer.detect(text, caret)
                if trigger is None:
                    continue
                items = tuple(enhancer.resolve(trigger.query))
            except Exception:
                logger.exception(f"Enhancer {enhancer.id!r} failed during detection; skipping")
                continue

            if not items:
                logger.debug(f"Enhancer {enhancer.id!r} matched {trigger.query!r} but has no candidates")
                continue

            new_state = ActiveEnhancerState(
                enhancer=enhancer,
                items=items,
                selected_index=0,
                trigger=trigger,
            )
            logger.debug(f"Enhancer {enhancer.id!r} active with {len(items)} candidate(s)")
            break

        self._transition(new_state, reason="no_match")
        return self._state

    def move_down(self) -> int | None:
        if self._state is None:
            return None
        index = (self._state.selected_index + 1) % len(self._state.items)
        self._state = self._state.with_index(index)
        return index

    def move_up(self) -> int | None:
        if self._state is None:
            return None
        count = len(self._state.items)
        index = (self._state.selected_index - 1 + count) % count
        self._state = self._state.with_index(index)
        return index

    def select(self, text: str, caret: int, index: int | None = None) -> InputChangeRequest | None:
        """Apply the highlighted (or ``index``-th) candidate and go Idle.

        Returns the change the composer must commit, or ``None`` when nothing
        was applied.
        """
        state = self._state
        if state is None:
            return None

        if index is None:
            index = state.selected_index
        if not 0 <= index < len(state.items):
            logger.warning(f"Ignoring selection of index {index} (have {len(state.items)} items)")
            return None

        enhancer = state.enhancer
        item = state.items[index]
        try:
            change = clamp_change(enhancer.apply(item, text, caret))
        except Exception:
            logger.exception(f"Enhancer {enhancer.id!r} failed to apply selection")
            self._transition(None, reason="selected")
            return None

        self._transition(None, reason="selected")
        logger.info(f"Applied {enhancer.id!r} candidate #{index}; cursor={change.cursor_pos}")
        self._publish(
            ValueCommitted(
                value=change.value,
                cursor_pos=change.cursor_pos,
                enhancer_id=enhancer.id,
                source="selection",
            )
        )
        return change

    def dismiss(self, reason: str = "escape") -> bool:
        """Close the menu without touching the buffer."""
        if self._state is None:
            return False
        self._transition(None, reason=reason)
        return True

    def replace_enhancers(self, enhancers: Iterable[InputEnhancer[Any]] | EnhancerRegistry) -> None:
        """Swap the whole enhancer set; always returns to Idle."""
        self._registry = (
            enhancers if isinstance(enhancers, EnhancerRegistry) else EnhancerRegistry(enhancers)
        )
        self._transition(None, reason="replaced")
        logger.info(f"Enhancers replaced: {list(self._registry.ids)}")
        self._publish(EnhancersReplaced(enhancer_ids=self._registry.ids))

    def handle_key(self, key: NavigationKey, text: str, caret: int) -> KeyResult:
        """Single transition table for the navigation keys.

        Keys are only consumed while Active; an ignored Enter is free to
        reach the send path.
        """
        if self._state is None:
            return KeyResult(KeyOutcome.IGNORED)

        if key is NavigationKey.ARROW_DOWN:
            self.move_down()
            return KeyResult(KeyOutcome.NAVIGATED)
        if key is NavigationKey.ARROW_UP:
            self.move_up()
            return KeyResult(KeyOutcome.NAVIGATED)
        if key is NavigationKey.ENTER:
            return KeyResult(KeyOutcome.SELECTED, self.select(text, caret))
        if key is NavigationKey.ESCAPE:
            self.dismiss()
            return KeyResult(KeyOutcome.DISMISSED)
        return KeyResult(KeyOutcome.IGNORED)

    def press_button(self, enhancer_id: str, text: str, caret: int) -> InputChangeRequest | None:
        """Run an enhancer's toolbar action against the current buffer."""
        enhancer = self._registry.get(enhancer_id)
        if enhancer is None or enhancer.button is None:
            logger.warning(f"No toolbar action for enhancer {enhancer_id!r}")
            return None

        try:
            change = clamp_change(enhancer.button.action(text, caret))
        except Exception:
            logger.exception(f"Toolbar action of {enhancer_id!r} failed")
            return None

        self._publish(
            ValueCommitted(
                value=change.value,
                cursor_pos=change.cursor_pos,
                enhancer_id=enhancer_id,
                source="button",
            )
        )
        return change

    # ------------------------------------------------------------------

    def _transition(self, new_state: ActiveEnhancerState[Any] | None, reason: str) -> None:
        previous = self._state
        self._state = new_state

        previous_id = previous.enhancer.id if previous is not None else None
        new_id = new_state.enhancer.id if new_state is not None else None
        if previous_id == new_id:
            return

        if previous_id is not None:
            self._publish(EnhancerDismissed(enhancer_id=previous_id, reason=reason))
        if new_state is not None:
            self._publish(
                EnhancerActivated(
                    enhancer_id=new_state.enhancer.id,
                    trigger=new_state.trigger,
                    item_count=len(new_state.items),
                )
            )

    def _publish(self, event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)
