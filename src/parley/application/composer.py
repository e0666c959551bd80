"""
Composer session: owner of the message buffer.

The session is the only writer of ``(text, caret)``. User edits arrive
through :meth:`ComposerSession.set_buffer`; engine proposals arrive as
:class:`InputChangeRequest` values and are committed atomically. Enter is
offered to the engine first and reaches the send path only when the engine
ignores it, so one keypress can never both select and send.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from parley.domain.events import EventBus, MessageSent
from parley.domain.protocols import InputEnhancer
from parley.domain.types import InputChangeRequest, NavigationKey
from parley.logger import get_logger

from .editing import clamp_change
from .engine import EnhancerEngine, KeyResult
from .registry import EnhancerRegistry

logger = get_logger("composer")


@dataclass(frozen=True, slots=True)
class ControlledMode:
    """
    Restricted input mode (e.g. submitting a question to the moderator).

    Attributes:
        icon: Short marker shown next to the author line
        label: Human readable mode name
        enhancers: Enhancer set used while the mode is active; ``None`` keeps
            the regular set
    """

    icon: str
    label: str
    enhancers: tuple[InputEnhancer[Any], ...] | None = None


class ComposerSession:
    """Single-line message composer wired to an :class:`EnhancerEngine`."""

    def __init__(
        self,
        engine: EnhancerEngine,
        on_send: Callable[[str], None] | None = None,
        event_bus: EventBus | None = None,
        detect_on_caret_move: bool = False,
    ) -> None:
        self.engine = engine
        self._on_send = on_send
        self._event_bus = event_bus
        self.detect_on_caret_move = detect_on_caret_move

        self._text = ""
        self._caret = 0
        self._default_registry: EnhancerRegistry = engine.registry
        self._controlled_mode: ControlledMode | None = None

        self.waiting_for_response = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def controlled_mode(self) -> ControlledMode | None:
        return self._controlled_mode

    @property
    def can_send(self) -> bool:
        return bool(self._text) and not self.waiting_for_response and not self.engine.is_menu_open

    # ------------------------------------------------------------------
    # Buffer
    # ------------------------------------------------------------------

    def set_buffer(self, text: str, caret: int | None = None) -> None:
        """Record a user edit and re-run detection.

        A caret-only move re-runs detection when ``detect_on_caret_move`` is
        set; otherwise it closes an open menu, whose trigger belongs to the
        previous caret.
        """
        caret = len(text) if caret is None else max(0, min(caret, len(text)))
        text_changed = text != self._text
        caret_changed = caret != self._caret
        self._text = text
        self._caret = caret

        if text_changed or (caret_changed and self.detect_on_caret_move):
            self.engine.update(self._text, self._caret)
        elif caret_changed and self.engine.is_menu_open:
            self.engine.dismiss(reason="caret_moved")

    def move_caret(self, caret: int) -> None:
        """Record a caret move that did not change the text."""
        self.set_buffer(self._text, caret)

    def commit(self, change: InputChangeRequest) -> None:
        """Write an engine proposal to the buffer without re-detecting."""
        change = clamp_change(change)
        self._text = change.value
        self._caret = change.cursor_pos
        logger.debug(f"Committed buffer (len={len(self._text)}, caret={self._caret})")

    def clear(self) -> None:
        self._text = ""
        self._caret = 0
        self.engine.update(self._text, self._caret)

    # ------------------------------------------------------------------
    # Keys and actions
    # ------------------------------------------------------------------

    def press_key(self, key: NavigationKey) -> bool:
        """
        Route a navigation key.

        Returns:
            True when the key was handled (menu navigation, selection,
            dismissal, sending, leaving controlled mode)
        """
        result: KeyResult = self.engine.handle_key(key, self._text, self._caret)
        if result.change is not None:
            self.commit(result.change)
        if result.consumed:
            return True

        if key is NavigationKey.ENTER:
            return self.send()
        if key is NavigationKey.ESCAPE and self._controlled_mode is not None:
            self.exit_controlled_mode()
            return True
        return False

    def select(self, index: int) -> bool:
        """Pointer selection of the ``index``-th candidate."""
        change = self.engine.select(self._text, self._caret, index=index)
        if change is None:
            return False
        self.commit(change)
        return True

    def press_button(self, enhancer_id: str) -> bool:
        """Run a toolbar action; the new buffer is re-detected like a user edit."""
        change = self.engine.press_button(enhancer_id, self._text, self._caret)
        if change is None:
            return False
        self.commit(change)
        self.engine.update(self._text, self._caret)
        return True

    def send(self) -> bool:
        """Send the buffer if allowed; clears it afterwards."""
        if not self.can_send:
            logger.debug(
                f"Send suppressed (empty={not self._text}, waiting={self.waiting_for_response}, "
                f"menu_open={self.engine.is_menu_open})"
            )
            return False

        message = self._text
        mode = self._controlled_mode
        if self._on_send is not None:
            self._on_send(message)
        if self._event_bus is not None:
            self._event_bus.publish(MessageSent(text=message, mode_label=mode.label if mode else None))
        logger.info(f"Message sent (len={len(message)}, mode={mode.label if mode else None})")
        self.clear()
        return True

    # ------------------------------------------------------------------
    # Enhancer sets and modes
    # ------------------------------------------------------------------

    def replace_enhancers(self, enhancers: Iterable[InputEnhancer[Any]] | EnhancerRegistry) -> None:
        """Install a new regular enhancer set."""
        registry = enhancers if isinstance(enhancers, EnhancerRegistry) else EnhancerRegistry(enhancers)
        self._default_registry = registry
        mode = self._controlled_mode
        if mode is None or mode.enhancers is None:
            self.engine.replace_enhancers(registry)

    def enter_controlled_mode(self, mode: ControlledMode) -> None:
        """Switch to a restricted mode; the buffer is cleared."""
        self._controlled_mode = mode
        self.engine.replace_enhancers(
            EnhancerRegistry(mode.enhancers) if mode.enhancers is not None else self._default_registry
        )
        self._text = ""
        self._caret = 0
        logger.info(f"Entered controlled mode {mode.label!r}")

    def exit_controlled_mode(self) -> None:
        if self._controlled_mode is None:
            return
        label = self._controlled_mode.label
        self._controlled_mode = None
        self.engine.replace_enhancers(self._default_registry)
        logger.info(f"Exited controlled mode {label!r}")
