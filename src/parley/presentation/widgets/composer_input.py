"""
ComposerInput - single-line message field driven by a ComposerSession.

The widget mirrors its value and cursor into the session after every edit
and gives the session first refusal on Up, Down, Enter and Escape. When the
session commits a change (selection, toolbar action, send) the widget copies
the session buffer back.
"""

from textual import events
from textual.message import Message
from textual.widgets import Input
from textual.widgets.input import Selection

from parley.application.composer import ComposerSession
from parley.domain.types import AnchorRect, NavigationKey
from parley.logger import get_logger

logger = get_logger("widgets.composer")


class ComposerInput(Input):
    """Message composer that forwards navigation keys to the enhancer engine."""

    BORDER_TITLE = "Message"

    class EnhancerStateChanged(Message):
        """Posted after anything that may have opened, moved or closed the menu."""

    def __init__(self, session: ComposerSession, **kwargs):
        """
        Initialize the composer.

        Args:
            session: Session owning the message buffer
        """
        kwargs.setdefault("placeholder", "Write a comment (/ for commands, @ to mention)")
        super().__init__(**kwargs)
        self.session = session

    @property
    def anchor(self) -> AnchorRect | None:
        """Screen rectangle of the composer, or ``None`` before layout."""
        if not self.is_mounted:
            return None
        region = self.region
        if region.width == 0 or region.height == 0:
            return None
        return AnchorRect(left=region.x, top=region.y, width=region.width, height=region.height)

    async def _on_key(self, event: events.Key) -> None:
        key = NavigationKey.from_textual(event.key)
        if key is None:
            await super()._on_key(event)
            return

        self.sync_session()
        handled = self.session.press_key(key)
        logger.debug(f"Key {key.value} handled={handled}")

        # Enter never falls through to Input's submit binding: the session
        # already decided between selecting and sending
        if handled or key is NavigationKey.ENTER:
            event.stop()
            event.prevent_default()
            self.refresh_from_session()
            return

        await super()._on_key(event)

    def watch_selection(self, selection: Selection) -> None:
        # Edits are synced from Input.Changed once the value has settled
        if self.value != self.session.text or self.cursor_position == self.session.caret:
            return
        self.session.move_caret(self.cursor_position)
        self.post_message(self.EnhancerStateChanged())

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is self:
            self.sync_session()

    def sync_session(self) -> None:
        """Copy the widget's value and cursor into the session."""
        self.session.set_buffer(self.value, self.cursor_position)
        self.post_message(self.EnhancerStateChanged())

    def refresh_from_session(self) -> None:
        """Copy the session buffer into the widget."""
        if self.value != self.session.text:
            self.value = self.session.text
        self.cursor_position = self.session.caret
        self.post_message(self.EnhancerStateChanged())
