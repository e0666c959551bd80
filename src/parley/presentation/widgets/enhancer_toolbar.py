"""
EnhancerToolbar - one button per enhancer that declares a toolbar action.
"""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button

from parley.application.engine import EnhancerEngine


class EnhancerToolbar(Horizontal):
    """Row of enhancer buttons (``/``, ``@``) below the composer."""

    DEFAULT_CSS = """
    EnhancerToolbar {
        height: auto;
    }
    EnhancerToolbar Button {
        min-width: 5;
        margin-right: 1;
    }
    """

    class Pressed(Message):
        """Posted when an enhancer button is pressed."""

        def __init__(self, enhancer_id: str) -> None:
            self.enhancer_id = enhancer_id
            super().__init__()

    def __init__(self, engine: EnhancerEngine, **kwargs) -> None:
        super().__init__(**kwargs)
        self._engine = engine

    def compose(self) -> ComposeResult:
        for button in self._make_buttons():
            yield button

    def _make_buttons(self) -> list[Button]:
        buttons = []
        for enhancer in self._engine.registry:
            if enhancer.button is None:
                continue
            button = Button(enhancer.button.icon, id=f"enhancer-{enhancer.id}")
            button.tooltip = enhancer.button.title(self._engine.is_enhancer_active(enhancer.id))
            buttons.append(button)
        return buttons

    async def rebuild(self) -> None:
        """Recreate the buttons after the enhancer set changed."""
        await self.remove_children()
        await self.mount_all(self._make_buttons())

    def refresh_titles(self) -> None:
        for enhancer in self._engine.registry:
            if enhancer.button is None:
                continue
            for button in self.query(f"#enhancer-{enhancer.id}").results(Button):
                button.tooltip = enhancer.button.title(self._engine.is_enhancer_active(enhancer.id))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("enhancer-"):
            return
        event.stop()
        self.post_message(self.Pressed(button_id.removeprefix("enhancer-")))
