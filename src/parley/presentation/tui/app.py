"""
ParleyApp - Textual host for the chat composer and its enhancer menu.
"""

from collections.abc import Iterable
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, OptionList, Static

from parley.application.composer import ComposerSession, ControlledMode
from parley.application.engine import EnhancerEngine
from parley.domain.events import EnhancersReplaced, EventBus
from parley.domain.protocols import InputEnhancer
from parley.logger import get_logger
from parley.presentation.menu import MenuAdapter
from parley.presentation.widgets import ChatPanel, ComposerInput, EnhancerMenu, EnhancerToolbar
from parley.settings import ComposerConfig

logger = get_logger("parley_tui")

MODERATOR_MODE = ControlledMode(icon="?", label="Question for the moderator")


class ParleyApp(App):
    """
    Chat transcript with an enhanced message composer.

    Layout:
    ┌─────────────────────────────┐
    │           Header            │
    ├─────────────────────────────┤
    │                             │
    │         Chat Panel          │
    │                             │
    ├─────────────────────────────┤
    │  Enhancer menu (on demand)  │
    │  Writing as <pseudonym>     │
    │  Composer                   │
    │  [/] [@]                    │
    ├─────────────────────────────┤
    │           Footer            │
    └─────────────────────────────┘
    """

    TITLE = "Parley"
    SUB_TITLE = "Event chat"

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+l", "clear_chat", "Clear Chat"),
        Binding("ctrl+o", "toggle_moderator_mode", "Ask Moderator"),
    ]

    def __init__(
        self,
        enhancers: Iterable[InputEnhancer[Any]] = (),
        config: ComposerConfig | None = None,
        event_bus: EventBus | None = None,
        moderator_mode: ControlledMode | None = MODERATOR_MODE,
    ):
        """
        Initialize the application.

        Args:
            enhancers: Enhancers in priority order
            config: Composer settings; defaults to ``ComposerConfig()``
            event_bus: Bus receiving engine and composer events
            moderator_mode: Restricted mode toggled with Ctrl+O (None disables it)
        """
        super().__init__()
        self.config = config or ComposerConfig()
        self.event_bus = event_bus or EventBus()
        self.moderator_mode = moderator_mode

        self.engine = EnhancerEngine(enhancers, event_bus=self.event_bus)
        self.session = ComposerSession(
            self.engine,
            on_send=self._on_send,
            event_bus=self.event_bus,
            detect_on_caret_move=self.config.detect_on_caret_move,
        )
        self.menu_adapter = MenuAdapter(
            on_select=self._select_candidate,
            max_height=self.config.menu_max_height,
            min_width=self.config.menu_min_width,
            gap=self.config.menu_gap,
        )
        self.sent_messages: list[str] = []

        self.event_bus.subscribe(EnhancersReplaced, self._on_enhancers_replaced)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-content"):
            yield ChatPanel(id="chat")
            yield EnhancerMenu(id="menu")
            yield Static(self._author_line(), id="author")
            yield ComposerInput(self.session, id="composer")
            yield EnhancerToolbar(self.engine, id="toolbar")
        yield Footer()

    def on_mount(self) -> None:
        logger.info("Parley TUI mounted")
        chat = self.query_one("#chat", ChatPanel)
        chat.add_panel(
            "[bold]Welcome![/]\n\n"
            "Type [cyan]/[/] at the start of a message for commands\n"
            "Type [cyan]@[/] to mention someone\n"
            "Use [cyan]Up/Down[/] and [cyan]Enter[/] to pick, [cyan]Esc[/] to dismiss",
            title="Getting Started",
            style="green",
        )
        self.query_one("#composer", ComposerInput).focus()

    # ------------------------------------------------------------------
    # Composer wiring
    # ------------------------------------------------------------------

    def on_composer_input_enhancer_state_changed(self, event: ComposerInput.EnhancerStateChanged) -> None:
        event.stop()
        self._refresh_menu()
        self.query_one("#author", Static).update(self._author_line())

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "menu":
            return
        event.stop()
        self.menu_adapter.select(event.option_index)

    def on_enhancer_toolbar_pressed(self, event: EnhancerToolbar.Pressed) -> None:
        event.stop()
        composer = self.query_one("#composer", ComposerInput)
        self.session.press_button(event.enhancer_id)
        composer.refresh_from_session()
        composer.focus()

    def _select_candidate(self, index: int) -> bool:
        composer = self.query_one("#composer", ComposerInput)
        selected = self.session.select(index)
        composer.refresh_from_session()
        composer.focus()
        return selected

    def _refresh_menu(self) -> None:
        composer = self.query_one("#composer", ComposerInput)
        view = self.menu_adapter.project(self.engine.state, composer.anchor, self.screen.size.height)
        self.query_one("#menu", EnhancerMenu).show_view(view)
        self.query_one("#toolbar", EnhancerToolbar).refresh_titles()

    def _on_send(self, text: str) -> None:
        mode = self.session.controlled_mode
        self.sent_messages.append(text)
        self.query_one("#chat", ChatPanel).add_user_message(
            self.config.pseudonym, text, mode.label if mode else None
        )

    def _author_line(self) -> str:
        line = f"WRITING AS {self.config.pseudonym.upper()}"
        mode = self.session.controlled_mode
        if mode is not None:
            line += f" • {mode.icon} {mode.label}"
        return line

    def _on_enhancers_replaced(self, event: EnhancersReplaced) -> None:
        if self.is_running:
            self.call_later(self._rebuild_toolbar)

    async def _rebuild_toolbar(self) -> None:
        await self.query_one("#toolbar", EnhancerToolbar).rebuild()
        self._refresh_menu()

    # ------------------------------------------------------------------
    # Host API
    # ------------------------------------------------------------------

    def set_enhancers(self, enhancers: Iterable[InputEnhancer[Any]]) -> None:
        """Replace the regular enhancer set; any open menu closes."""
        self.session.replace_enhancers(enhancers)
        self._refresh_menu()

    def set_waiting_for_response(self, waiting: bool) -> None:
        self.session.waiting_for_response = waiting

    def action_toggle_moderator_mode(self) -> None:
        if self.moderator_mode is None:
            return
        if self.session.controlled_mode is not None:
            self.session.exit_controlled_mode()
        else:
            self.session.enter_controlled_mode(self.moderator_mode)
        composer = self.query_one("#composer", ComposerInput)
        composer.refresh_from_session()
        composer.focus()

    def action_clear_chat(self) -> None:
        """Clear the chat panel (Ctrl+L)."""
        chat = self.query_one("#chat", ChatPanel)
        chat.clear_chat()
        chat.add_panel("Chat history cleared", style="dim")
