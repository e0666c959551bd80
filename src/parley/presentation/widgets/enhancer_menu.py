"""
EnhancerMenu - renders a MenuView as a keyboard-driven option list.

The menu floats on the screen layer at the position computed by
``MenuAdapter`` and never takes focus: the composer keeps it and forwards
navigation keys to the engine. Clicking an entry posts ``OptionList.OptionSelected``,
which the app forwards to ``MenuAdapter.select``.
"""

from __future__ import annotations

from textual.geometry import Offset
from textual.widgets import OptionList
from textual_autocomplete import DropdownItem

from parley.domain.types import MenuLabel
from parley.logger import get_logger
from parley.presentation.menu import MenuView

logger = get_logger("widgets.menu")

BORDER_ROWS = 2


def to_dropdown_item(label: MenuLabel) -> DropdownItem:
    main = f"{label.main}  {label.detail}" if label.detail else label.main
    return DropdownItem(main=main, prefix=label.prefix)


class EnhancerMenu(OptionList, can_focus=False):
    """Candidate list shown above the composer."""

    DEFAULT_CSS = """
    EnhancerMenu {
        height: auto;
        max-height: 10;
        width: auto;
        overlay: screen;
        border: round $primary;
        padding: 0 1;
    }
    EnhancerMenu.hidden {
        display: none;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._entry_keys: tuple[str, ...] = ()
        self._enhancer_id: str | None = None
        self.add_class("hidden")

    @property
    def is_showing(self) -> bool:
        return not self.has_class("hidden")

    def show_view(self, view: MenuView | None) -> None:
        """Render ``view``; ``None`` hides the menu."""
        if view is None:
            if self.is_showing:
                logger.debug("Hiding enhancer menu")
            self.clear_options()
            self._entry_keys = ()
            self._enhancer_id = None
            self.add_class("hidden")
            return

        keys = tuple(entry.key for entry in view.entries)
        if keys != self._entry_keys or view.enhancer_id != self._enhancer_id:
            self.clear_options()
            self.add_options([to_dropdown_item(entry.label) for entry in view.entries])
            self._entry_keys = keys
            self._enhancer_id = view.enhancer_id

        outer_height = len(view.visible_entries) + BORDER_ROWS
        self.styles.max_height = outer_height
        self.styles.min_width = view.min_width
        # Bottom edge sits ``view.bottom`` rows above the bottom of the screen
        top = max(0, self.screen.size.height - view.bottom - outer_height)
        self.absolute_offset = Offset(view.left, top)
        self.refresh(layout=True)

        self.highlighted = view.selected_index
        self.scroll_to(y=view.scroll_offset, animate=False)
        self.remove_class("hidden")
