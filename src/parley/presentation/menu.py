"""
Menu presentation adapter.

Projects the engine's active state into a render-ready, positioned and
scrolled list. Rendering itself (Textual widgets) lives in
``parley.presentation.widgets``; this module has no UI dependency.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from parley.application.engine import ActiveEnhancerState
from parley.domain.types import AnchorRect, MenuLabel
from parley.logger import get_logger

logger = get_logger("menu.adapter")


@dataclass(frozen=True, slots=True)
class MenuEntry:
    key: str
    label: MenuLabel
    index: int
    selected: bool


@dataclass(frozen=True, slots=True)
class MenuView:
    """Everything the host needs to draw the menu."""

    enhancer_id: str
    entries: tuple[MenuEntry, ...]
    selected_index: int
    left: int
    bottom: int
    """Distance from the bottom of the viewport to the bottom of the menu."""
    height: int
    """Visible rows."""
    min_width: int
    scroll_offset: int

    @property
    def visible_entries(self) -> tuple[MenuEntry, ...]:
        return self.entries[self.scroll_offset : self.scroll_offset + self.height]

    @property
    def selected_entry(self) -> MenuEntry:
        return self.entries[self.selected_index]


def _render(enhancer: Any, item: Any, is_selected: bool) -> MenuLabel:
    try:
        return enhancer.render(item, is_selected)
    except Exception:
        logger.exception(f"Enhancer {enhancer.id!r} failed to render an item")
        return MenuLabel(main=str(item))


def _item_key(enhancer: Any, item: Any, index: int) -> str:
    try:
        return enhancer.item_key(item, index)
    except Exception:
        logger.exception(f"Enhancer {enhancer.id!r} failed to key item #{index}")
        return str(index)


def scroll_into_view(index: int, offset: int, visible: int, total: int) -> int:
    """
    Smallest scroll change that keeps ``index`` visible.

    Args:
        index: Row that must be visible
        offset: Current first visible row
        visible: Number of visible rows
        total: Total number of rows

    Returns:
        New first visible row
    """
    if visible <= 0 or total <= 0:
        return 0
    if index < offset:
        offset = index
    elif index >= offset + visible:
        offset = index - visible + 1
    return max(0, min(offset, max(0, total - visible)))


class MenuAdapter:
    """Stateful view over the engine: remembers only the scroll offset."""

    def __init__(
        self,
        on_select: Callable[[int], Any],
        max_height: int = 8,
        min_width: int = 28,
        gap: int = 0,
    ) -> None:
        self._on_select = on_select
        self.max_height = max_height
        self.min_width = min_width
        self.gap = gap
        self._scroll_offset = 0
        self._last_view: MenuView | None = None

    @property
    def last_view(self) -> MenuView | None:
        return self._last_view

    def project(
        self,
        state: ActiveEnhancerState[Any] | None,
        anchor: AnchorRect | None,
        viewport_height: int,
    ) -> MenuView | None:
        """
        Build the menu for ``state`` anchored above ``anchor``.

        Returns ``None`` when the engine is Idle, when there is no anchor,
        or when there is nothing to list.
        """
        if state is None:
            return self._reset()
        if anchor is None:
            logger.debug("Menu anchor unavailable; nothing to render")
            return self._reset()
        if not state.items:
            return self._reset()

        enhancer = state.enhancer
        previous = self._last_view
        if previous is None or previous.enhancer_id != enhancer.id:
            self._scroll_offset = 0

        entries = tuple(
            MenuEntry(
                key=_item_key(enhancer, item, index),
                label=_render(enhancer, item, index == state.selected_index),
                index=index,
                selected=index == state.selected_index,
            )
            for index, item in enumerate(state.items)
        )

        height = min(len(entries), self.max_height)
        self._scroll_offset = scroll_into_view(
            state.selected_index, self._scroll_offset, height, len(entries)
        )
        self._last_view = MenuView(
            enhancer_id=enhancer.id,
            entries=entries,
            selected_index=state.selected_index,
            left=anchor.left,
            bottom=max(0, viewport_height - anchor.top + self.gap),
            height=height,
            min_width=max(self.min_width, 0),
            scroll_offset=self._scroll_offset,
        )
        return self._last_view

    def select(self, index: int) -> Any:
        """Forward a pointer selection to the engine."""
        return self._on_select(index)

    def _reset(self) -> None:
        self._scroll_offset = 0
        self._last_view = None
        return None
