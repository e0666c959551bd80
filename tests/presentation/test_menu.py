import pytest

from conftest import StubEnhancer

from parley.application.engine import EnhancerEngine
from parley.domain.types import AnchorRect, MenuLabel
from parley.presentation.menu import MenuAdapter, scroll_into_view

ANCHOR = AnchorRect(left=2, top=30, width=60, height=3)


def active_engine(count: int, enhancer_id: str = "words") -> EnhancerEngine:
    engine = EnhancerEngine([StubEnhancer(enhancer_id, "#", [f"w{i}" for i in range(count)])])
    engine.update("#", 1)
    return engine


def test_idle_engine_projects_nothing() -> None:
    adapter = MenuAdapter(on_select=lambda index: None)

    assert adapter.project(None, ANCHOR, 40) is None
    assert adapter.last_view is None


def test_missing_anchor_projects_nothing() -> None:
    adapter = MenuAdapter(on_select=lambda index: None)

    assert adapter.project(active_engine(2).state, None, 40) is None


def test_view_is_positioned_above_anchor() -> None:
    adapter = MenuAdapter(on_select=lambda index: None, max_height=8, min_width=20, gap=1)

    view = adapter.project(active_engine(3).state, ANCHOR, 40)

    assert view is not None
    assert view.enhancer_id == "words"
    assert view.height == 3
    assert view.left == 2
    assert view.bottom == 40 - 30 + 1
    assert view.min_width == 20


def test_entries_are_rendered_with_selection_flag() -> None:
    engine = active_engine(3)
    engine.move_down()
    adapter = MenuAdapter(on_select=lambda index: None)

    view = adapter.project(engine.state, ANCHOR, 40)

    assert [entry.key for entry in view.entries] == ["w0", "w1", "w2"]
    assert [entry.selected for entry in view.entries] == [False, True, False]
    assert view.selected_entry.label == MenuLabel(main="#w1")


def test_long_lists_scroll_to_keep_selection_visible() -> None:
    engine = active_engine(10)
    adapter = MenuAdapter(on_select=lambda index: None, max_height=4)

    view = adapter.project(engine.state, ANCHOR, 40)
    assert (view.height, view.scroll_offset) == (4, 0)

    for _ in range(5):
        engine.move_down()
    view = adapter.project(engine.state, ANCHOR, 40)
    assert view.scroll_offset == 2
    assert view.selected_entry in view.visible_entries

    for _ in range(5):
        engine.move_up()
    view = adapter.project(engine.state, ANCHOR, 40)
    assert view.selected_index == 0
    assert view.scroll_offset == 0


def test_bottom_is_never_negative() -> None:
    adapter = MenuAdapter(on_select=lambda index: None)

    view = adapter.project(active_engine(2).state, AnchorRect(left=0, top=12, width=10, height=3), 10)

    assert view.bottom == 0


def test_failing_render_falls_back_to_item_text() -> None:
    class BrokenRender(StubEnhancer):
        def render(self, item: str, is_selected: bool) -> MenuLabel:
            raise RuntimeError("no label")

    engine = EnhancerEngine([BrokenRender("words", "#", ["alpha"])])
    engine.update("#", 1)

    view = MenuAdapter(on_select=lambda index: None).project(engine.state, ANCHOR, 40)

    assert view.entries[0].label == MenuLabel(main="alpha")


def test_failing_item_key_falls_back_to_index() -> None:
    class BrokenKey(StubEnhancer):
        def item_key(self, item: str, index: int) -> str:
            raise RuntimeError("no key")

    engine = EnhancerEngine([BrokenKey("words", "#", ["alpha", "beta"])])
    engine.update("#", 1)

    view = MenuAdapter(on_select=lambda index: None).project(engine.state, ANCHOR, 40)

    assert [entry.key for entry in view.entries] == ["0", "1"]
    assert view.entries[1].label == MenuLabel(main="#beta")


def test_select_forwards_index() -> None:
    picked: list[int] = []
    adapter = MenuAdapter(on_select=picked.append)

    adapter.select(2)

    assert picked == [2]


@pytest.mark.parametrize(
    "index,offset,visible,total,expected",
    [
        (0, 0, 4, 10, 0),
        (3, 0, 4, 10, 0),
        (4, 0, 4, 10, 1),
        (9, 0, 4, 10, 6),
        (2, 5, 4, 10, 2),
        (0, 3, 4, 2, 0),
        (0, 0, 0, 0, 0),
    ],
)
def test_scroll_into_view(index: int, offset: int, visible: int, total: int, expected: int) -> None:
    assert scroll_into_view(index, offset, visible, total) == expected
