import pytest

from parley.application.enhancers import MentionItem, MentionsEnhancer
from parley.domain.types import InputChangeRequest, MenuLabel


@pytest.fixture
def enhancer() -> MentionsEnhancer:
    return MentionsEnhancer(["Event Assistant", "Alice", "Bob", "alice", "", "Bob"])


def test_contributors_are_deduplicated_in_order(enhancer: MentionsEnhancer) -> None:
    assert enhancer.contributors == ("Event Assistant", "Alice", "Bob", "alice")


@pytest.mark.parametrize(
    "text,caret,start,query",
    [
        ("@", 1, 0, ""),
        ("hi @Al", 6, 3, "al"),
        ("hi @al there", 6, 3, "al"),
        ("@bob_2", 6, 0, "bob_2"),
    ],
)
def test_detects_mentions_anywhere(
    enhancer: MentionsEnhancer, text: str, caret: int, start: int, query: str
) -> None:
    trigger = enhancer.detect(text, caret)

    assert trigger is not None
    assert (trigger.start_index, trigger.query, trigger.end_index) == (start, query, caret)


@pytest.mark.parametrize(
    "text,caret",
    [
        ("hi @al there", 12),
        ("mail me@", 7),
        ("@al.b", 5),
        ("plain", 5),
    ],
)
def test_no_mention_trigger(enhancer: MentionsEnhancer, text: str, caret: int) -> None:
    assert enhancer.detect(text, caret) is None


def test_resolve_matches_prefix(enhancer: MentionsEnhancer) -> None:
    names = [item.pseudonym for item in enhancer.resolve("al")]

    assert names == ["Alice", "alice"]
    assert [item.pseudonym for item in enhancer.resolve("ev")] == ["Event Assistant"]
    assert enhancer.resolve("x") == []


def test_apply_replaces_partial_mention(enhancer: MentionsEnhancer) -> None:
    change = enhancer.apply(MentionItem("Alice"), "thanks @al!", 10)

    assert change == InputChangeRequest(value="thanks @Alice !", cursor_pos=14)


def test_apply_without_trigger_inserts_at_caret(enhancer: MentionsEnhancer) -> None:
    change = enhancer.apply(MentionItem("Bob"), "hi ", 3)

    assert change == InputChangeRequest(value="hi @Bob ", cursor_pos=8)


def test_render(enhancer: MentionsEnhancer) -> None:
    assert enhancer.render(MentionItem("Bob"), False) == MenuLabel(main="@Bob")
    assert enhancer.item_key(MentionItem("Bob"), 0) == "Bob"


@pytest.mark.parametrize(
    "text,caret,expected",
    [
        ("hi ", 3, InputChangeRequest(value="hi @", cursor_pos=4)),
        ("hi @bo", 6, InputChangeRequest(value="hi ", cursor_pos=3)),
        ("", 0, InputChangeRequest(value="@", cursor_pos=1)),
    ],
)
def test_button_toggles_marker(enhancer: MentionsEnhancer, text: str, caret: int, expected) -> None:
    assert enhancer.button.action(text, caret) == expected
