import pytest

from parley.application.detection import find_marker_trigger
from parley.domain.types import Trigger


def test_detects_marker_before_caret() -> None:
    trigger = find_marker_trigger("/m", 2, "/")

    assert trigger == Trigger(start_index=0, query="m", end_index=2)


def test_query_is_lower_cased() -> None:
    trigger = find_marker_trigger("hi @AL", 6, "@")

    assert trigger is not None
    assert trigger.start_index == 3
    assert trigger.query == "al"


def test_bare_marker_yields_empty_query() -> None:
    trigger = find_marker_trigger("/", 1, "/")

    assert trigger == Trigger(start_index=0, query="", end_index=1)


@pytest.mark.parametrize(
    ("text", "caret"),
    [
        ("hello", 5),
        ("", 0),
        ("/mod ", 5),
        ("@al bob", 7),
        ("/m", 0),
    ],
)
def test_no_open_marker_returns_none(text: str, caret: int) -> None:
    assert find_marker_trigger(text, caret, "/") is None
    assert find_marker_trigger(text, caret, "@") is None


def test_whitespace_closes_trigger() -> None:
    assert find_marker_trigger("/mod", 4, "/") is not None
    assert find_marker_trigger("/mod ", 5, "/") is None


def test_caret_inside_marker_region_uses_text_up_to_caret() -> None:
    trigger = find_marker_trigger("say @alice now", 7, "@")

    assert trigger == Trigger(start_index=4, query="al", end_index=7)


def test_anchored_requires_marker_at_start() -> None:
    assert find_marker_trigger("/he", 3, "/", anchored=True) is not None
    assert find_marker_trigger("a /he", 5, "/", anchored=True) is None
    assert find_marker_trigger("a/he", 4, "/", anchored=True) is None


def test_word_only_rejects_punctuation() -> None:
    assert find_marker_trigger("@al_b2", 6, "@", word_only=True) is not None
    assert find_marker_trigger("@al.b", 5, "@", word_only=True) is None
    assert find_marker_trigger("@al.b", 5, "@") is not None


def test_out_of_range_caret_returns_none() -> None:
    assert find_marker_trigger("/m", 3, "/") is None
    assert find_marker_trigger("/m", -1, "/") is None


def test_rejects_multi_character_marker() -> None:
    with pytest.raises(ValueError):
        find_marker_trigger("::x", 3, "::")


def test_detection_is_pure() -> None:
    first = find_marker_trigger("@bo", 3, "@")
    find_marker_trigger("unrelated", 9, "@")
    second = find_marker_trigger("@bo", 3, "@")

    assert first == second
