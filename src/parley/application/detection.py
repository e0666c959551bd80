"""
Trigger detection helpers shared by the built-in enhancers.

Detection is a pure function of ``(text, caret)``: nothing is remembered
between calls, so every enhancer can be probed on every keystroke.
"""

from __future__ import annotations

from parley.domain.types import Trigger


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def find_marker_trigger(
    text: str,
    caret: int,
    marker: str,
    *,
    anchored: bool = False,
    word_only: bool = False,
) -> Trigger | None:
    """
    Scan backward from ``caret`` for ``marker``.

    Args:
        text: Current composer text
        caret: Caret offset into ``text``
        marker: Single character opening the trigger region (``/``, ``@``)
        anchored: Only accept a marker at offset 0
        word_only: Only accept word characters between marker and caret

    Returns:
        Trigger spanning marker..caret, or ``None`` when the caret is not
        inside an open marker region.
    """
    if len(marker) != 1:
        raise ValueError(f"Marker must be a single character, got {marker!r}")
    if caret < 0 or caret > len(text):
        return None

    index = caret - 1
    while index >= 0:
        ch = text[index]
        if ch == marker:
            break
        if ch.isspace():
            return None
        if word_only and not _is_word_char(ch):
            return None
        index -= 1
    else:
        return None

    if anchored and index != 0:
        return None

    query = text[index + 1 : caret]
    return Trigger(start_index=index, query=query.lower(), end_index=caret)
