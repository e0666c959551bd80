"""
Text splicing used by enhancer appliers.
"""

from __future__ import annotations

from parley.domain.types import InputChangeRequest, Trigger
from parley.logger import get_logger

logger = get_logger("enhancer.editing")


def replace_span(
    text: str,
    start: int,
    end: int,
    replacement: str,
    cursor_offset: int | None = None,
) -> InputChangeRequest:
    """
    Replace ``text[start:end]`` with ``replacement``.

    Args:
        text: Original text
        start: First replaced offset
        end: Offset after the last replaced character
        replacement: Inserted text
        cursor_offset: Caret position relative to ``start``; defaults to the
            end of ``replacement``

    Returns:
        The spliced value and the new caret position
    """
    if not 0 <= start <= end <= len(text):
        raise ValueError(f"Span [{start}, {end}) outside text of length {len(text)}")

    if cursor_offset is None:
        cursor_offset = len(replacement)

    value = f"{text[:start]}{replacement}{text[end:]}"
    return InputChangeRequest(value=value, cursor_pos=start + cursor_offset)


def replace_trigger(
    text: str,
    trigger: Trigger,
    replacement: str,
    cursor_offset: int | None = None,
) -> InputChangeRequest:
    """Replace the marker and query covered by ``trigger``."""
    return replace_span(text, trigger.start_index, trigger.end_index, replacement, cursor_offset)


def clamp_change(change: InputChangeRequest) -> InputChangeRequest:
    """Bound ``cursor_pos`` to ``[0, len(value)]``."""
    upper = len(change.value)
    if 0 <= change.cursor_pos <= upper:
        return change

    clamped = min(max(change.cursor_pos, 0), upper)
    logger.warning(f"Clamping cursor position {change.cursor_pos} into [0, {upper}]")
    return InputChangeRequest(value=change.value, cursor_pos=clamped)
