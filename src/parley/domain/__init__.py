"""Domain types and contracts for the input enhancement engine."""

from .protocols import EnhancerButton, InputEnhancer
from .types import (
    AnchorRect,
    InputChangeRequest,
    KeyOutcome,
    MenuLabel,
    NavigationKey,
    Trigger,
)

__all__ = [
    "AnchorRect",
    "EnhancerButton",
    "InputChangeRequest",
    "InputEnhancer",
    "KeyOutcome",
    "MenuLabel",
    "NavigationKey",
    "Trigger",
]
