"""
Input enhancement engine.

Detection, candidate resolution and selection are delegated to the
registered enhancers; :class:`EnhancerEngine` picks the first one that
matches and :class:`ComposerSession` commits its proposals.
"""

from .composer import ComposerSession, ControlledMode
from .detection import find_marker_trigger
from .editing import clamp_change, replace_span, replace_trigger
from .engine import ActiveEnhancerState, EnhancerEngine, KeyResult
from .registry import EnhancerRegistry

__all__ = [
    "ActiveEnhancerState",
    "ComposerSession",
    "ControlledMode",
    "EnhancerEngine",
    "EnhancerRegistry",
    "KeyResult",
    "clamp_change",
    "find_marker_trigger",
    "replace_span",
    "replace_trigger",
]
