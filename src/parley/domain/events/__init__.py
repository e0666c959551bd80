"""Event system for engine -> host communication.

Example:
    ```python
    from parley.domain.events import EventBus, ValueCommitted

    event_bus = EventBus()
    event_bus.subscribe(ValueCommitted, lambda event: print(event.value))
    ```
"""

from .bus import EventBus
from .types import (
    EnhancerActivated,
    EnhancerDismissed,
    EnhancersReplaced,
    Event,
    MessageSent,
    ValueCommitted,
)

__all__ = [
    "EventBus",
    "Event",
    "EnhancerActivated",
    "EnhancerDismissed",
    "EnhancersReplaced",
    "MessageSent",
    "ValueCommitted",
]
