"""
Ordered registry of enhancer definitions.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from parley.domain.protocols import InputEnhancer


class EnhancerRegistry:
    """Immutable, priority-ordered set of enhancers.

    Earlier entries win when several enhancers match the same input.
    """

    __slots__ = ("_enhancers",)

    def __init__(self, enhancers: Iterable[InputEnhancer[Any]] = ()) -> None:
        ordered = tuple(enhancers)
        seen: set[str] = set()
        for enhancer in ordered:
            if enhancer.id in seen:
                raise ValueError(f"Duplicate enhancer id: {enhancer.id!r}")
            seen.add(enhancer.id)
        self._enhancers = ordered

    def __iter__(self) -> Iterator[InputEnhancer[Any]]:
        return iter(self._enhancers)

    def __len__(self) -> int:
        return len(self._enhancers)

    def __bool__(self) -> bool:
        return bool(self._enhancers)

    def __repr__(self) -> str:
        return f"EnhancerRegistry({list(self.ids)!r})"

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(enhancer.id for enhancer in self._enhancers)

    def get(self, enhancer_id: str) -> InputEnhancer[Any] | None:
        for enhancer in self._enhancers:
            if enhancer.id == enhancer_id:
                return enhancer
        return None
