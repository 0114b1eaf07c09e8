"""Result variants of the combined topological sort / SCC query."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import Any, NoReturn

from ._errors import CycleError


@dataclass(frozen=True, slots=True)
class Sorted[T: Hashable]:
    """The graph is acyclic; `order` lists every vertex exactly once."""

    order: list[T] = field(default_factory=list)

    # Results hold lists, so they compare by value but are not hashable
    __hash__ = None  # type: ignore[assignment]

    @property
    def is_sorted(self) -> bool:
        return True

    def unwrap(self) -> list[T]:
        """Return the topological order."""
        return self.order

    def map[U: Hashable](self, f: Callable[[T], U]) -> Sorted[U]:
        """Translate every vertex with `f`, keeping the order."""
        return Sorted([f(vertex) for vertex in self.order])

    def to_dict(self) -> dict[str, Any]:
        return {"status": "sorted", "order": list(self.order)}


@dataclass(frozen=True, slots=True)
class Cycles[T: Hashable]:
    """The graph has cycles; `components` lists its cyclic components.

    Each component has two or more members, or a single member with a
    self-loop. Components appear in discovery order.
    """

    components: list[list[T]] = field(default_factory=list)

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_sorted(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise `CycleError` carrying the cyclic components."""
        raise CycleError(self.components)

    def map[U: Hashable](self, f: Callable[[T], U]) -> Cycles[U]:
        """Translate every member with `f`, keeping component and member order."""
        return Cycles([[f(vertex) for vertex in component] for component in self.components])

    def to_dict(self) -> dict[str, Any]:
        return {"status": "cyclic", "components": [list(component) for component in self.components]}


type ToposortResult[T: Hashable] = Sorted[T] | Cycles[T]
