from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Tuple, TypeVar

from retail_core.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class Container(Generic[T]):
    """Insertion-ordered collection with linear lookups.

    Used for the catalog (``Container[Item]``) and for cart entries
    (``Container[CartEntry]``). Reads hand out tuple snapshots so callers can
    iterate while the container is mutated.
    """

    def __init__(self) -> None:
        self._items: List[T] = []

    def add(self, item: T) -> None:
        self._items.append(item)
        logger.debug("container add: size=%d", len(self._items))

    def remove(self, item: T) -> bool:
        for i, existing in enumerate(self._items):
            if existing is item or existing == item:
                del self._items[i]
                logger.debug("container remove: size=%d", len(self._items))
                return True
        logger.debug("container remove: item not present")
        return False

    def contains(self, item: T) -> bool:
        return any(existing is item or existing == item for existing in self._items)

    def find_by(self, predicate: Callable[[T], bool]) -> T | None:
        for existing in self._items:
            if predicate(existing):
                return existing
        return None

    def all(self) -> Tuple[T, ...]:
        return tuple(self._items)

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())
