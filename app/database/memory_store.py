import logging
import threading
from typing import Any, Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryStore(Generic[T]):
    """Insertion-ordered, process-local collection with a prefixed id counter.

    Entities are never removed. Id allocation and append happen under one
    lock so ids stay unique and increasing even if handlers run in threads.
    """

    def __init__(self, prefix: str, name: Optional[str] = None):
        self.prefix = prefix
        self.name = name or prefix.rstrip("_")
        self._items: List[T] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def add(self, build: Callable[[str], T]) -> T:
        """Allocate the next id, build the entity with it and append it."""
        with self._lock:
            entity_id = f"{self.prefix}{self._next_id}"
            entity = build(entity_id)
            self._items.append(entity)
            self._next_id += 1
        logger.debug(f"Stored {self.name} {entity_id}")
        return entity

    def get(self, entity_id: str) -> Optional[T]:
        for item in self._items:
            if getattr(item, "id", None) == entity_id:
                return item
        return None

    def all(self) -> List[T]:
        return list(self._items)

    def filter(self, **criteria: Any) -> List[T]:
        """Exact-match conjunctive filter; criteria with empty values are ignored."""
        active = {k: v for k, v in criteria.items() if v}
        if not active:
            return self.all()
        return [
            item for item in self._items
            if all(_attr_value(item, k) == v for k, v in active.items())
        ]

    def __len__(self) -> int:
        return len(self._items)


def _attr_value(item: Any, name: str) -> Any:
    value = getattr(item, name, None)
    # str-based enums compare by their wire value
    return getattr(value, "value", value)
