"""
Weak Instance Table

An identity-keyed side table that never keeps its keys alive. Unlike
``weakref.WeakKeyDictionary`` it does not hash or compare keys, so it works for
objects with value equality and no ``__hash__`` (pydantic models, for one).
Entries disappear when the key object is collected.
"""

import weakref
from typing import Any, Callable, Dict, Generic, Iterator, Optional, Tuple, TypeVar

V = TypeVar('V')


class WeakInstanceTable(Generic[V]):
    """Map object identity -> value, dropping entries as their keys are collected."""

    def __init__(self):
        self._entries: Dict[int, Tuple[weakref.ref, V]] = {}

    def _make_remover(self, key: int) -> Callable[[weakref.ref], None]:
        table_ref = weakref.ref(self)

        def remove(ref: weakref.ref) -> None:
            table = table_ref()
            if table is None:
                return
            entry = table._entries.get(key)
            # The id may already belong to a newer object with its own entry
            if entry is not None and entry[0] is ref:
                del table._entries[key]

        return remove

    def get(self, instance: Any, default: Optional[V] = None) -> Optional[V]:
        entry = self._entries.get(id(instance))
        if entry is None or entry[0]() is not instance:
            return default
        return entry[1]

    def set(self, instance: Any, value: V) -> None:
        """Store a value for an instance. Raises ``TypeError`` if it cannot be weakly referenced."""
        key = id(instance)
        ref = weakref.ref(instance, self._make_remover(key))
        self._entries[key] = (ref, value)

    def get_or_add(self, instance: Any, factory: Callable[[], V]) -> V:
        entry = self._entries.get(id(instance))
        if entry is not None and entry[0]() is instance:
            return entry[1]
        value = factory()
        self.set(instance, value)
        return value

    def pop(self, instance: Any, default: Optional[V] = None) -> Optional[V]:
        key = id(instance)
        entry = self._entries.get(key)
        if entry is None or entry[0]() is not instance:
            return default
        del self._entries[key]
        return entry[1]

    def __contains__(self, instance: Any) -> bool:
        entry = self._entries.get(id(instance))
        return entry is not None and entry[0]() is instance

    def __len__(self) -> int:
        return sum(1 for ref, _ in list(self._entries.values()) if ref() is not None)

    def values(self) -> Iterator[V]:
        for ref, value in list(self._entries.values()):
            if ref() is not None:
                yield value

    def clear(self) -> None:
        self._entries.clear()
