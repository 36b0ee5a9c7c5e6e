"""
Mixin Instance Cache

Weak, instance-keyed store of mixin objects and their capability indexes.
An entry lives exactly as long as its view model; mixins only point back to the
view model weakly, so nothing here keeps a view model alive.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from ..core.capabilities import CapabilityIndex
from ..core.weak import WeakInstanceTable


@dataclass
class MixinRecord:
    """A mixin instance together with its capability index."""
    mixin: Any
    index: CapabilityIndex

    @property
    def mixin_type(self) -> type:
        return type(self.mixin)


class MixinInstanceCache:
    """Per-module cache: view model instance -> ordered list of ``MixinRecord``."""

    def __init__(self):
        self._records: WeakInstanceTable[List[MixinRecord]] = WeakInstanceTable()

    def get(self, instance: Any) -> Optional[List[MixinRecord]]:
        return self._records.get(instance)

    def get_or_create(self, instance: Any) -> List[MixinRecord]:
        """Raises ``TypeError`` when ``instance`` cannot be weakly referenced."""
        return self._records.get_or_add(instance, list)

    def has(self, instance: Any) -> bool:
        return instance in self._records

    def mixins(self, instance: Any) -> List[Any]:
        return [record.mixin for record in self._records.get(instance) or ()]

    def __len__(self) -> int:
        return len(self._records)
