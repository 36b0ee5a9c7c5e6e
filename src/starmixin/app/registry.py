"""
Mixin Registry

Per-module map: view model type -> ordered list of mixin types.
"""

import threading
from typing import Dict, List, Tuple, Type


class MixinRegistry:
    """
    Registered mixin types of one module, keyed by the view model type they extend.

    List order is registration order and decides dispatch tie-breaking.
    Duplicates are kept; they are filtered when mixins are instantiated.
    """

    def __init__(self):
        self._mixins: Dict[Type, List[Type]] = {}
        self._lock = threading.RLock()

    def register(self, target_type: Type, mixin_type: Type) -> None:
        """Append ``mixin_type`` to the list of ``target_type``."""
        with self._lock:
            self._mixins.setdefault(target_type, []).append(mixin_type)

    def get(self, target_type: Type) -> Tuple[Type, ...]:
        """Registration-ordered snapshot of the mixin types for ``target_type``."""
        with self._lock:
            return tuple(self._mixins.get(target_type, ()))

    def target_types(self) -> Tuple[Type, ...]:
        with self._lock:
            return tuple(self._mixins)

    def __contains__(self, target_type: Type) -> bool:
        with self._lock:
            return target_type in self._mixins

    def __len__(self) -> int:
        with self._lock:
            return sum(len(types) for types in self._mixins.values())
