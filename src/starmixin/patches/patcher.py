"""
Method Patcher

Installs wrappers around methods of classes we do not own and can take them
out again. Every patch is recorded under the patcher's id so the same
(class, method) pair is never wrapped twice by one patcher.
"""

import functools
import itertools
import logging
import threading
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()

# Process-wide patch sequence, so patches from several patchers can be undone newest first
_sequence = itertools.count()

Hook = Callable[[Any], None]


class Patcher:
    """A named set of method patches, in the spirit of a Harmony instance."""

    def __init__(self, patcher_id: str):
        self.patcher_id = patcher_id
        self._patches: Dict[Tuple[type, str], Tuple[int, Any]] = {}
        self._lock = threading.RLock()
        # Methods currently running an outermost_only wrapper, per thread
        self._active = threading.local()

    def is_patched(self, cls: type, method_name: str) -> bool:
        with self._lock:
            return (cls, method_name) in self._patches

    def patched_methods(self) -> List[Tuple[int, type, str]]:
        """``(sequence, class, method name)`` of every active patch."""
        with self._lock:
            return [(seq, cls, name) for (cls, name), (seq, _) in self._patches.items()]

    def replace(self, cls: type, method_name: str, factory: Callable[[Callable], Callable]) -> bool:
        """
        Replace ``cls.method_name`` with ``factory(call_next)``.

        ``call_next(instance, *args, **kwargs)`` runs the method ``cls`` declares
        itself or, for an inherited method, the next implementation along the
        instance's MRO, looked up at call time. Patching a base class later
        is therefore still seen by subclasses patched earlier.

        Returns False when the method does not exist or is already patched by this patcher.
        """
        with self._lock:
            if (cls, method_name) in self._patches:
                return False
            original = getattr(cls, method_name, None)
            if not callable(original):
                return False

            own = cls.__dict__.get(method_name, _MISSING)
            if own is _MISSING:
                def call_next(instance, *args, **kwargs):
                    return getattr(super(cls, instance), method_name)(*args, **kwargs)
            else:
                call_next = own

            replacement = functools.wraps(original)(factory(call_next))
            self._patches[(cls, method_name)] = (next(_sequence), own)
            setattr(cls, method_name, replacement)

        logger.debug(f"{self.patcher_id}: patched {cls.__name__}.{method_name}")
        return True

    def postfix(self, cls: type, method_name: str, hook: Hook, outermost_only: bool = False) -> bool:
        """
        Run ``hook(self)`` after every call of ``cls.method_name``.

        With ``outermost_only`` the hook runs once per call even when this
        patcher also wrapped the same method on a base class.
        """
        patcher_id = self.patcher_id
        active = self._active

        def factory(call_next):
            def wrapper(instance, *args, **kwargs):
                key = (id(instance), method_name)
                calls = active.__dict__.setdefault('calls', set())
                if outermost_only and key in calls:
                    return call_next(instance, *args, **kwargs)

                if outermost_only:
                    calls.add(key)
                try:
                    result = call_next(instance, *args, **kwargs)
                finally:
                    if outermost_only:
                        calls.discard(key)

                try:
                    hook(instance)
                except Exception:
                    logger.exception(f"{patcher_id}: postfix of {type(instance).__name__}.{method_name} failed")
                return result
            return wrapper

        return self.replace(cls, method_name, factory)

    def unpatch(self, cls: type, method_name: str) -> bool:
        """Put back what ``cls.method_name`` was before this patcher replaced it."""
        with self._lock:
            entry = self._patches.pop((cls, method_name), None)
            if entry is None:
                return False
            previous = entry[1]
            if previous is _MISSING:
                delattr(cls, method_name)
            else:
                setattr(cls, method_name, previous)

        logger.debug(f"{self.patcher_id}: restored {cls.__name__}.{method_name}")
        return True

    def unpatch_all(self) -> None:
        """Restore every method this patcher replaced, newest first."""
        for _, cls, method_name in sorted(self.patched_methods(), key=lambda entry: entry[0], reverse=True):
            self.unpatch(cls, method_name)
