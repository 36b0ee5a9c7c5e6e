"""
Module Runtimes

A ``ModuleRuntime`` holds everything one extension module owns: the enabled
flag, its mixin registry, its instance cache and its lifecycle manager.
The ``RuntimeRegistry`` is the process-wide, registration-ordered map of
module name -> runtime that the interception layer routes through.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Type

from ..config import get_config
from .cache import MixinInstanceCache
from .lifecycle import MixinLifecycleManager, PropertyExposer
from .registry import MixinRegistry

logger = logging.getLogger(__name__)


class ModuleRuntime:
    """State of one registered extension module."""

    def __init__(self, module_name: str, property_exposer: Optional[PropertyExposer] = None):
        self.module_name = module_name
        self.enabled = False
        self.registry = MixinRegistry()
        self.cache = MixinInstanceCache()
        self.lifecycle = MixinLifecycleManager(module_name, self.registry, self.cache, property_exposer)

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def _accepts_lifecycle(self) -> bool:
        return self.enabled or not get_config().lifecycle.require_enabled

    def construct(self, target_type: Type, instance: Any) -> None:
        if self._accepts_lifecycle():
            self.lifecycle.on_construct(target_type, instance)

    def refresh(self, instance: Any) -> None:
        if self._accepts_lifecycle():
            self.lifecycle.on_refresh(instance)

    def teardown(self, instance: Any) -> None:
        # Finalization always reaches mixins that were created
        self.lifecycle.on_teardown(instance)

    def __repr__(self):
        state = "enabled" if self.enabled else "disabled"
        return f"ModuleRuntime({self.module_name!r}, {state})"


class RuntimeRegistry:
    """Process-wide map of module name -> ``ModuleRuntime``, in registration order."""

    def __init__(self):
        self._runtimes: Dict[str, ModuleRuntime] = {}
        self._lock = threading.RLock()

    def register(self, module_name: str, property_exposer: Optional[PropertyExposer] = None) -> Optional[ModuleRuntime]:
        """Create the runtime of a module. Returns ``None`` if the name is taken."""
        with self._lock:
            if module_name in self._runtimes:
                return None
            runtime = ModuleRuntime(module_name, property_exposer)
            self._runtimes[module_name] = runtime
        logger.info(f"Registered module runtime {module_name}")
        return runtime

    def get(self, module_name: str) -> Optional[ModuleRuntime]:
        with self._lock:
            return self._runtimes.get(module_name)

    def all(self) -> List[ModuleRuntime]:
        """Snapshot of all runtimes in registration order."""
        with self._lock:
            return list(self._runtimes.values())

    def enabled(self) -> List[ModuleRuntime]:
        return [runtime for runtime in self.all() if runtime.enabled]

    def __contains__(self, module_name: str) -> bool:
        with self._lock:
            return module_name in self._runtimes

    def __len__(self) -> int:
        with self._lock:
            return len(self._runtimes)


_runtime_registry = RuntimeRegistry()


def get_runtime_registry() -> RuntimeRegistry:
    """Get the process-wide runtime registry"""
    return _runtime_registry


def set_runtime_registry(registry: RuntimeRegistry) -> RuntimeRegistry:
    """Replace the process-wide runtime registry, returning the previous one"""
    global _runtime_registry
    previous = _runtime_registry
    _runtime_registry = registry
    return previous
