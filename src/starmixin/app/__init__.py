"""
StarMixin Application Layer

Module runtimes, mixin registries, instance caches, lifecycle and dispatch.
"""

from .registry import MixinRegistry
from .cache import MixinInstanceCache, MixinRecord
from .lifecycle import MixinLifecycleManager, expose_on_instance
from .runtime import ModuleRuntime, RuntimeRegistry, get_runtime_registry, set_runtime_registry
from .dispatcher import dispatch, is_native_command

__all__ = [
    "MixinRegistry",
    "MixinInstanceCache",
    "MixinRecord",
    "MixinLifecycleManager",
    "expose_on_instance",
    "ModuleRuntime",
    "RuntimeRegistry",
    "get_runtime_registry",
    "set_runtime_registry",
    "dispatch",
    "is_native_command",
]
