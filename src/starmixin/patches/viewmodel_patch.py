"""
View Model Patches

The interception side of the mixin system:

- ``ViewModelPatch`` gates the host's ``execute_command`` with ``dispatch``.
  Installed once per process.
- ``ViewModelWithMixinPatch`` hooks the constructor, finalizer and optional
  refresh method of every view model type a module extends. One patcher per
  module, so modules stack their hooks in registration order.

Hooks resolve the module runtime by name when they fire.
"""

import logging
from typing import Any, Callable, Dict, Optional, Type

from ..app.dispatcher import dispatch
from ..app.runtime import ModuleRuntime, get_runtime_registry
from ..core.viewmodel import ViewModel
from .patcher import Patcher

logger = logging.getLogger(__name__)

FINALIZE_METHOD_NAME = 'on_finalize'
COMMAND_METHOD_NAME = 'execute_command'

_dispatch_patcher = Patcher("starmixin")
_module_patchers: Dict[str, Patcher] = {}


def get_module_patcher(module_name: str) -> Patcher:
    patcher = _module_patchers.get(module_name)
    if patcher is None:
        patcher = _module_patchers.setdefault(module_name, Patcher(f"starmixin.viewmodels.{module_name}"))
    return patcher


def _runtime_hook(module_name: str, call: Callable[[ModuleRuntime, Any], None]) -> Callable[[Any], None]:
    def hook(instance):
        runtime = get_runtime_registry().get(module_name)
        if runtime is not None:
            call(runtime, instance)
    return hook


class ViewModelPatch:
    """Gate the command entry point of the host view model with ``dispatch``."""

    @staticmethod
    def patch(host_type: Type = ViewModel, method_name: str = COMMAND_METHOD_NAME) -> bool:
        def factory(original):
            def execute_command(self, command_name: str, *args: Any) -> Any:
                try:
                    proceed = dispatch(type(self), self, command_name, args)
                except Exception:
                    logger.exception(f"Dispatch of '{command_name}' failed, running the original command")
                    proceed = True
                if not proceed:
                    return None
                return original(self, command_name, *args)
            return execute_command

        return _dispatch_patcher.replace(host_type, method_name, factory)

    @staticmethod
    def is_patched(host_type: Type = ViewModel, method_name: str = COMMAND_METHOD_NAME) -> bool:
        return _dispatch_patcher.is_patched(host_type, method_name)


class ViewModelWithMixinPatch:
    """Hook constructor, finalizer and refresh of a view model type for one module."""

    @staticmethod
    def patch(module_name: str, target_type: Type, refresh_method_name: Optional[str] = None) -> None:
        patcher = get_module_patcher(module_name)

        patcher.postfix(target_type, '__init__',
                        _runtime_hook(module_name, lambda runtime, instance: runtime.construct(target_type, instance)))
        patcher.postfix(target_type, FINALIZE_METHOD_NAME,
                        _runtime_hook(module_name, lambda runtime, instance: runtime.teardown(instance)),
                        outermost_only=True)

        # A refresh method the type does not have is skipped without a diagnostic
        if refresh_method_name:
            patcher.postfix(target_type, refresh_method_name,
                            _runtime_hook(module_name, lambda runtime, instance: runtime.refresh(instance)),
                            outermost_only=True)


def unpatch_all() -> None:
    """Remove every patch installed by this package, newest first across all patchers."""
    entries = [
        (seq, patcher, cls, method_name)
        for patcher in [_dispatch_patcher, *_module_patchers.values()]
        for seq, cls, method_name in patcher.patched_methods()
    ]
    for _, patcher, cls, method_name in sorted(entries, key=lambda entry: entry[0], reverse=True):
        patcher.unpatch(cls, method_name)
    _module_patchers.clear()
