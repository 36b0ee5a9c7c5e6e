"""
Command Dispatcher

Decides, for every intercepted ``execute_command`` call, whether a mixin
handles the command, whether the view model's own method runs, or whether the
call is suppressed.

``dispatch`` returns ``True`` to let the original command body run and
``False`` to suppress it. It never raises.
"""

import logging
from typing import Any, Optional, Sequence, Type

from ..core.utils import coerce_arguments, invoke_with_log, parameter_types
from .runtime import ModuleRuntime, RuntimeRegistry, get_runtime_registry

logger = logging.getLogger(__name__)


def is_native_command(instance: Any, command_name: str) -> bool:
    """Does the instance's own type declare a method named ``command_name``?"""
    return callable(getattr(type(instance), command_name, None))


def _try_module(runtime: ModuleRuntime, instance: Any, command_name: str, args: Sequence[Any]) -> bool:
    """Scan one module's mixins for ``command_name``. True if a mixin handled it."""
    for record in runtime.cache.get(instance) or ():
        handler = record.index.get_command(command_name)
        if handler is None:
            continue

        types = parameter_types(handler)
        if len(types) == len(args):
            invoke_with_log(handler, *coerce_arguments(args, types))
            logger.debug(f"{runtime.module_name}: {record.mixin_type.__name__} handled '{command_name}'")
            return True

        if not types:
            invoke_with_log(handler)
            logger.debug(f"{runtime.module_name}: {record.mixin_type.__name__} handled '{command_name}' without arguments")
            return True

    return False


def dispatch(target_type: Type, instance: Any, command_name: str, args: Sequence[Any] = (),
             registry: Optional[RuntimeRegistry] = None) -> bool:
    """
    Resolve ``command_name`` across all enabled modules for one view model instance.

    Modules are consulted in registration order:
    - no mixins and no native method: stop, suppress the call
    - no mixins but a native method: next module
    - a mixin command with matching arity (or no parameters): invoke, suppress the call
    When no module handles the command, the original body runs.
    """
    if registry is None:
        registry = get_runtime_registry()
    is_native = is_native_command(instance, command_name)

    for runtime in registry.all():
        if not runtime.enabled:
            continue

        has_mixins = runtime.cache.has(instance)

        if not is_native and not has_mixins:
            return False  # stop original command execution
        if is_native and not has_mixins:
            continue  # skip to next runtime

        if _try_module(runtime, instance, command_name, args):
            return False

    # continue original execution
    return True
