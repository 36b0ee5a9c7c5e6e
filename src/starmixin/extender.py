"""
Extender

Module-facing entry point. Each extension module creates one ``Extender``
with a unique name, registers its mixin types and enables itself::

    extender = Extender("MyModule")
    extender.register(my_module.mixins)   # or a list of classes
    extender.enable()
"""

import inspect
import logging
import sys
from types import ModuleType
from typing import Iterable, List, Optional, Tuple, Type, Union

from .app.runtime import ModuleRuntime, get_runtime_registry
from .core.mixin import MixinInfo, get_mixin_info, get_view_model_type
from .diagnostics import display_user_error, fail
from .errors import DuplicateModuleError, MixinTargetError, RegistrationOrderError
from .patches import ViewModelPatch, ViewModelWithMixinPatch

logger = logging.getLogger(__name__)

Types = Union[ModuleType, Iterable[type], None]


class Extender:
    """Client object; create one for each module using this library."""

    def __init__(self, module_name: str):
        self.module_name = module_name
        self._runtime: Optional[ModuleRuntime] = None
        ViewModelPatch.patch()

    @property
    def runtime(self) -> Optional[ModuleRuntime]:
        return self._runtime

    @property
    def enabled(self) -> bool:
        return self._runtime is not None and self._runtime.enabled

    def register(self, types: Types = None) -> bool:
        """
        Register mixin types for this module.

        Args:
            types: A Python module to scan for ``@view_model_mixin`` classes, an
                iterable of mixin classes, or None to scan the calling module

        Returns:
            False if a module with the same name is already registered
        """
        if types is None:
            caller = inspect.currentframe().f_back
            types = sys.modules.get(caller.f_globals.get('__name__', ''))
        logger.info(f"{self.module_name} - Register: {getattr(types, '__name__', 'types')}")

        runtime = get_runtime_registry().register(self.module_name)
        if runtime is None:
            display_user_error(f"Failed to load extension module {self.module_name} - already loaded!",
                               DuplicateModuleError(self.module_name))
            return False
        self._runtime = runtime

        for mixin_type, info in self._discover(types):
            self.register_mixin(mixin_type, refresh_method_name=info.refresh_method_name)
        return True

    def register_mixin(self, mixin_type: type, target_type: Optional[Type] = None,
                       refresh_method_name: Optional[str] = None) -> bool:
        """
        Register one mixin type.

        The view model type is taken from the ``ViewModelMixin[T]`` specialization;
        ``target_type`` may be given for mixins that do not declare one.
        """
        if self._runtime is None:
            fail("Register() method was not called before register_mixin()!", RegistrationOrderError(self.module_name))
            return False

        declared = get_view_model_type(mixin_type)
        if target_type is not None and declared is not None and declared is not target_type:
            fail(f"Mixin {mixin_type.__name__} extends {declared.__name__}, not {target_type.__name__}!",
                 MixinTargetError(mixin_type.__name__))
            return False

        view_model_type = target_type or declared
        if view_model_type is None:
            fail(f"Failed to find base type for mixin {getattr(mixin_type, '__name__', mixin_type)}, "
                 f"should be specialized as T of ViewModelMixin[T]!", MixinTargetError(str(mixin_type)))
            return False

        self._runtime.registry.register(view_model_type, mixin_type)
        ViewModelWithMixinPatch.patch(self.module_name, view_model_type, refresh_method_name)
        logger.debug(f"{self.module_name} - {mixin_type.__name__} extends {view_model_type.__name__}")
        return True

    def enable(self) -> None:
        logger.info(f"{self.module_name} - Enabled")

        if self._runtime is None:
            fail("Register() method was not called before Enable()!", RegistrationOrderError(self.module_name))
            return
        self._runtime.enable()

    def disable(self) -> None:
        logger.info(f"{self.module_name} - Disabled")

        if self._runtime is None:
            fail("Register() method was not called before Disable()!", RegistrationOrderError(self.module_name))
            return
        self._runtime.disable()

    @staticmethod
    def _discover(types: Types) -> List[Tuple[type, MixinInfo]]:
        if types is None:
            return []

        if inspect.ismodule(types):
            # Only classes decorated with @view_model_mixin, defined in that module
            found = []
            for value in vars(types).values():
                info = get_mixin_info(value)
                if info is not None and value.__module__ == types.__name__:
                    found.append((value, info))
            return found

        return [(cls, get_mixin_info(cls) or MixinInfo()) for cls in types]
