"""
StarMixin - Per-instance mixins for view models

Lets independent extension modules attach data-source properties and commands
to instances of view model types they do not own. Mixins are created when a
view model is constructed, refreshed and finalized with it, and consulted first
whenever the view model executes a command.
"""

from .core import (
    ViewModel,
    ViewModelMixin,
    view_model_mixin,
    data_source_property,
    data_source_method,
    PropertyAccessor,
    CapabilityIndex,
)
from .app import ModuleRuntime, RuntimeRegistry, get_runtime_registry, set_runtime_registry, dispatch
from .extender import Extender
from .config import ExtenderConfig, Environment, get_config, set_config, configure_logging
from .diagnostics import add_user_error_handler, remove_user_error_handler
from .errors import ExtenderError, MixinTargetError, DuplicateModuleError, RegistrationOrderError

__all__ = [
    # Core
    'ViewModel',
    'ViewModelMixin',
    'view_model_mixin',
    'data_source_property',
    'data_source_method',
    'PropertyAccessor',
    'CapabilityIndex',

    # Runtime
    'ModuleRuntime',
    'RuntimeRegistry',
    'get_runtime_registry',
    'set_runtime_registry',
    'dispatch',
    'Extender',

    # Configuration
    'ExtenderConfig',
    'Environment',
    'get_config',
    'set_config',
    'configure_logging',

    # Diagnostics and errors
    'add_user_error_handler',
    'remove_user_error_handler',
    'ExtenderError',
    'MixinTargetError',
    'DuplicateModuleError',
    'RegistrationOrderError',
]
