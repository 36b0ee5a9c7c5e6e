"""
StarMixin Core Module

Host view model, mixin base class, markers and the capability indexer.
Nothing here knows about modules, registries or interception.
"""

from .viewmodel import ViewModel
from .mixin import ViewModelMixin, MixinInfo, view_model_mixin, get_view_model_type, get_mixin_info
from .markers import data_source_property, data_source_method, DataSourceProperty, CommandInfo
from .capabilities import CapabilityIndex, PropertyAccessor, index_mixin
from .weak import WeakInstanceTable

__all__ = [
    "ViewModel",
    "ViewModelMixin",
    "MixinInfo",
    "view_model_mixin",
    "get_view_model_type",
    "get_mixin_info",
    "data_source_property",
    "data_source_method",
    "DataSourceProperty",
    "CommandInfo",
    "CapabilityIndex",
    "PropertyAccessor",
    "index_mixin",
    "WeakInstanceTable",
]
