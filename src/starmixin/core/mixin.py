"""
ViewModelMixin: base class for module-authored view model extensions.

A mixin is bound 1:1 to a view model instance. It only holds a weak reference
back to that instance, so the mixin cache never keeps a view model alive.
The extended view model type is taken from the generic specialization::

    @view_model_mixin(refresh_method_name="refresh_values")
    class InventoryMixin(ViewModelMixin[InventoryVM]):
        @data_source_property
        def weight_label(self) -> str:
            ...

        @data_source_method
        def execute_sort(self, mode: int):
            ...
"""

import inspect
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar, get_args, get_origin

from .capabilities import PropertyAccessor

TViewModel = TypeVar('TViewModel')

_MISSING = object()


@dataclass
class MixinInfo:
    """Registration metadata stored by ``@view_model_mixin``."""
    refresh_method_name: Optional[str] = None


def view_model_mixin(cls=None, *, refresh_method_name: Optional[str] = None):
    """
    Mark a mixin class for discovery by ``Extender.register``.

    Args:
        cls: Class being decorated (when used without parentheses)
        refresh_method_name: Name of the view model method whose completion
            should trigger ``on_refresh`` on the mixin
    """
    def decorator(klass):
        klass.__view_model_mixin__ = MixinInfo(refresh_method_name=refresh_method_name)
        return klass

    if cls is not None:
        return decorator(cls)

    return decorator


def get_mixin_info(cls: type) -> Optional[MixinInfo]:
    """Metadata declared directly on ``cls`` (not inherited)."""
    return cls.__dict__.get('__view_model_mixin__') if isinstance(cls, type) else None


class ViewModelMixin(Generic[TViewModel]):
    """
    Base class for view model mixins.

    Subclasses receive the view model instance in their constructor and may
    publish extra members with ``@data_source_property``/``@data_source_method``
    or, at construction time, with ``expose``/``expose_command``.
    """

    def __init__(self, view_model: TViewModel):
        self._view_model_ref = weakref.ref(view_model)
        self._exposed_properties: Dict[str, PropertyAccessor] = {}
        self._exposed_commands: Dict[str, Callable[..., Any]] = {}

    @property
    def view_model(self) -> Optional[TViewModel]:
        """The extended view model, or ``None`` once it has been collected."""
        return self._view_model_ref()

    def on_refresh(self):
        """Called after the view model's refresh method ran."""
        pass

    def on_finalize(self):
        """Called after the view model was finalized."""
        pass

    def expose(self, name: str, getter: Callable[[], Any], setter: Optional[Callable[[Any], None]] = None) -> 'ViewModelMixin':
        """Register a data-source property explicitly. Must be called before indexing (in ``__init__``)."""
        self._exposed_properties[name] = PropertyAccessor(name=name, getter=getter, setter=setter, owner=self)
        return self

    def expose_command(self, name: str, handler: Callable[..., Any]) -> 'ViewModelMixin':
        """Register a command explicitly. Must be called before indexing (in ``__init__``)."""
        self._exposed_commands[name] = handler
        return self

    def set_field(self, field_name: str, value: Any, property_name: str) -> bool:
        """Store ``value`` in ``field_name`` and notify the view model if it changed."""
        if getattr(self, field_name, _MISSING) == value:
            return False
        setattr(self, field_name, value)
        self.on_property_changed_with_value(value, property_name)
        return True

    def on_property_changed(self, property_name: str):
        view_model = self.view_model
        if view_model is not None and hasattr(view_model, 'on_property_changed'):
            view_model.on_property_changed(property_name)

    def on_property_changed_with_value(self, value: Any, property_name: str):
        view_model = self.view_model
        if view_model is not None and hasattr(view_model, 'on_property_changed_with_value'):
            view_model.on_property_changed_with_value(value, property_name)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.view_model!r})"


def get_view_model_type(mixin_type: type) -> Optional[type]:
    """
    Find the view model type a mixin extends.

    Walks the MRO looking for a ``ViewModelMixin[T]`` specialization with a
    concrete class ``T``. Returns ``None`` when none exists.
    """
    if not inspect.isclass(mixin_type):
        return None

    for node in inspect.getmro(mixin_type):
        for base in node.__dict__.get('__orig_bases__', ()):
            origin = get_origin(base)
            if not (inspect.isclass(origin) and issubclass(origin, ViewModelMixin)):
                continue
            args = get_args(base)
            if args and inspect.isclass(args[0]):
                return args[0]
    return None
