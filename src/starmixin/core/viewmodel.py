"""
Host ViewModel

Reference host for the mixin system: a pydantic model whose fields are its
native data-source properties, with a command entry point and a small
data-binding surface that mixins extend at runtime.
"""

import json
import logging
from typing import Any, Callable, ClassVar, Dict, List, Optional

from fastcore.xml import Div
from pydantic import BaseModel, ConfigDict, PrivateAttr

from .capabilities import PropertyAccessor
from .utils import coerce_arguments, invoke_with_log, parameter_types

logger = logging.getLogger(__name__)

PropertyChangedHandler = Callable[[str, Any, 'ViewModel'], None]


class ViewModel(BaseModel):
    """Base class for all host view models."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Configuration as class attributes (underscore prevents Pydantic field detection)
    _namespace: ClassVar[Optional[str]] = None
    _use_namespace: ClassVar[bool] = True

    _exposed_properties: Dict[str, PropertyAccessor] = PrivateAttr(default_factory=dict)
    _property_listeners: List[PropertyChangedHandler] = PrivateAttr(default_factory=list)

    @property
    def namespace(self) -> str:
        """Get the namespace for this view model instance."""
        return self._namespace or self.__class__.__name__

    # Data binding

    def expose_property(self, name: str, accessor: PropertyAccessor) -> None:
        """Make a property provided by a mixin visible as a native field."""
        if name in type(self).model_fields:
            logger.warning(f"{self.namespace}: mixin property '{name}' shadows a native field and is ignored")
            return
        self._exposed_properties[name] = accessor

    @property
    def exposed_properties(self) -> Dict[str, PropertyAccessor]:
        return dict(self._exposed_properties)

    def property_names(self) -> List[str]:
        return [*type(self).model_fields, *self._exposed_properties]

    def get_property_value(self, name: str) -> Any:
        if name in type(self).model_fields:
            return getattr(self, name)
        if name in self._exposed_properties:
            return self._exposed_properties[name].get()
        raise KeyError(f"{self.namespace} has no data-source property '{name}'")

    def set_property_value(self, name: str, value: Any) -> bool:
        """
        Set a native or exposed property from the binding layer.

        Native fields notify listeners here; exposed properties notify through
        their mixin (``ViewModelMixin.set_field``). Returns False if the
        property is not writable.
        """
        if name in type(self).model_fields:
            setattr(self, name, value)
            self.on_property_changed_with_value(value, name)
            return True
        if name in self._exposed_properties and self._exposed_properties[name].can_write:
            self._exposed_properties[name].set(value)
            return True
        logger.warning(f"{self.namespace}: property '{name}' is not writable")
        return False

    def subscribe(self, handler: PropertyChangedHandler) -> None:
        """Subscribe to property change notifications."""
        self._property_listeners.append(handler)

    def unsubscribe(self, handler: PropertyChangedHandler) -> None:
        if handler in self._property_listeners:
            self._property_listeners.remove(handler)

    def on_property_changed(self, name: str) -> None:
        self.on_property_changed_with_value(self.get_property_value(name), name)

    def on_property_changed_with_value(self, value: Any, name: str) -> None:
        for handler in list(self._property_listeners):
            try:
                handler(name, value, self)
            except Exception:
                logger.exception(f"Property change handler failed for {self.namespace}.{name}")

    @property
    def signals(self) -> Dict[str, Any]:
        """Get signals for this view model, native and exposed."""
        data = self.model_dump()
        for name, accessor in self._exposed_properties.items():
            data[name] = accessor.get()
        if self._use_namespace:
            return {self.namespace: data}
        return data

    def __ft__(self):
        """Render with data-signals attributes."""
        signals = json.dumps(self.signals, default=str)
        return Div(id=self.namespace, **{"data-signals": signals})

    # Commands and lifecycle

    def execute_command(self, command_name: str, *args: Any) -> Any:
        """Run a native command by name, converting text arguments to the declared types."""
        method = getattr(self, command_name, None)
        if method is None or not callable(method):
            logger.warning(f"{self.namespace}: command '{command_name}' not found")
            return None

        types = parameter_types(method)
        if len(types) == len(args):
            return invoke_with_log(method, *coerce_arguments(args, types))
        if not types:
            return invoke_with_log(method)

        logger.warning(f"{self.namespace}: command '{command_name}' expects {len(types)} arguments, got {len(args)}")
        return None

    def refresh_values(self) -> None:
        """Refresh derived state. Subclasses override."""
        pass

    def on_finalize(self) -> None:
        """Release resources held by the view model. Subclasses override."""
        pass
