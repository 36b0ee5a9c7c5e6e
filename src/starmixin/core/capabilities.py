"""
Capability Indexer

Builds the name -> member lookup tables of a mixin instance: exposed
data-source properties and exposed commands.

Resolution order is deterministic. Class bodies are scanned base-first along
the MRO, each in declaration order, and a later entry with the same exposed
name replaces an earlier one. Members registered through ``expose`` and
``expose_command`` are applied last.

A marker fixes the exposed name; the implementation follows normal attribute
lookup on the mixin, so a subclass that overrides a marked property or
command without re-marking it still replaces the body.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType, MethodType
from typing import Any, Callable, Mapping, Optional

from .markers import DataSourceProperty, get_command_info

logger = logging.getLogger(__name__)


@dataclass
class PropertyAccessor:
    """A bound getter/setter pair handed to the host's data binding."""
    name: str
    getter: Callable[[], Any]
    setter: Optional[Callable[[Any], None]] = None
    owner: Any = None

    @property
    def can_write(self) -> bool:
        return self.setter is not None

    def get(self) -> Any:
        return self.getter()

    def set(self, value: Any) -> None:
        if self.setter is None:
            raise AttributeError(f"Property '{self.name}' is read-only")
        self.setter(value)


@dataclass(frozen=True)
class CapabilityIndex:
    """Immutable name-keyed lookup of a mixin's exposed members."""
    properties: Mapping[str, PropertyAccessor]
    commands: Mapping[str, Callable[..., Any]]

    def get_command(self, name: str) -> Optional[Callable[..., Any]]:
        return self.commands.get(name)

    def get_property(self, name: str) -> Optional[PropertyAccessor]:
        return self.properties.get(name)

    def __bool__(self) -> bool:
        return bool(self.properties or self.commands)


def _put(table: dict, name: str, value: Any, kind: str, mixin: Any) -> None:
    if name in table:
        logger.debug(f"{type(mixin).__name__}: {kind} '{name}' redefined, keeping the later one")
    table[name] = value


def index_mixin(mixin: Any) -> CapabilityIndex:
    """Scan a mixin instance for exposed properties and commands."""
    properties = {}
    commands = {}

    for cls in reversed(type(mixin).__mro__):
        for attr_name, member in cls.__dict__.items():
            if isinstance(member, DataSourceProperty) and member.fget is not None:
                name = member.exposed_name or attr_name
                # An unmarked override in a subclass still supplies the implementation
                resolved = getattr(type(mixin), attr_name, member)
                prop = resolved if isinstance(resolved, property) and resolved.fget is not None else member
                setter = MethodType(prop.fset, mixin) if prop.fset is not None else None
                accessor = PropertyAccessor(name=name, getter=MethodType(prop.fget, mixin), setter=setter, owner=mixin)
                _put(properties, name, accessor, "property", mixin)
                continue

            info = get_command_info(member)
            if info is not None:
                _put(commands, info.name, getattr(mixin, attr_name), "command", mixin)

    for name, accessor in getattr(mixin, '_exposed_properties', {}).items():
        _put(properties, name, accessor, "property", mixin)
    for name, handler in getattr(mixin, '_exposed_commands', {}).items():
        _put(commands, name, handler, "command", mixin)

    return CapabilityIndex(properties=MappingProxyType(properties), commands=MappingProxyType(commands))
