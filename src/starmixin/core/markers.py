"""
Data Source Markers

This module provides the two markers a mixin author uses to publish members
to the host's data-binding layer:

- ``@data_source_property`` - a ``property`` subclass; the getter (and optional
  setter) become a bindable field on the extended view model.
- ``@data_source_method`` - stores command metadata on the function; the method
  becomes reachable through ``ViewModel.execute_command``.

Markers only store metadata. Discovery is done by the capability indexer.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class CommandInfo:
    """Metadata about a command method stored by ``@data_source_method``."""
    name: str
    method: str
    signature: inspect.Signature
    description: Optional[str] = None
    kwargs: dict = field(default_factory=dict)


class DataSourceProperty(property):
    """A property that is exposed to the view model's data binding."""

    def __init__(self, fget=None, fset=None, fdel=None, doc=None, name: Optional[str] = None):
        super().__init__(fget, fset, fdel, doc)
        self.exposed_name = name or (fget.__name__ if fget is not None else None)

    def getter(self, fget):
        return type(self)(fget, self.fset, self.fdel, self.__doc__, self.exposed_name)

    def setter(self, fset):
        return type(self)(self.fget, fset, self.fdel, self.__doc__, self.exposed_name)

    def deleter(self, fdel):
        return type(self)(self.fget, self.fset, fdel, self.__doc__, self.exposed_name)

    def __repr__(self):
        return f"DataSourceProperty({self.exposed_name})"


def data_source_property(fget=None, *, name: Optional[str] = None):
    """
    Mark a getter as an exposed data-source property.

    Usable as ``@data_source_property`` or ``@data_source_property(name="Alias")``.
    Setters are attached the usual way, ``@prop.setter``.
    """
    def decorator(func):
        return DataSourceProperty(func, name=name)

    if fget is not None:
        return decorator(fget)

    return decorator


def data_source_method(fn=None, *, name: Optional[str] = None, description: Optional[str] = None, **kwargs):
    """
    Store command metadata on a mixin method.

    Args:
        fn: Function being decorated (when used without parentheses)
        name: Command name to expose, defaults to the function name
        description: Optional human readable description

    Returns:
        The same function with a ``_command_info`` attribute
    """
    def decorator(func):
        func._command_info = CommandInfo(
            name=name or func.__name__,
            method=func.__name__,
            signature=inspect.signature(func),
            description=description or inspect.getdoc(func),
            kwargs=kwargs,
        )
        return func

    # Handle usage as @data_source_method without parentheses
    if fn is not None:
        return decorator(fn)

    return decorator


def get_command_info(member: Any) -> Optional[CommandInfo]:
    """Return the command metadata of a (possibly bound) method, if any."""
    func = getattr(member, "__func__", member)
    return getattr(func, "_command_info", None)


def describe_commands(cls: type) -> Dict[str, CommandInfo]:
    """Collect command metadata declared on a class, keyed by exposed name."""
    commands = {}
    for attr_name in dir(cls):
        info = get_command_info(getattr(cls, attr_name, None))
        if info is not None:
            commands[info.name] = info
    return commands
