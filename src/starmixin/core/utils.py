import inspect
import logging
from typing import Any, Callable, List, Sequence, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_PASS_THROUGH = (str, Any, inspect.Parameter.empty)


def positional_parameters(func: Callable) -> List[inspect.Parameter]:
    """Declared positional parameters of a callable (``self`` excluded for bound methods)."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return []
    return [p for p in signature.parameters.values() if p.kind in _POSITIONAL]


def parameter_types(func: Callable) -> List[Any]:
    """Resolved annotation of every positional parameter, ``inspect.Parameter.empty`` if absent."""
    params = positional_parameters(func)
    try:
        hints = get_type_hints(getattr(func, "__func__", func))
    except Exception:
        # Unresolvable forward references, fall back to the raw annotations
        hints = {}
    return [_unwrap_optional(hints.get(p.name, p.annotation)) for p in params]


def _unwrap_optional(annotation: Any) -> Any:
    """``Optional[int]`` -> ``int``; anything else unchanged."""
    if get_origin(annotation) is Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def convert_value_to(value: str, parameter_type: Any) -> Any:
    """Convert a text value to the declared parameter type; unsupported types yield ``None``."""
    if parameter_type is str:
        return value
    if parameter_type is int:
        return int(value)
    if parameter_type is float:
        return float(value)
    return None


def coerce_arguments(args: Sequence[Any], types: Sequence[Any]) -> List[Any]:
    """
    Coerce positional arguments for a call.

    Text values aimed at a non-text parameter are converted to ``int`` or
    ``float``; any other declared type receives ``None``. Non-text values and
    unannotated parameters pass through unchanged.
    """
    coerced = []
    for value, parameter_type in zip(args, types):
        if isinstance(value, str) and parameter_type not in _PASS_THROUGH:
            try:
                value = convert_value_to(value, parameter_type)
            except ValueError:
                logger.warning(f"Cannot convert {value!r} to {getattr(parameter_type, '__name__', parameter_type)}, passing None")
                value = None
        coerced.append(value)
    return coerced


def invoke_with_log(handler: Callable, *args) -> Any:
    """Invoke a handler, logging (not raising) any exception it throws."""
    try:
        return handler(*args)
    except Exception:
        logger.exception(f"Error invoking {getattr(handler, '__qualname__', handler)!s}")
        return None
