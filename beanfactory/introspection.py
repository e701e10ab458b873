"""
Introspection

Reads the metadata the factory needs from plain Python classes:

- Constructor parameters with their annotated types (constructor injection)
- Writable properties with their declared types (property injection)

A writable property of an instance is any of:

1. A ``property`` with a setter. Its type comes from the setter's value
   annotation, or else the getter's return annotation.
2. A class-level annotated attribute (dataclass fields included).
3. An attribute already present in the instance ``__dict__``, typically
   assigned in ``__init__``. Its type is the class annotation if there is
   one, otherwise unknown.

Names starting with an underscore are never treated as writable properties.
"""

import inspect
import typing
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type


@dataclass(frozen=True)
class PropertyDescriptor:
    """A writable slot on a bean instance"""
    name: str
    property_type: Optional[Any] = None  # None when the slot is untyped


@dataclass(frozen=True)
class ParameterDescriptor:
    """A positional constructor parameter"""
    name: str
    parameter_type: Optional[Any] = None  # None when the parameter is untyped
    has_default: bool = False
    variadic: bool = False  # *args: accepts any number of trailing arguments


def resolve_type_hints(obj: Any) -> Dict[str, Any]:
    """Resolve the type hints of a class or function.

    Raises:
        NameError: When a forward reference names nothing in scope
        TypeError, AttributeError: When an annotation cannot be evaluated
    """
    return typing.get_type_hints(obj)


def get_constructor_parameters(cls: Type) -> List[ParameterDescriptor]:
    """Return the positional parameters of ``cls.__init__`` in order.

    ``self``, keyword-only parameters and ``**kwargs`` are excluded. A
    ``*args`` parameter comes last, flagged as ``variadic``.

    Raises:
        ValueError, TypeError: When the constructor cannot be inspected
            (some built-in and C extension types)
        NameError: When a parameter annotation cannot be resolved
    """
    if cls.__init__ is object.__init__:
        return []
    sig = inspect.signature(cls.__init__)
    hints = resolve_type_hints(cls.__init__)

    parameters = []
    for name, param in sig.parameters.items():
        if name == 'self':
            continue
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        ):
            continue
        parameters.append(ParameterDescriptor(
            name=name,
            parameter_type=hints.get(name),
            has_default=param.default is not inspect.Parameter.empty,
            variadic=param.kind is inspect.Parameter.VAR_POSITIONAL,
        ))
    return parameters


def get_writable_properties(instance: Any) -> Dict[str, PropertyDescriptor]:
    """Collect the writable properties of ``instance`` keyed by name.

    Raises:
        NameError: When an annotation on the class cannot be resolved
    """
    cls = type(instance)
    class_hints = resolve_type_hints(cls)
    descriptors: Dict[str, PropertyDescriptor] = {}

    for name, hint in class_hints.items():
        if name.startswith('_') or typing.get_origin(hint) is typing.ClassVar:
            continue
        descriptors[name] = PropertyDescriptor(name, hint)

    # Properties win over plain annotations: the setter decides what it accepts
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if name.startswith('_'):
                continue
            if isinstance(attr, property):
                if attr.fset is None:
                    descriptors.pop(name, None)
                else:
                    descriptors[name] = PropertyDescriptor(name, _property_type(attr))

    for name in getattr(instance, '__dict__', {}):
        if name.startswith('_') or name in descriptors:
            continue
        descriptors[name] = PropertyDescriptor(name, None)

    return descriptors


def _property_type(prop: property) -> Optional[Any]:
    setter_hints = resolve_type_hints(prop.fset)
    params = [n for n in inspect.signature(prop.fset).parameters][1:]
    if params and params[0] in setter_hints:
        return setter_hints[params[0]]
    if prop.fget is not None:
        return resolve_type_hints(prop.fget).get('return')
    return None
