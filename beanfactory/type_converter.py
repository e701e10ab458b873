"""
TypeConverter

Converts resolved property and constructor values to the declared type of
the destination slot. Literal values in bean definitions are usually text
("42", "true"), while the slot they end up in is annotated ``int``,
``bool``, and so on.

Supported conversions:

- Anything already an instance of the target type (unchanged)
- ``Optional[X]`` / ``Union[...]`` (None passes, members tried in order)
- Text to ``int``, ``float``, ``Decimal``, ``bool``, ``str`` and ``Enum``
  members (by name)
- ``int`` to ``float`` / ``Decimal``, numbers to ``str``
"""

import decimal
import enum
import inspect
import types
import typing
from typing import Any, Optional

from .exceptions import ConversionError

_TRUE_TOKENS = frozenset({'true', 'yes', 'on', '1'})
_FALSE_TOKENS = frozenset({'false', 'no', 'off', '0'})


class TypeConverter:
    """Converts a value to a required type when it is not one already.

    Example::

        converter = TypeConverter()
        converter.convert_if_necessary("42", int)       # 42
        converter.convert_if_necessary("on", bool)      # True
        converter.convert_if_necessary("3.5", Optional[float])  # 3.5
    """

    def convert_if_necessary(self, value: Any, required_type: Optional[Any]) -> Any:
        """Convert ``value`` to ``required_type``.

        Args:
            value: The resolved raw value
            required_type: The declared type of the slot, or None if untyped

        Returns:
            The converted value (``value`` itself if no conversion is needed)

        Raises:
            ConversionError: When there is no conversion path
        """
        if required_type is None or required_type is Any or required_type is object:
            return value
        if required_type is inspect.Parameter.empty:
            return value

        origin = typing.get_origin(required_type)
        if origin is typing.Union or _is_union_type(required_type):
            return self._convert_union(value, required_type)
        if origin is not None:
            # Parameterised generic such as List[int]: check the bare origin only
            if isinstance(origin, type) and isinstance(value, origin):
                return value
            raise self._error(value, required_type)
        if not isinstance(required_type, type):
            # Annotations we cannot check against (TypeVar, string, ...)
            return value

        if self._is_assignable(value, required_type):
            return value
        if value is None:
            raise self._error(value, required_type)

        if isinstance(value, str):
            return self._convert_text(value, required_type)
        if isinstance(value, (int, float, decimal.Decimal)) and not isinstance(value, bool):
            return self._convert_number(value, required_type)
        raise self._error(value, required_type)

    @staticmethod
    def _is_assignable(value: Any, required_type: type) -> bool:
        if isinstance(value, bool) and required_type in (int, float):
            return False
        return isinstance(value, required_type)

    def _convert_union(self, value: Any, required_type: Any) -> Any:
        members = typing.get_args(required_type)
        if value is None:
            if type(None) in members:
                return None
            raise self._error(value, required_type)

        for member in members:
            if member is not type(None) and isinstance(member, type) and self._is_assignable(value, member):
                return value
        for member in members:
            if member is type(None):
                continue
            try:
                return self.convert_if_necessary(value, member)
            except ConversionError:
                continue
        raise self._error(value, required_type)

    def _convert_text(self, text: str, required_type: type) -> Any:
        stripped = text.strip()
        try:
            if required_type is bool:
                token = stripped.lower()
                if token in _TRUE_TOKENS:
                    return True
                if token in _FALSE_TOKENS:
                    return False
                raise ValueError(f"not a boolean token: {text!r}")
            if required_type is int:
                return int(stripped)
            if required_type is float:
                return float(stripped)
            if required_type is decimal.Decimal:
                return decimal.Decimal(stripped)
            if issubclass(required_type, enum.Enum):
                return required_type[stripped]
        except (ValueError, KeyError, decimal.InvalidOperation) as e:
            raise self._error(text, required_type) from e
        raise self._error(text, required_type)

    def _convert_number(self, number: Any, required_type: type) -> Any:
        if required_type is str:
            return str(number)
        if required_type is float and isinstance(number, int):
            return float(number)
        if required_type is decimal.Decimal:
            return decimal.Decimal(str(number))
        raise self._error(number, required_type)

    @staticmethod
    def _error(value: Any, required_type: Any) -> ConversionError:
        type_name = getattr(required_type, '__name__', None) or str(required_type)
        return ConversionError(
            f"Cannot convert value {value!r} of type {type(value).__name__} "
            f"to required type {type_name}",
            value=value,
            required_type=required_type,
        )


def _is_union_type(tp: Any) -> bool:
    # PEP 604 unions (int | None) have their own runtime type
    return isinstance(tp, getattr(types, 'UnionType', ()))
