"""
Values

Value holders stored in bean definitions.

A definition's constructor arguments and property values are either
literals (converted to the destination type later) or references to
another bean id (resolved by building that bean)::

    bd.constructor_argument_values.append(TypedStringValue("42"))
    bd.property_values.append(PropertyValue("dao", RuntimeBeanReference("accountDao")))
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TypedStringValue:
    """Literal value, converted to the target slot's type at injection time"""
    value: Any


@dataclass(frozen=True)
class RuntimeBeanReference:
    """Reference to another bean by id"""
    bean_id: str


@dataclass(frozen=True)
class PropertyValue:
    """Named property assignment: a literal or a reference"""
    name: str
    value: Any
