"""
Test Configuration and Utilities

Common base classes and helper functions for beanfactory tests
"""

import unittest
from typing import Any, Type

from beanfactory import (
    BeanDefinition,
    BeanFactory,
    BeanScope,
    PropertyValue,
    RuntimeBeanReference,
    TypedStringValue,
)


class BeanFactoryTestCase(unittest.TestCase):
    """
    Base test case class for beanfactory tests.

    Creates a fresh BeanFactory before each test and closes it after.
    """

    def setUp(self):
        """Create an empty factory before each test"""
        self.factory = BeanFactory()

    def tearDown(self):
        """Release cached singletons after each test"""
        self.factory.close()

    def register(
        self,
        bean_id: str,
        cls: Type,
        scope: BeanScope = BeanScope.SINGLETON,
        args=(),
        **properties: Any
    ) -> BeanDefinition:
        """Register a definition for ``cls`` and return it.

        Plain values become literals; use ``ref("id")`` for references.

        Example:
            >>> self.register("pool", Pool, args=["42"])
            >>> self.register("service", AccountService, dao=ref("accountDao"))
        """
        bd = BeanDefinition(bean_id, cls, scope=scope)
        for arg in args:
            bd.constructor_argument_values.append(_as_value(arg))
        for name, value in properties.items():
            bd.property_values.append(PropertyValue(name, _as_value(value)))
        self.factory.register_bean_definition(bean_id, bd)
        return bd


def ref(bean_id: str) -> RuntimeBeanReference:
    """Shorthand for a bean reference"""
    return RuntimeBeanReference(bean_id)


def class_name_of(cls: Type) -> str:
    """Dotted import path of ``cls`` as the TypeLoader expects it"""
    return f"{cls.__module__}.{cls.__qualname__}"


def _as_value(value: Any) -> Any:
    if isinstance(value, (RuntimeBeanReference, TypedStringValue)):
        return value
    return TypedStringValue(value)
