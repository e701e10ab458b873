"""
TypeLoader Tests

Tests for loading bean classes by dotted name, and for installing a custom
loader on the factory.
"""

import collections
import unittest

from beanfactory import BeanDefinition, BeanFactory, ClassResolutionError, TypeLoader
from conftest import class_name_of
from fixtures import Database


class Outer:
    class Inner:
        pass


class AliasTypeLoader(TypeLoader):
    """Resolves short aliases before falling back to import paths."""

    def __init__(self, aliases):
        self.aliases = aliases
        self.requests = []

    def load_class(self, class_name):
        self.requests.append(class_name)
        if class_name in self.aliases:
            return self.aliases[class_name]
        return super().load_class(class_name)


class TestTypeLoader(unittest.TestCase):
    """Default importlib-based loading."""

    def setUp(self):
        self.loader = TypeLoader()

    def test_stdlib_class(self):
        self.assertIs(self.loader.load_class("collections.OrderedDict"), collections.OrderedDict)

    def test_fixture_class(self):
        self.assertIs(self.loader.load_class(class_name_of(Database)), Database)

    def test_nested_class(self):
        self.assertIs(self.loader.load_class(class_name_of(Outer.Inner)), Outer.Inner)

    def test_class_passes_through(self):
        self.assertIs(self.loader.load_class(Database), Database)

    def test_unknown_module(self):
        with self.assertRaises(ClassResolutionError) as ctx:
            self.loader.load_class("no_such_module_xyz.Thing")

        self.assertIn("no_such_module_xyz.Thing", str(ctx.exception))

    def test_unknown_attribute(self):
        with self.assertRaises(ClassResolutionError) as ctx:
            self.loader.load_class("collections.NoSuchThing")

        self.assertIn("NoSuchThing", str(ctx.exception))

    def test_not_a_class(self):
        with self.assertRaises(ClassResolutionError):
            self.loader.load_class("collections.namedtuple")

    def test_bare_name_rejected(self):
        with self.assertRaises(ClassResolutionError):
            self.loader.load_class("Database")

    def test_empty_name_rejected(self):
        with self.assertRaises(ClassResolutionError):
            self.loader.load_class("")


class TestFactoryTypeLoader(unittest.TestCase):
    """Type loader accessors on the factory."""

    def test_default_loader(self):
        factory = BeanFactory()
        self.assertIsInstance(factory.get_type_loader(), TypeLoader)
        self.assertIs(factory.get_type_loader(), factory.get_type_loader())

    def test_custom_loader_used_for_resolution(self):
        loader = AliasTypeLoader({"db": Database})
        factory = BeanFactory()
        factory.set_type_loader(loader)
        factory.register_bean_definition("database", BeanDefinition("database", "db"))

        self.assertIs(factory.get_type_loader(), loader)
        self.assertIsInstance(factory.get_bean("database"), Database)

    def test_class_resolved_once(self):
        """Resolution is memoised on the definition."""
        loader = AliasTypeLoader({"db": Database})
        factory = BeanFactory(type_loader=loader)
        factory.register_bean_definition(
            "database", BeanDefinition("database", "db", scope="prototype")
        )

        factory.get_bean("database")
        factory.get_bean("database")

        self.assertEqual(loader.requests, ["db"])

    def test_reset_to_default(self):
        factory = BeanFactory(type_loader=AliasTypeLoader({}))
        factory.set_type_loader(None)

        self.assertIs(type(factory.get_type_loader()), TypeLoader)


if __name__ == '__main__':
    unittest.main()
