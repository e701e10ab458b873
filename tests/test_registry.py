"""
Registry Tests

Tests for the storage owned by the factory:
- BeanDefinitionStore (definitions by id)
- SingletonBeanRegistry (built singletons by id)
"""

import unittest

from beanfactory import BeanDefinition, BeanScope
from beanfactory.registry import BeanDefinitionStore, SingletonBeanRegistry
from fixtures import CacheService, Database


class TestBeanDefinitionStore(unittest.TestCase):
    """Definition store operations."""

    def setUp(self):
        self.store = BeanDefinitionStore()

    def test_get_absent_returns_none(self):
        self.assertIsNone(self.store.get("missing"))
        self.assertFalse(self.store.contains("missing"))

    def test_register_and_get(self):
        bd = BeanDefinition("db", Database)
        self.store.register("db", bd)

        self.assertIs(self.store.get("db"), bd)
        self.assertTrue(self.store.contains("db"))
        self.assertEqual(len(self.store), 1)

    def test_register_upserts(self):
        self.store.register("bean", BeanDefinition("bean", Database))
        replacement = BeanDefinition("bean", CacheService, scope=BeanScope.PROTOTYPE)
        self.store.register("bean", replacement)

        self.assertIs(self.store.get("bean"), replacement)
        self.assertEqual(len(self.store), 1)

    def test_snapshots_are_copies(self):
        self.store.register("db", BeanDefinition("db", Database))

        self.store.names().append("extra")
        self.store.values().clear()

        self.assertEqual(self.store.names(), ["db"])
        self.assertEqual(len(self.store.values()), 1)


class TestSingletonBeanRegistry(unittest.TestCase):
    """Singleton cache operations."""

    def setUp(self):
        self.registry = SingletonBeanRegistry()

    def test_miss_without_factory_returns_none(self):
        self.assertIsNone(self.registry.get_singleton("db"))
        self.assertFalse(self.registry.contains_singleton("db"))

    def test_factory_called_once(self):
        calls = []

        def build():
            calls.append(1)
            return Database()

        first = self.registry.get_singleton("db", build)
        second = self.registry.get_singleton("db", build)

        self.assertIs(first, second)
        self.assertEqual(len(calls), 1)

    def test_failed_factory_not_cached(self):
        def explode():
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            self.registry.get_singleton("db", explode)

        self.assertFalse(self.registry.contains_singleton("db"))
        self.assertIsInstance(self.registry.get_singleton("db", Database), Database)

    def test_register_singleton(self):
        db = Database()
        self.registry.register_singleton("db", db)

        self.assertIs(self.registry.get_singleton("db"), db)
        self.assertEqual(self.registry.singleton_count(), 1)

    def test_nested_creation_reenters_lock(self):
        """Building one singleton may build another inside the factory."""
        def build_outer():
            inner = self.registry.get_singleton("inner", Database)
            return (inner, CacheService())

        inner, _ = self.registry.get_singleton("outer", build_outer)

        self.assertIs(self.registry.get_singleton("inner"), inner)

    def test_destroy_singletons(self):
        self.registry.get_singleton("db", Database)

        self.registry.destroy_singletons()

        self.assertFalse(self.registry.contains_singleton("db"))
        self.assertEqual(self.registry.singleton_count(), 0)


if __name__ == '__main__':
    unittest.main()
