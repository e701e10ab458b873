"""
Thread Safety Tests

Tests for concurrent use of a BeanFactory:
- Concurrent first requests build a singleton exactly once
- Prototypes stay independent across threads
- Registration and lookup may run concurrently
"""

import concurrent.futures
import threading
import time
import unittest
from typing import List

from beanfactory import BeanDefinition, BeanFactory, BeanScope, PropertyValue
from conftest import ref
from fixtures import Database, Friendly


class SlowService:
    """Service whose construction is slow and counted."""

    instances = 0
    _lock = threading.Lock()

    def __init__(self):
        time.sleep(0.01)
        with SlowService._lock:
            SlowService.instances += 1
        self.thread_id = threading.current_thread().ident


class TestThreadSafetySingleton(unittest.TestCase):
    """Test singleton behavior in multi-threaded environment."""

    def setUp(self):
        SlowService.instances = 0
        self.factory = BeanFactory()

    def tearDown(self):
        self.factory.close()

    def test_singleton_constructed_once_under_contention(self):
        """Concurrent first requests build the singleton once."""
        self.factory.register_bean_definition("slow", BeanDefinition("slow", SlowService))

        barrier = threading.Barrier(10)
        results: List[SlowService] = []
        lock = threading.Lock()

        def resolve_in_thread():
            barrier.wait()
            service = self.factory.get_bean("slow")
            with lock:
                results.append(service)

        threads = [threading.Thread(target=resolve_in_thread) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(results), 10)
        self.assertEqual(SlowService.instances, 1)
        self.assertTrue(all(r is results[0] for r in results))

    def test_singleton_dependency_shared_across_threads(self):
        """Prototypes built in different threads share their singleton reference."""
        self.factory.register_bean_definition("db", BeanDefinition("db", Database))
        friendly = BeanDefinition("friendly", Friendly, scope=BeanScope.PROTOTYPE)
        friendly.property_values.append(
            PropertyValue("friend", ref("db"))
        )
        self.factory.register_bean_definition("friendly", friendly)

        with concurrent.futures.ThreadPoolExecutor(max_workers=5) as executor:
            futures = [executor.submit(self.factory.get_bean, "friendly") for _ in range(20)]
            beans = [f.result() for f in futures]

        self.assertEqual(len({id(b) for b in beans}), 20)
        self.assertEqual(len({id(b.friend) for b in beans}), 1)


class TestThreadSafetyPrototype(unittest.TestCase):
    """Test prototype behavior in multi-threaded environment."""

    def test_prototype_instances_per_thread(self):
        SlowService.instances = 0
        factory = BeanFactory()
        factory.register_bean_definition(
            "slow", BeanDefinition("slow", SlowService, scope=BeanScope.PROTOTYPE)
        )

        with concurrent.futures.ThreadPoolExecutor(max_workers=5) as executor:
            futures = [executor.submit(factory.get_bean, "slow") for _ in range(10)]
            results = [f.result() for f in futures]

        self.assertEqual(SlowService.instances, 10)
        self.assertEqual(len({id(r) for r in results}), 10)


class TestConcurrentRegistration(unittest.TestCase):
    """Registration and lookup from many threads."""

    def test_concurrent_register_and_get(self):
        factory = BeanFactory()
        errors: List[Exception] = []

        def worker(index: int):
            try:
                bean_id = f"db{index}"
                factory.register_bean_definition(bean_id, BeanDefinition(bean_id, Database))
                factory.get_bean(bean_id)
            except Exception as e:
                errors.append(e)

        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(worker, range(50)))

        self.assertEqual(errors, [])
        self.assertEqual(len(factory.get_bean_definition_names()), 50)

    def test_cycle_detection_is_per_thread(self):
        """A bean being built in one thread is not a cycle for another."""
        factory = BeanFactory()
        factory.register_bean_definition(
            "slow", BeanDefinition("slow", SlowService, scope=BeanScope.PROTOTYPE)
        )

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            futures = [executor.submit(factory.get_bean, "slow") for _ in range(8)]
            results = [f.result() for f in futures]

        self.assertEqual(len(results), 8)


if __name__ == '__main__':
    unittest.main()
