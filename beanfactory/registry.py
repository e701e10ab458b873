"""
Registries

Thread-safe storage owned by a BeanFactory:

- BeanDefinitionStore: bean id -> BeanDefinition
- SingletonBeanRegistry: bean id -> fully built shared instance

Both are internal to the factory. Collaborators go through
``BeanFactory.register_bean_definition()`` and ``BeanFactory.get_bean()``.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .definition import BeanDefinition

logger = logging.getLogger(__name__)


class BeanDefinitionStore:
    """Concurrent-safe mapping from bean id to definition.

    Registration is an unconditional upsert: the last write for an id wins.
    Readers always see a whole definition, never a half-written one.
    """

    def __init__(self):
        self._definitions: Dict[str, BeanDefinition] = {}
        self._lock = threading.Lock()

    def register(self, bean_id: str, definition: BeanDefinition) -> None:
        with self._lock:
            replaced = bean_id in self._definitions
            self._definitions[bean_id] = definition
        if replaced:
            logger.debug("Replaced bean definition '%s'", bean_id)
        else:
            logger.debug("Registered bean definition '%s'", bean_id)

    def get(self, bean_id: str) -> Optional[BeanDefinition]:
        """Return the definition for ``bean_id`` or None. Never raises."""
        with self._lock:
            return self._definitions.get(bean_id)

    def contains(self, bean_id: str) -> bool:
        with self._lock:
            return bean_id in self._definitions

    def names(self) -> List[str]:
        with self._lock:
            return list(self._definitions)

    def values(self) -> List[BeanDefinition]:
        """Snapshot of all definitions.

        Order follows the underlying mapping; callers must not rely on it.
        """
        with self._lock:
            return list(self._definitions.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._definitions)


class SingletonBeanRegistry:
    """Concurrent-safe cache of constructed singleton beans.

    ``get_singleton(bean_id, singleton_factory)`` is an atomic
    compute-if-absent: creation runs under a re-entrant lock, so two threads
    asking for the same cold singleton build it once. The lock is re-entrant
    because building one singleton usually builds the singletons it
    references.

    Attributes:
        _singletons: Dictionary mapping bean ids to shared instances
    """

    def __init__(self):
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def get_singleton(
        self,
        bean_id: str,
        singleton_factory: Optional[Callable[[], Any]] = None
    ) -> Any:
        """Return the cached singleton, creating it if a factory is given.

        The instance is published only after ``singleton_factory`` returns.
        If it raises, nothing is cached and the exception propagates.

        Args:
            bean_id: Bean id to look up
            singleton_factory: Builds the instance on a cache miss

        Returns:
            The shared instance, or None on a miss without a factory
        """
        instance = self._singletons.get(bean_id)
        if instance is not None or singleton_factory is None:
            return instance

        with self._lock:
            # Another thread may have published while we waited
            instance = self._singletons.get(bean_id)
            if instance is None:
                instance = singleton_factory()
                self._singletons[bean_id] = instance
                logger.debug("Cached singleton bean '%s'", bean_id)
            return instance

    def register_singleton(self, bean_id: str, instance: Any) -> None:
        """Publish an externally built instance under ``bean_id``."""
        with self._lock:
            self._singletons[bean_id] = instance

    def contains_singleton(self, bean_id: str) -> bool:
        return bean_id in self._singletons

    def singleton_count(self) -> int:
        return len(self._singletons)

    def destroy_singletons(self) -> None:
        """Drop every cached instance. Used on container shutdown."""
        with self._lock:
            count = len(self._singletons)
            self._singletons.clear()
        logger.debug("Released %d singleton bean(s)", count)
