"""
Bean Post-Processors

Extension hooks invoked while the factory builds beans.

Two variants exist:

- BeanPostProcessor: the generic hook type, with no construction hooks of
  its own
- InstantiationAwareBeanPostProcessor: adds
  ``post_process_property_values(bean, bean_id)``, called after the bean is
  instantiated and before declared property values are applied

The factory asks each processor for the instantiation-aware capability via
``as_instantiation_aware()`` rather than checking its class.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional


class BeanPostProcessor(ABC):
    """Generic post-processor."""

    def as_instantiation_aware(self) -> Optional['InstantiationAwareBeanPostProcessor']:
        """Return this processor as instantiation-aware, or None if it is not."""
        return None


class InstantiationAwareBeanPostProcessor(BeanPostProcessor):
    """Post-processor that may act on a bean before its properties are set.

    Example::

        class StampingProcessor(InstantiationAwareBeanPostProcessor):
            def post_process_property_values(self, bean, bean_id):
                bean.origin = bean_id

        factory.add_bean_post_processor(StampingProcessor())
    """

    def as_instantiation_aware(self) -> 'InstantiationAwareBeanPostProcessor':
        return self

    @abstractmethod
    def post_process_property_values(self, bean: Any, bean_id: str) -> None:
        """Hook called after instantiation, before property population.

        Args:
            bean: The freshly constructed instance
            bean_id: The id the bean is being built for

        Raises:
            Any exception aborts creation of the bean with BeanCreationError
        """
        pass


class BeanPostProcessorChain:
    """Ordered, append-only sequence of post-processors."""

    def __init__(self):
        self._processors: List[BeanPostProcessor] = []

    def add(self, processor: BeanPostProcessor) -> None:
        self._processors.append(processor)

    def processors(self) -> List[BeanPostProcessor]:
        """Copy of the processors in insertion order."""
        return list(self._processors)

    def instantiation_aware(self) -> Iterator[InstantiationAwareBeanPostProcessor]:
        """Iterate the processors exposing the instantiation-aware capability."""
        for processor in list(self._processors):
            aware = processor.as_instantiation_aware()
            if aware is not None:
                yield aware

    def __iter__(self) -> Iterator[BeanPostProcessor]:
        return iter(list(self._processors))

    def __len__(self) -> int:
        return len(self._processors)
