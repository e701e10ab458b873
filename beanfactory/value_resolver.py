"""
BeanDefinitionValueResolver

Turns the value holders stored in a bean definition into runtime values.
"""

from typing import Any, TYPE_CHECKING

from .values import RuntimeBeanReference, TypedStringValue

if TYPE_CHECKING:
    from .factory import BeanFactory


class BeanDefinitionValueResolver:
    """Resolves literals and bean references.

    A ``RuntimeBeanReference`` is resolved by asking the factory for that
    bean, which builds it if needed and reuses the singleton cache
    otherwise. Nothing is memoised here: two references to the same
    prototype yield two instances.
    """

    def __init__(self, bean_factory: 'BeanFactory'):
        self.bean_factory = bean_factory

    def resolve_value_if_necessary(self, value: Any) -> Any:
        """Resolve one value holder.

        Args:
            value: A ``RuntimeBeanReference``, a ``TypedStringValue``, or
                any other object (treated as a literal)

        Returns:
            The referenced bean, or the literal unchanged
        """
        if isinstance(value, RuntimeBeanReference):
            return self.bean_factory.get_bean(value.bean_id)
        if isinstance(value, TypedStringValue):
            return value.value
        return value
