"""
BeanDefinition

Data class representing the blueprint of a bean
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Type, Union, TYPE_CHECKING

from .scope import BeanScope
from .values import PropertyValue

if TYPE_CHECKING:
    from .type_loader import TypeLoader


@dataclass
class BeanDefinition:
    """Bean definition

    ``bean_class_name`` is either a dotted import path or a class object.
    The class is resolved lazily through a ``TypeLoader`` and cached.
    """
    id: str
    bean_class_name: Union[str, Type]
    scope: BeanScope = BeanScope.SINGLETON
    constructor_argument_values: List[Any] = field(default_factory=list)
    property_values: List[PropertyValue] = field(default_factory=list)
    bean_class: Optional[Type] = field(default=None, compare=False, repr=False)  # Resolved class

    def __post_init__(self):
        if isinstance(self.bean_class_name, type):
            self.bean_class = self.bean_class_name
        if isinstance(self.scope, str):
            self.scope = BeanScope.from_token(self.scope)

    @property
    def class_name(self) -> str:
        """Dotted name of the bean class, for messages"""
        if isinstance(self.bean_class_name, type):
            cls = self.bean_class_name
            return f"{cls.__module__}.{cls.__qualname__}"
        return self.bean_class_name

    def is_singleton(self) -> bool:
        return self.scope == BeanScope.SINGLETON

    def is_prototype(self) -> bool:
        return self.scope == BeanScope.PROTOTYPE

    def has_bean_class(self) -> bool:
        return self.bean_class is not None

    def has_constructor_argument_values(self) -> bool:
        return bool(self.constructor_argument_values)

    def resolve_bean_class(self, type_loader: 'TypeLoader') -> Type:
        """Resolve and cache the bean class.

        Calling this again after a successful resolution returns the
        cached class without touching the loader.

        Raises:
            ClassResolutionError: When the class cannot be loaded
        """
        if self.bean_class is None:
            self.bean_class = type_loader.load_class(self.bean_class_name)
        return self.bean_class
