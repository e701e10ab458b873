"""
BeanFactory

This module provides the IoC container. It is the heart of the beanfactory
package, responsible for:

- Storing bean definitions registered by readers and other collaborators
- Instantiating beans, through the declared constructor arguments or the
  zero-argument constructor
- Populating bean properties with literals and references to other beans
- Caching singleton beans and handing out fresh prototype beans
- Running post-processor hooks during construction
- Resolving dependencies by type for autowiring

Example::

    factory = BeanFactory()
    factory.register_bean_definition(
        "accountDao", BeanDefinition("accountDao", "app.dao.AccountDao")
    )
    service = BeanDefinition("accountService", "app.service.AccountService")
    service.property_values.append(
        PropertyValue("dao", RuntimeBeanReference("accountDao"))
    )
    factory.register_bean_definition("accountService", service)

    factory.get_bean("accountService").dao is factory.get_bean("accountDao")  # True
"""

import logging
from typing import Any, List, Optional, Type

from .constructor_resolver import ConstructorResolver
from .creation_context import in_creation
from .definition import BeanDefinition
from .dependency import DependencyDescriptor
from .exceptions import (
    BeanCreationError,
    BeanDefinitionNotFoundError,
    BeansError,
    ContainerClosedError,
)
from .introspection import get_writable_properties
from .post_processor import BeanPostProcessor, BeanPostProcessorChain
from .registry import BeanDefinitionStore, SingletonBeanRegistry
from .type_converter import TypeConverter
from .type_loader import TypeLoader
from .value_resolver import BeanDefinitionValueResolver

logger = logging.getLogger(__name__)


class BeanFactory:
    """IoC container building beans from registered definitions.

    Singleton beans are built once and shared; prototype beans are built on
    every request. A bean is cached only after it has been instantiated and
    fully populated, so a failed creation leaves nothing behind.

    Creation of singletons is serialised: concurrent first requests for the
    same singleton construct it exactly once.

    Attributes:
        type_converter: Converter applied to constructor and property values
        _definitions: Registered definitions keyed by bean id
        _singletons: Cache of built singleton beans
        _post_processors: Hooks run during population
        _type_loader: Strategy resolving class names to classes
        _closed: Flag indicating if the factory has been closed
    """

    def __init__(self, type_loader: Optional[TypeLoader] = None):
        """Initialize an empty factory.

        Args:
            type_loader: Strategy for loading bean classes by name. Defaults
                to an ``importlib`` based ``TypeLoader``.
        """
        self._definitions = BeanDefinitionStore()
        self._singletons = SingletonBeanRegistry()
        self._post_processors = BeanPostProcessorChain()
        self._type_loader: Optional[TypeLoader] = type_loader
        self.type_converter = TypeConverter()
        self._closed = False

    def _ensure_not_closed(self) -> None:
        if self._closed:
            raise ContainerClosedError("This bean factory is already closed")

    # Definition registry

    def register_bean_definition(self, bean_id: str, bd: BeanDefinition) -> None:
        """Register ``bd`` under ``bean_id``, replacing any previous definition.

        A singleton already cached under ``bean_id`` stays cached.

        Raises:
            ContainerClosedError: When the factory has been closed
        """
        self._ensure_not_closed()
        self._definitions.register(bean_id, bd)

    def get_bean_definition(self, bean_id: str) -> Optional[BeanDefinition]:
        """Return the definition registered under ``bean_id``, or None."""
        return self._definitions.get(bean_id)

    def contains_bean_definition(self, bean_id: str) -> bool:
        return self._definitions.contains(bean_id)

    def get_bean_definition_names(self) -> List[str]:
        return self._definitions.names()

    # Bean access

    def get_bean(self, bean_id: str) -> Any:
        """Return the bean registered under ``bean_id``, building it if needed.

        Args:
            bean_id: The id the definition was registered under

        Returns:
            The singleton instance (same object on every call) or a new
            prototype instance

        Raises:
            BeanDefinitionNotFoundError: When no definition is registered
            BeanCreationError: When the bean (or a bean it references)
                cannot be created. ConstructorResolutionError and
                CircularDependencyError are subclasses.
            ContainerClosedError: When the factory has been closed
        """
        self._ensure_not_closed()

        bd = self._definitions.get(bean_id)
        if bd is None:
            registered = ", ".join(self._definitions.names()) or "None"
            raise BeanDefinitionNotFoundError(
                f"No bean definition named '{bean_id}'.\n"
                f"Registered beans: {registered}",
                bean_id=bean_id,
            )

        if bd.is_singleton():
            return self._singletons.get_singleton(
                bean_id, lambda: self._create_bean(bean_id, bd)
            )
        return self._create_bean(bean_id, bd)

    def contains_singleton(self, bean_id: str) -> bool:
        """Whether a singleton has already been built for ``bean_id``."""
        return self._singletons.contains_singleton(bean_id)

    def is_singleton(self, bean_id: str) -> bool:
        """Whether ``bean_id`` is registered with singleton scope.

        Raises:
            BeanDefinitionNotFoundError: When no definition is registered
        """
        bd = self._definitions.get(bean_id)
        if bd is None:
            raise BeanDefinitionNotFoundError(
                f"No bean definition named '{bean_id}'", bean_id=bean_id
            )
        return bd.is_singleton()

    def resolve_bean_class(self, bd: BeanDefinition) -> Type:
        """Resolve (and cache on the definition) the class of ``bd``.

        Raises:
            ClassResolutionError: When the class cannot be loaded
        """
        return bd.resolve_bean_class(self.get_type_loader())

    def _create_bean(self, bean_id: str, bd: BeanDefinition) -> Any:
        with in_creation(bean_id):
            logger.debug("Creating bean '%s' (%s)", bean_id, bd.class_name)
            try:
                bean = self._instantiate_bean(bean_id, bd)
                self._populate_bean(bean_id, bd, bean)
            except BeanCreationError:
                raise
            except BeansError as e:
                raise BeanCreationError(
                    f"Error creating bean '{bean_id}': {e}", bean_id=bean_id
                ) from e
            except Exception as e:
                raise BeanCreationError(
                    f"Error creating bean '{bean_id}' ({bd.class_name}): {e}",
                    bean_id=bean_id,
                ) from e
        return bean

    def _instantiate_bean(self, bean_id: str, bd: BeanDefinition) -> Any:
        if bd.has_constructor_argument_values():
            return ConstructorResolver(self).autowire_constructor(bd)

        bean_class = self.resolve_bean_class(bd)
        try:
            return bean_class()
        except Exception as e:
            raise BeanCreationError(
                f"Create bean '{bean_id}' for {bd.class_name} failed: {e}. "
                f"Hint: declare constructor arguments, or give "
                f"{bean_class.__name__} a zero-argument constructor.",
                bean_id=bean_id,
            ) from e

    def _populate_bean(self, bean_id: str, bd: BeanDefinition, bean: Any) -> None:
        for processor in self._post_processors.instantiation_aware():
            processor.post_process_property_values(bean, bean_id)

        if not bd.property_values:
            return

        value_resolver = BeanDefinitionValueResolver(self)
        for pv in bd.property_values:
            resolved = value_resolver.resolve_value_if_necessary(pv.value)

            try:
                descriptors = get_writable_properties(bean)
            except Exception as e:
                raise BeanCreationError(
                    f"Failed to introspect properties of {bd.class_name} "
                    f"for bean '{bean_id}': {e}",
                    bean_id=bean_id,
                ) from e

            descriptor = descriptors.get(pv.name)
            if descriptor is None:
                logger.debug(
                    "Bean '%s' has no writable property '%s'; value skipped",
                    bean_id, pv.name
                )
                continue

            try:
                converted = self.type_converter.convert_if_necessary(
                    resolved, descriptor.property_type
                )
                setattr(bean, pv.name, converted)
            except Exception as e:
                raise BeanCreationError(
                    f"Failed to set property '{pv.name}' on bean '{bean_id}': {e}",
                    bean_id=bean_id,
                ) from e

    # Autowiring

    def resolve_dependency(self, descriptor: DependencyDescriptor) -> Optional[Any]:
        """Find a bean whose class is assignable to the requested type.

        Definitions are scanned in the store's iteration order, which
        callers must treat as unspecified. When several beans match, the
        one whose id equals ``descriptor.name`` wins; otherwise the first
        match is returned. Ambiguity is not reported.

        Args:
            descriptor: The requested type and optional name hint

        Returns:
            The matching bean, or None when no definition matches

        Raises:
            ClassResolutionError: When a scanned definition's class cannot
                be loaded
        """
        type_to_match = descriptor.dependency_type
        first_match: Optional[str] = None

        for bean_id in self._definitions.names():
            bd = self._definitions.get(bean_id)
            if bd is None:
                continue
            bean_class = self.resolve_bean_class(bd)
            if not issubclass(bean_class, type_to_match):
                continue
            if descriptor.name is not None and bean_id == descriptor.name:
                return self.get_bean(bean_id)
            if first_match is None:
                first_match = bean_id

        if first_match is None:
            logger.debug("No bean assignable to %s", getattr(type_to_match, '__name__', type_to_match))
            return None
        return self.get_bean(first_match)

    # Post-processors

    def add_bean_post_processor(self, processor: BeanPostProcessor) -> None:
        """Append ``processor`` to the hook chain."""
        self._post_processors.add(processor)

    def get_bean_post_processors(self) -> List[BeanPostProcessor]:
        """The registered post-processors in insertion order."""
        return self._post_processors.processors()

    # Type loading

    def set_type_loader(self, type_loader: Optional[TypeLoader]) -> None:
        """Install the strategy used to load bean classes (None restores the default)."""
        self._type_loader = type_loader

    def get_type_loader(self) -> TypeLoader:
        if self._type_loader is None:
            self._type_loader = TypeLoader()
        return self._type_loader

    # Lifecycle

    def close(self) -> None:
        """Close the factory and release cached singletons.

        This method is idempotent - calling it multiple times has no effect.
        """
        if not self._closed:
            self._closed = True
            self._singletons.destroy_singletons()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __enter__(self) -> 'BeanFactory':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def __getitem__(self, bean_id: str) -> Any:
        """Support subscript syntax: factory["beanId"]."""
        return self.get_bean(bean_id)

    def __contains__(self, bean_id: str) -> bool:
        return self.contains_bean_definition(bean_id)
