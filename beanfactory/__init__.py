# Public API
import logging
from importlib.metadata import PackageNotFoundError, version

from .autowired import Autowired, AutowiredAnnotationProcessor, InjectionMetadata, autowired
from .definition import BeanDefinition
from .dependency import DependencyDescriptor
from .exceptions import (
    BeanCreationError,
    BeanDefinitionNotFoundError,
    BeanDefinitionStoreError,
    BeansError,
    CircularDependencyError,
    ClassResolutionError,
    ConstructorResolutionError,
    ContainerClosedError,
    ConversionError,
)
from .factory import BeanFactory
from .post_processor import BeanPostProcessor, InstantiationAwareBeanPostProcessor
from .reader import MappingBeanDefinitionReader
from .scope import BeanScope
from .type_converter import TypeConverter
from .type_loader import TypeLoader
from .values import PropertyValue, RuntimeBeanReference, TypedStringValue

__all__ = [
    "BeanFactory",
    "BeanDefinition",
    "BeanScope",
    "PropertyValue",
    "RuntimeBeanReference",
    "TypedStringValue",
    "DependencyDescriptor",
    "TypeConverter",
    "TypeLoader",
    "MappingBeanDefinitionReader",
    # Post-processors
    "BeanPostProcessor",
    "InstantiationAwareBeanPostProcessor",
    "Autowired",
    "AutowiredAnnotationProcessor",
    "InjectionMetadata",
    "autowired",
    # Exceptions
    "BeansError",
    "BeanDefinitionNotFoundError",
    "BeanDefinitionStoreError",
    "ClassResolutionError",
    "ConversionError",
    "BeanCreationError",
    "ConstructorResolutionError",
    "CircularDependencyError",
    "ContainerClosedError",
]

# The library never configures logging; applications attach handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version comes from the installed distribution metadata
try:
    __version__ = version("beanfactory")
except PackageNotFoundError:
    # Fallback for development (running from a source checkout)
    __version__ = '0.0.0'
