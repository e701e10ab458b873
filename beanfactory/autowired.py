"""
Autowired

Type-based field injection, driven by an instantiation-aware post-processor.

Mark class attributes with ``autowired()`` and annotate them with the type
to inject. Once ``AutowiredAnnotationProcessor`` is added to the factory,
every bean built by it gets those fields filled before its declared
property values are applied:

    class AccountService:
        dao: AccountDao = autowired()
        audit: Optional[AuditLog] = autowired(required=False)

    factory.add_bean_post_processor(AutowiredAnnotationProcessor(factory))
    factory.get_bean("accountService").dao  # the AccountDao bean

The candidate is found with ``BeanFactory.resolve_dependency()``. The field
name doubles as a hint: a bean whose id equals the field name is preferred
when several beans match the type.
"""

import logging
import threading
import types
import typing
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, TYPE_CHECKING

from .dependency import DependencyDescriptor
from .exceptions import BeanCreationError
from .introspection import resolve_type_hints
from .post_processor import InstantiationAwareBeanPostProcessor

if TYPE_CHECKING:
    from .factory import BeanFactory

logger = logging.getLogger(__name__)


class Autowired:
    """
    Descriptor marking a class attribute for injection by type.

    Until injected, reading the attribute on an instance returns None.
    Assigning to it (by the processor, or by hand in tests) stores the
    value on the instance.

    Attributes:
        required: Whether a missing candidate fails bean creation
    """

    def __init__(self, required: bool = True):
        self.required = required
        self._attr_name: Optional[str] = None

    def __set_name__(self, owner: Type, name: str) -> None:
        self._attr_name = name

    @property
    def name(self) -> Optional[str]:
        return self._attr_name

    def __get__(self, obj: Optional[object], objtype: Optional[Type] = None) -> Any:
        if obj is None:
            return self
        return obj.__dict__.get(self._attr_name)

    def __set__(self, obj: object, value: Any) -> None:
        obj.__dict__[self._attr_name] = value

    def __repr__(self) -> str:
        return f"Autowired(name={self._attr_name!r}, required={self.required})"


def autowired(required: bool = True) -> Any:
    """Mark the annotated class attribute for injection by type.

    Args:
        required: If True (default), creating the bean fails when no
            candidate of the annotated type exists

    Returns:
        An ``Autowired`` descriptor
    """
    return Autowired(required=required)


@dataclass(frozen=True)
class InjectedField:
    """One field to inject and what to inject into it"""
    name: str
    descriptor: DependencyDescriptor


class InjectionMetadata:
    """The autowired fields of one class."""

    def __init__(self, target_class: Type, fields: List[InjectedField]):
        self.target_class = target_class
        self.fields = fields

    def inject(self, target: Any, bean_factory: 'BeanFactory', bean_id: str) -> None:
        """Resolve every field's dependency and assign it on ``target``.

        Raises:
            BeanCreationError: When a required dependency has no candidate
        """
        for injected in self.fields:
            value = bean_factory.resolve_dependency(injected.descriptor)
            if value is None:
                if injected.descriptor.required:
                    type_name = injected.descriptor.dependency_type.__name__
                    raise BeanCreationError(
                        f"No bean of type {type_name} found for autowired field "
                        f"'{injected.name}' of bean '{bean_id}'.\n"
                        f"Hint: register a {type_name} bean, or use "
                        f"autowired(required=False).",
                        bean_id=bean_id,
                    )
                continue
            setattr(target, injected.name, value)
            logger.debug("Autowired '%s.%s'", bean_id, injected.name)


class AutowiredAnnotationProcessor(InstantiationAwareBeanPostProcessor):
    """Injects ``autowired()`` fields before property population.

    Injection metadata is computed once per class and cached.
    """

    def __init__(self, bean_factory: 'BeanFactory'):
        self.bean_factory = bean_factory
        self._metadata_cache: Dict[Type, InjectionMetadata] = {}
        self._lock = threading.Lock()

    def post_process_property_values(self, bean: Any, bean_id: str) -> None:
        metadata = self.build_autowiring_metadata(type(bean))
        metadata.inject(bean, self.bean_factory, bean_id)

    def build_autowiring_metadata(self, cls: Type) -> InjectionMetadata:
        """Collect the autowired fields of ``cls`` and its bases.

        Raises:
            BeanCreationError: When an autowired field has no usable type
                annotation
        """
        with self._lock:
            cached = self._metadata_cache.get(cls)
        if cached is not None:
            return cached

        try:
            hints = resolve_type_hints(cls)
        except (NameError, TypeError, AttributeError) as e:
            # Unresolvable fields are reported one by one by _field_type
            logger.debug("Type hints of %s unavailable: %s", cls.__name__, e)
            hints = {}
        fields: List[InjectedField] = []
        seen = set()
        for klass in cls.__mro__:
            for name, attr in vars(klass).items():
                if not isinstance(attr, Autowired) or name in seen:
                    continue
                seen.add(name)
                fields.append(InjectedField(
                    name=name,
                    descriptor=DependencyDescriptor(
                        dependency_type=self._field_type(cls, name, hints),
                        name=name,
                        required=attr.required,
                    ),
                ))

        metadata = InjectionMetadata(cls, fields)
        with self._lock:
            self._metadata_cache[cls] = metadata
        return metadata

    @staticmethod
    def _field_type(cls: Type, name: str, hints: Dict[str, Any]) -> Type:
        hint = hints.get(name)
        # Optional[X] -> X: optionality is expressed by required=False
        if typing.get_origin(hint) is typing.Union or isinstance(hint, getattr(types, 'UnionType', ())):
            members = [m for m in typing.get_args(hint) if m is not type(None)]
            hint = members[0] if len(members) == 1 else None
        if not isinstance(hint, type):
            raise BeanCreationError(
                f"Cannot determine the type of autowired field '{name}' on "
                f"{cls.__name__}. Annotate it with a class, e.g. "
                f"'{name}: MyService = autowired()'."
            )
        return hint
