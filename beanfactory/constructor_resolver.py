"""
ConstructorResolver

Builds beans whose definitions declare constructor arguments.
"""

import logging
from typing import Any, List, Type, TYPE_CHECKING

from .definition import BeanDefinition
from .exceptions import ConstructorResolutionError, ConversionError
from .introspection import ParameterDescriptor, get_constructor_parameters
from .value_resolver import BeanDefinitionValueResolver

if TYPE_CHECKING:
    from .factory import BeanFactory

logger = logging.getLogger(__name__)


class ConstructorResolver:
    """Selects and invokes a constructor for declared constructor arguments.

    A Python class has a single ``__init__``, but parameters with defaults
    let it accept a range of argument counts. The constructor matches when
    the number of declared arguments lies within that range. A ``*args``
    parameter lifts the upper bound.

    Example::

        class Pool:
            def __init__(self, name: str, size: int = 10):
                ...

        # Both match: ("main",) and ("main", "42")
    """

    def __init__(self, bean_factory: 'BeanFactory'):
        self.bean_factory = bean_factory

    def autowire_constructor(self, bd: BeanDefinition) -> Any:
        """Resolve, convert and pass the declared arguments to the constructor.

        Args:
            bd: A definition with constructor argument values

        Returns:
            The new (not yet populated) instance

        Raises:
            ClassResolutionError: When the bean class cannot be loaded
            ConstructorResolutionError: When no constructor accepts the
                arguments, an argument cannot be converted, or the
                constructor raises
        """
        bean_class = self.bean_factory.resolve_bean_class(bd)
        value_resolver = BeanDefinitionValueResolver(self.bean_factory)
        converter = self.bean_factory.type_converter

        resolved = [
            value_resolver.resolve_value_if_necessary(value)
            for value in bd.constructor_argument_values
        ]

        parameters = self._find_matching_parameters(bd, bean_class, len(resolved))

        try:
            args = [
                converter.convert_if_necessary(value, param.parameter_type)
                for value, param in zip(resolved, parameters)
            ]
        except ConversionError as e:
            raise ConstructorResolutionError(
                f"Cannot convert constructor arguments for bean '{bd.id}' "
                f"({bd.class_name}): {e}",
                bean_id=bd.id,
            ) from e

        try:
            instance = bean_class(*args)
        except Exception as e:
            raise ConstructorResolutionError(
                f"Constructor of {bd.class_name} raised while creating bean "
                f"'{bd.id}': {e}",
                bean_id=bd.id,
            ) from e

        logger.debug("Instantiated bean '%s' with %d constructor argument(s)", bd.id, len(args))
        return instance

    def _find_matching_parameters(
        self,
        bd: BeanDefinition,
        bean_class: Type,
        arg_count: int
    ) -> List[ParameterDescriptor]:
        try:
            parameters = get_constructor_parameters(bean_class)
        except (ValueError, TypeError, NameError, AttributeError) as e:
            raise ConstructorResolutionError(
                f"Cannot inspect {bd.class_name}.__init__ for bean '{bd.id}': {e}",
                bean_id=bd.id,
            ) from e

        fixed = [p for p in parameters if not p.variadic]
        variadic = next((p for p in parameters if p.variadic), None)
        required = sum(1 for p in fixed if not p.has_default)
        too_many = variadic is None and arg_count > len(fixed)
        if arg_count < required or too_many:
            signature = ", ".join(
                f"*{p.name}" if p.variadic else p.name for p in parameters
            ) or "no parameters"
            raise ConstructorResolutionError(
                f"No constructor of {bd.class_name} accepts {arg_count} argument(s) "
                f"for bean '{bd.id}'. Constructor takes: {signature}",
                bean_id=bd.id,
            )
        if arg_count <= len(fixed):
            return fixed[:arg_count]
        # Extra arguments all land in *args and share its annotation
        return fixed + [variadic] * (arg_count - len(fixed))
