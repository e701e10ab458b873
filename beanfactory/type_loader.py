"""
TypeLoader

Default strategy for turning a declared class name into a class.

Class names are dotted import paths. Nested classes are supported::

    loader = TypeLoader()
    loader.load_class("collections.OrderedDict")
    loader.load_class("app.services.Outer.Inner")
"""

import importlib
import logging
from typing import Type, Union

from .exceptions import ClassResolutionError

logger = logging.getLogger(__name__)


class TypeLoader:
    """Loads classes by dotted name using ``importlib``.

    Subclass and override ``load_class`` to resolve names some other way
    (an explicit alias table, a plugin registry, ...), then install the
    loader with ``BeanFactory.set_type_loader()``.
    """

    def load_class(self, class_name: Union[str, Type]) -> Type:
        """Load the class named by ``class_name``.

        The longest importable module prefix is imported, and the rest
        of the path is looked up as attributes on it.

        Args:
            class_name: Dotted path, or a class (returned as-is)

        Returns:
            The loaded class

        Raises:
            ClassResolutionError: When no class can be found for the name
        """
        if isinstance(class_name, type):
            return class_name
        if not isinstance(class_name, str) or not class_name.strip():
            raise ClassResolutionError(
                f"Cannot load class from {class_name!r}. "
                f"Hint: use a dotted path such as 'package.module.ClassName'."
            )

        parts = class_name.strip().split('.')
        for split in range(len(parts) - 1, 0, -1):
            module_name = '.'.join(parts[:split])
            try:
                target = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                # Only a missing prefix means "try a shorter one"
                if e.name and (module_name == e.name or module_name.startswith(e.name + '.')):
                    continue
                raise ClassResolutionError(
                    f"Cannot load class '{class_name}': importing '{module_name}' failed: {e}"
                ) from e
            except ImportError as e:
                raise ClassResolutionError(
                    f"Cannot load class '{class_name}': importing '{module_name}' failed: {e}"
                ) from e

            try:
                for attr in parts[split:]:
                    target = getattr(target, attr)
            except AttributeError as e:
                raise ClassResolutionError(
                    f"Cannot load class '{class_name}': module '{module_name}' "
                    f"has no attribute path '{'.'.join(parts[split:])}'."
                ) from e

            if not isinstance(target, type):
                raise ClassResolutionError(
                    f"Cannot load class '{class_name}': it resolves to "
                    f"{type(target).__name__}, not a class."
                )
            logger.debug("Loaded class %s", class_name)
            return target

        raise ClassResolutionError(
            f"Cannot load class '{class_name}': no importable module found. "
            f"Hint: use the fully qualified name, e.g. 'package.module.ClassName'."
        )
