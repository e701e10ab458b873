"""
DependencyDescriptor

Describes a dependency to be satisfied by type rather than by bean id.
Only ``BeanFactory.resolve_dependency()`` consumes it.
"""

from dataclasses import dataclass
from typing import Optional, Type


@dataclass(frozen=True)
class DependencyDescriptor:
    """A dependency requested by type

    Attributes:
        dependency_type: The class (or base class) the candidate must be
        name: Optional hint, usually the field name. A candidate whose
            bean id equals the hint is preferred over the first match.
        required: Whether an unsatisfied dependency is an error for the
            caller. ``resolve_dependency`` itself only returns None.
    """
    dependency_type: Type
    name: Optional[str] = None
    required: bool = True
