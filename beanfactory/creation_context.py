"""
CreationContext

Tracks which beans are currently being created, so a bean that ends up
requesting itself (directly or through other beans) fails fast with
CircularDependencyError instead of recursing until the stack runs out.

The chain lives in a ContextVar, so each thread (and each asyncio task)
sees only its own in-flight creations.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Tuple

from .exceptions import CircularDependencyError


@contextmanager
def in_creation(bean_id: str) -> Iterator[Tuple[str, ...]]:
    """Mark ``bean_id`` as being created for the duration of the block.

    Args:
        bean_id: The bean about to be instantiated

    Yields:
        The creation chain including ``bean_id``

    Raises:
        CircularDependencyError: When ``bean_id`` is already in the chain

    Example::

        with in_creation("beanA"):
            with in_creation("beanB"):
                with in_creation("beanA"):  # CircularDependencyError
                    ...
    """
    chain = _creation_chain.get()
    if bean_id in chain:
        cycle = " -> ".join(chain + (bean_id,))
        raise CircularDependencyError(
            f"Circular dependency detected: {cycle}",
            bean_id=bean_id,
        )

    token = _creation_chain.set(chain + (bean_id,))
    try:
        yield chain + (bean_id,)
    finally:
        _creation_chain.reset(token)


def current_chain() -> Tuple[str, ...]:
    """Bean ids currently being created in this context, outermost first."""
    return _creation_chain.get()


# Bean ids currently under construction in this context
_creation_chain: ContextVar[Tuple[str, ...]] = ContextVar(
    '_BEANFACTORY_CREATION_CHAIN',
    default=()
)
