"""
BeanScope Enum

Defines the lifetime of beans
"""

from enum import Enum

from .exceptions import BeanDefinitionStoreError


class BeanScope(Enum):
    """Lifetime of beans"""
    SINGLETON = "singleton"
    PROTOTYPE = "prototype"

    @classmethod
    def from_token(cls, token: str) -> 'BeanScope':
        """Parse a scope token as it appears in configuration records.

        An empty token means the default scope (singleton).

        Raises:
            BeanDefinitionStoreError: When the token names no known scope
        """
        if not token:
            return cls.SINGLETON
        try:
            return cls(token.strip().lower())
        except ValueError:
            raise BeanDefinitionStoreError(
                f"Unknown scope '{token}'. "
                f"Expected one of: {', '.join(s.value for s in cls)}"
            ) from None
