"""
Test Fixtures

Common bean classes used across test modules
"""

from enum import Enum
from typing import Optional


class Database:
    """Test database bean with a no-arg constructor"""

    def __init__(self):
        self.name = "TestDB"


class CacheService:
    """Test cache bean"""

    def __init__(self):
        self.cache = {}


class AccountDao:
    """Bean injected through property values"""

    def __init__(self):
        self.database = None
        self.table = "accounts"


class AccountService:
    """Bean with typed and untyped writable properties"""

    max_retries: int = 0
    enabled: bool = False
    ratio: Optional[float] = None

    def __init__(self):
        self.dao = None
        self.owner = None


class Pool:
    """Bean built through constructor arguments"""

    def __init__(self, size: int, name: str = "default"):
        self.size = size
        self.name = name


class Repository:
    """Bean taking another bean in its constructor"""

    def __init__(self, db: Database, cache: CacheService):
        self.db = db
        self.cache = cache


class Friendly:
    """Bean referencing another bean through a property"""

    def __init__(self):
        self.friend = None


class CounterService:
    """Service with mutable state for testing singleton behavior"""

    def __init__(self):
        self.counter = 0

    def increment(self):
        self.counter += 1
        return self.counter


class Level(Enum):
    LOW = 1
    HIGH = 2


class Thermostat:
    """Bean with a setter property"""

    def __init__(self):
        self._target = 0.0
        self.level = Level.LOW

    @property
    def target(self) -> float:
        return self._target

    @target.setter
    def target(self, value: float):
        self._target = value

    @property
    def reading(self) -> float:
        return self._target


class NeedsArgument:
    """Bean without a zero-argument constructor"""

    def __init__(self, value: int):
        self.value = value


class Exploding:
    """Bean whose constructor always fails"""

    def __init__(self):
        raise RuntimeError("boom")


class Fragile:
    """Bean whose constructor rejects some arguments"""

    def __init__(self, value: int):
        if value < 0:
            raise ValueError("value must not be negative")
        self.value = value


class Pair:
    """Bean with two untyped constructor parameters"""

    def __init__(self, left, right):
        self.left = left
        self.right = right
