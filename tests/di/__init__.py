"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .search import MockSearchProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockSearchProvider",
    "build_test_container",
]
