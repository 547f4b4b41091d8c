"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .search import SearchProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .search import ProdSearchProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdSearchProvider",
    "SearchProvider",
]
