"""Mock search index provider for testing."""

from dishka import Scope, provide

from commentary.adapter.search import MockSearchIndexer
from commentary.domain.service import SearchIndexer
from commentary.util.di.infrastructure.search import SearchProvider


class MockSearchProvider(SearchProvider):
    """Records index signals instead of sending them."""

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_search_indexer(self) -> SearchIndexer:
        """Provide recording search indexer."""
        return MockSearchIndexer()
