"""Search index infrastructure providers."""

from dishka import Scope, provide

from commentary.adapter.search import HttpSearchIndexer
from commentary.config import Settings
from commentary.domain.service import SearchIndexer
from commentary.util.di.base import ProviderBase
from commentary.util.observability import instrument_httpx


class SearchProvider(ProviderBase):
    """Search index component base."""

    __mock_component__ = "search"


class ProdSearchProvider(SearchProvider):
    """Production search provider posting index jobs over HTTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_search_indexer(self, settings: Settings) -> SearchIndexer:
        """Provide search indexer.

        Without a configured endpoint signals are only logged.
        """
        if settings.search.endpoint:
            instrument_httpx()
        return HttpSearchIndexer(
            endpoint=settings.search.endpoint,
            timeout=settings.search.timeout,
        )
