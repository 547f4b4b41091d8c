"""Search indexing adapters."""

from .indexer import HttpSearchIndexer, MockSearchIndexer

__all__ = ["HttpSearchIndexer", "MockSearchIndexer"]
