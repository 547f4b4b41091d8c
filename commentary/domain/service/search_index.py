"""Search indexing signal contract."""

from abc import ABC, abstractmethod

from commentary.domain.value import IndexAction, IndexSignal


class SearchIndexer(ABC):
    """Outbound channel to the external search indexing system.

    Signals are fire-and-forget: ``emit`` returns immediately, delivery
    and retries belong to the implementation, and delivery failures never
    reach the caller.
    """

    @abstractmethod
    def emit(self, signal: IndexSignal) -> None:
        """Hand a signal to the indexing system without waiting for it."""
        pass

    def index(self, record_type: str, index_key: str) -> None:
        """Ask for a record to be (re)indexed under ``index_key``."""
        self.emit(IndexSignal(action=IndexAction.INDEX, target=record_type, key=index_key))

    def remove(self, index_name: str, index_key: str) -> None:
        """Ask for a key to be removed from an index."""
        self.emit(IndexSignal(action=IndexAction.REMOVE, target=index_name, key=index_key))
