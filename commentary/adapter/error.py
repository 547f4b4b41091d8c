"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class SearchIndexError(AdapterError):
    """Search indexing service error."""

    pass
