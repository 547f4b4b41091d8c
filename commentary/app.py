"""Application bootstrap.

Configures logging and observability, then builds the DI container that
hands out use cases:

    container = bootstrap()
    async with container() as request:
        use_case = await request.get(CreateCommentUseCase)
        response = await use_case.execute(CreateCommentRequest(...))
"""

from dishka import AsyncContainer

from commentary.config import Settings
from commentary.util.di.container import create_container
from commentary.util.logging import setup_logging
from commentary.util.observability import configure_logfire


def bootstrap(settings: Settings | None = None) -> AsyncContainer:
    """Prepare the process and return the production container.

    Args:
        settings: Settings used for logging setup (loaded from environment if omitted)

    Returns:
        Production DI container
    """
    settings = settings or Settings()
    setup_logging(settings)
    configure_logfire(settings)
    return create_container()
