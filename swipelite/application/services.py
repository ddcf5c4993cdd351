"""
Service factories.

Wire the configured storage backend into an ``AppState``.
"""

from swipelite.application.state import AppState
from swipelite.config import get_logger
from swipelite.infrastructure.storage import CollectionRepository, create_store

logger = get_logger(__name__)


async def open_state(backend: str | None = None) -> AppState:
    """
    Load application state from the configured store.

    Callers own the result and should ``await state.close()`` when done.
    """
    store = create_store(backend)
    state = await AppState.load(CollectionRepository(store))
    logger.debug("app_state_opened", store=type(store).__name__)
    return state
