"""Observable recipe catalog store.

The store owns the state a presentation layer renders (recipes, whether
a fetch is running, and the last error message), drives the catalog
client, and publishes one snapshot per atomic state change.

It is meant to be driven from a single asyncio event loop. The
in-flight flag is checked and set before the first ``await``, which
is enough to keep at most one fetch running without a lock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from recipe_catalog.observability.logging import get_logger
from recipe_catalog.services.catalog.exceptions import (
    EmptyRecipesError,
    InvalidDataError,
)
from recipe_catalog.state.models import CatalogPhase, CatalogSnapshot


if TYPE_CHECKING:
    from collections.abc import Callable

    from recipe_catalog.services.catalog.protocol import RecipeCatalogProtocol
    from recipe_catalog.services.catalog.schemas import Recipe

    Listener = Callable[[CatalogSnapshot], None]


logger = get_logger(__name__)

MALFORMED_DATA_MESSAGE: Final[str] = (
    "The recipes data is malformed. Please try again later."
)
SIMULATED_ERROR_MESSAGE: Final[str] = "Failed to load recipes"


class RecipeCatalogStore:
    """State container for the remote recipe catalog.

    Example:
        ```python
        store = RecipeCatalogStore(client, endpoint=settings.catalog.url)
        unsubscribe = store.subscribe(render)

        try:
            await store.fetch_all()
        except RecipeCatalogError:
            show_retry_alert()
        ```
    """

    def __init__(self, service: RecipeCatalogProtocol, endpoint: str) -> None:
        """Initialize an idle, empty store.

        Args:
            service: Client used to fetch the catalog.
            endpoint: URL passed to the client on every fetch.
        """
        self._service = service
        self._endpoint = endpoint
        self._recipes: tuple[Recipe, ...] = ()
        self._is_fetching = False
        self._error_message: str | None = None
        self._has_completed = False
        self._listeners: list[Listener] = []

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def recipes(self) -> tuple[Recipe, ...]:
        return self._recipes

    @property
    def is_fetching(self) -> bool:
        return self._is_fetching

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def phase(self) -> CatalogPhase:
        """Phase derived from the three state fields."""
        if self._is_fetching:
            return CatalogPhase.LOADING
        if self._error_message is not None:
            return CatalogPhase.ERROR
        if not self._has_completed:
            return CatalogPhase.IDLE
        return CatalogPhase.READY

    def snapshot(self) -> CatalogSnapshot:
        """Return an immutable view of the current state."""
        return CatalogSnapshot(
            recipes=self._recipes,
            is_fetching=self._is_fetching,
            error_message=self._error_message,
            phase=self.phase,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every state change.

        Returns:
            A function that removes the listener. Calling it twice is a no-op.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def fetch_all(self) -> None:
        """Fetch the catalog and update state with the outcome.

        A call made while another fetch is in flight returns immediately
        without touching state.

        Raises:
            InvalidDataError: The payload was malformed; ``error_message``
                holds the fixed malformed-data message.
            Exception: Any other failure from the client (typically
                ``NetworkError``); ``error_message`` holds its description.
        """
        if self._is_fetching:
            logger.debug("Catalog fetch already in flight; ignoring request")
            return

        self._is_fetching = True
        self._error_message = None
        self._publish()

        logger.debug("Catalog fetch started", endpoint=self._endpoint)
        try:
            recipes = await self._service.fetch_recipes(self._endpoint)

        except EmptyRecipesError:
            self._recipes = ()
            self._has_completed = True
            logger.info("Catalog fetch returned no recipes")

        except InvalidDataError as e:
            self._recipes = ()
            self._error_message = MALFORMED_DATA_MESSAGE
            self._has_completed = True
            logger.warning("Catalog data is malformed", error=str(e))
            raise

        except Exception as e:
            self._recipes = ()
            self._error_message = str(e) or type(e).__name__
            self._has_completed = True
            logger.warning("Catalog fetch failed", error=self._error_message)
            raise

        else:
            self._recipes = tuple(recipes)
            self._has_completed = True
            logger.info("Catalog fetch completed", count=len(self._recipes))

        finally:
            self._is_fetching = False
            self._publish()

    # =========================================================================
    # Preview helpers
    # =========================================================================

    def simulate_loading(self) -> None:
        """Put the store in the loading phase without fetching."""
        self._is_fetching = True
        self._recipes = ()
        self._error_message = None
        self._publish()

    def simulate_error(self, message: str = SIMULATED_ERROR_MESSAGE) -> None:
        """Put the store in the error phase without fetching."""
        self._is_fetching = False
        self._recipes = ()
        self._error_message = message
        self._has_completed = True
        self._publish()

    def _publish(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Catalog state listener failed")
