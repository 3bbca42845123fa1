import logging
from typing import List, Optional, Tuple

from shortlink_app.config import settings
from shortlink_app.exceptions import (
    CodeExhaustionError,
    ConflictError,
    InvalidURLError,
    MissingURLError,
)
from shortlink_app.models.url import URL
from shortlink_app.services.short_code_factory import ShortCodeFactory
from shortlink_app.services.short_code_strategies import ShortCodeStrategy
from shortlink_app.services.validators import is_valid_url
from shortlink_app.storage.strategies import URLStore

logger = logging.getLogger("shortlink.services.url")


class URLService:
    """
    Shortening service with the store and code strategy injected.

    - Store is injected (request-scoped, built by FastAPI dependencies)
    - Code strategy defaults to the one configured in settings
    - Easy to test (inject an in-memory session or a fixed strategy)
    """

    def __init__(
        self,
        store: URLStore,
        strategy: Optional[ShortCodeStrategy] = None,
        max_attempts: Optional[int] = None
    ):
        """
        Initialize URL service with dependencies.

        Args:
            store: URL store
            strategy: Short code strategy (defaults to factory/settings)
            max_attempts: Collision retry bound (defaults to settings)
        """
        self.store = store
        self.short_code_strategy = strategy or ShortCodeFactory.create_strategy()
        self.max_attempts = max_attempts or settings.max_code_attempts

    def shorten(self, original_url: Optional[str]) -> Tuple[URL, bool]:
        """Shorten a URL, reusing the existing record if it was shortened before

        Process:
        1. Reject missing input, then invalid input
        2. Return the existing record for this URL, if any
        3. Generate codes until one is free (bounded by max_attempts)
        4. Insert; if another request inserted the same URL first,
           return that record instead (read-after-conflict)

        Returns:
            (record, created) - created is False when an existing record was returned

        Raises:
            MissingURLError, InvalidURLError, CodeExhaustionError, StoreError
        """
        if not original_url:
            raise MissingURLError()

        if not is_valid_url(original_url):
            raise InvalidURLError(original_url)

        existing = self.store.find_by_original_url(original_url)
        if existing:
            return existing, False

        for attempt in range(1, self.max_attempts + 1):
            short_code = self.short_code_strategy.generate()

            if self.store.find_by_code(short_code):
                logger.info("Short code collision on %s (attempt %d)", short_code, attempt)
                continue

            try:
                url = self.store.insert(original_url, short_code)
            except ConflictError:
                # Lost a race: either the same URL was just shortened,
                # or the code was taken between the check and the insert
                winner = self.store.find_by_original_url(original_url)
                if winner:
                    logger.info("Concurrent shorten for %s, returning existing record", original_url)
                    return winner, False
                logger.info("Short code %s taken concurrently (attempt %d)", short_code, attempt)
                continue

            logger.info("Created short code %s for %s", url.short_code, url.original_url)
            return url, True

        logger.error(
            "Exhausted %d short code attempts (length %d)",
            self.max_attempts, self.short_code_strategy.length
        )
        raise CodeExhaustionError(self.max_attempts)

    def list_urls(self) -> List[URL]:
        """All shortened URLs, newest first"""
        return self.store.list_all()
