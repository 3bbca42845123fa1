import logging

from shortlink_app.exceptions import ShortCodeNotFoundError, StoreError
from shortlink_app.storage.strategies import URLStore

logger = logging.getLogger("shortlink.services.redirect")


class RedirectResolver:
    """Resolve short codes to destinations and count visits"""

    def __init__(self, store: URLStore):
        self.store = store

    def resolve(self, short_code: str) -> str:
        """
        Get the destination URL and record one visit.

        Visit counting is best-effort: if the increment fails, the failure
        is logged and the destination is still returned.

        Raises:
            ShortCodeNotFoundError: No record for short_code
            StoreError: The lookup itself failed
        """
        url = self.store.find_by_code(short_code)
        if url is None:
            raise ShortCodeNotFoundError(short_code)

        # Read before the increment commits and expires the instance
        destination = url.original_url
        url_id = url.id

        try:
            self.store.increment_visits(url_id)
        except StoreError:
            logger.warning("Failed to record visit for %s", short_code, exc_info=True)

        return destination
