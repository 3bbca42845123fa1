"""
URL storage strategies using Strategy Pattern.

URLStore defines the persistence contract the services depend on.
SQLAlchemyURLStore implements it on any SQLAlchemy-supported database
(SQLite by default).
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import ConflictError, StoreError
from shortlink_app.models.url import URL

logger = logging.getLogger("shortlink.storage")


class URLStore(ABC):
    """
    Abstract base class for URL stores.

    Implementations must enforce uniqueness of original_url and short_code
    themselves and report violations as ConflictError. Any other failure is
    reported as StoreError.
    """

    @abstractmethod
    def insert(self, original_url: str, short_code: str) -> URL:
        """
        Insert a new record with zero visits.

        Raises:
            ConflictError: original_url or short_code already exists
        """
        pass

    @abstractmethod
    def find_by_code(self, short_code: str) -> Optional[URL]:
        """Get record by short code, or None"""
        pass

    @abstractmethod
    def find_by_original_url(self, original_url: str) -> Optional[URL]:
        """Get record by original URL, or None"""
        pass

    @abstractmethod
    def increment_visits(self, url_id: int) -> None:
        """Atomically add one to the record's visit counter"""
        pass

    @abstractmethod
    def list_all(self) -> List[URL]:
        """All records, newest first"""
        pass


class SQLAlchemyURLStore(URLStore):
    """
    SQLAlchemy implementation of the URL store.

    Works with a request-scoped Session. Every write commits immediately;
    on error the session is rolled back so it stays usable for the
    read-after-conflict lookup in URLService.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _translate_errors(self, operation: str):
        """Roll back and convert SQLAlchemy errors to store errors"""
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"{operation}: uniqueness violation") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Store operation %s failed: %s", operation, e)
            raise StoreError(f"{operation} failed") from e

    def insert(self, original_url: str, short_code: str) -> URL:
        url = URL(original_url=original_url, short_code=short_code, visits=0)
        with self._translate_errors("insert"):
            self.db.add(url)
            self.db.commit()
            self.db.refresh(url)
        return url

    def find_by_code(self, short_code: str) -> Optional[URL]:
        with self._translate_errors("find_by_code"):
            return self.db.query(URL).filter(URL.short_code == short_code).first()

    def find_by_original_url(self, original_url: str) -> Optional[URL]:
        with self._translate_errors("find_by_original_url"):
            return self.db.query(URL).filter(URL.original_url == original_url).first()

    def increment_visits(self, url_id: int) -> None:
        # Single UPDATE ... SET visits = visits + 1, so concurrent hits don't lose counts
        with self._translate_errors("increment_visits"):
            self.db.execute(
                update(URL)
                .where(URL.id == url_id)
                .values(visits=URL.visits + 1)
            )
            self.db.commit()

    def list_all(self) -> List[URL]:
        with self._translate_errors("list_all"):
            return (
                self.db.query(URL)
                .order_by(URL.created_at.desc(), URL.id.desc())
                .all()
            )
