from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Text
from shortlink_app.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class URL(Base):
    """
    Shortened URL record.

    Both original_url and short_code are unique at the database level, so
    concurrent inserts for the same URL or code fail with an IntegrityError.
    Only `visits` changes after insertion.
    """
    __tablename__ = "urls"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    original_url = Column(Text, unique=True, nullable=False)
    # Note: unique=True automatically creates an index in SQLAlchemy
    short_code = Column(String(32), unique=True, nullable=False, index=True)
    visits = Column(Integer, nullable=False, default=0)
    # Set in Python for microsecond resolution (SQLite CURRENT_TIMESTAMP is per-second)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return f"<URL id={self.id} short_code={self.short_code!r} visits={self.visits}>"
