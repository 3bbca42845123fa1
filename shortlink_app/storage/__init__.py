"""
URL storage module.

This module implements the Strategy Pattern for pluggable URL persistence.
Services depend on the URLStore interface, not on SQLAlchemy directly.
"""

from .strategies import URLStore, SQLAlchemyURLStore

__all__ = [
    "URLStore",
    "SQLAlchemyURLStore",
]
