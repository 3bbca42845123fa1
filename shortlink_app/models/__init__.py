"""
Database models for URL shortener.

A single table: each record maps one original URL to one short code.
"""

from .url import URL

__all__ = ["URL"]
