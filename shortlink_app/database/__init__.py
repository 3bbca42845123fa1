"""
Database engine, session factory and declarative base.
"""

from .connection import Base, SessionLocal, engine, get_db, init_db

__all__ = ["Base", "SessionLocal", "engine", "get_db", "init_db"]
