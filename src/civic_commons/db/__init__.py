# src/civic_commons/db/__init__.py
"""Database configuration and utilities."""

from .session import Base, SessionLocal, get_db

__all__ = ["Base", "get_db", "SessionLocal"]
