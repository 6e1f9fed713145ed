"""Database infrastructure helpers (engine, sessions, column types)."""

from .base import Base
from .session import get_engine, get_session, init_db
from .types import CompressedText

__all__ = ["Base", "CompressedText", "get_engine", "get_session", "init_db"]
