"""Persistent scheduler state implementations."""

from .engine import create_state_engine, create_state_tables, setup_database_url
from .memory import InMemoryPersistentState
from .sql_state import SqlPersistentState

__all__ = [
    "InMemoryPersistentState",
    "SqlPersistentState",
    "create_state_engine",
    "create_state_tables",
    "setup_database_url",
]
