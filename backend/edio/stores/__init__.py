"""Project and user store ports and their implementations."""
from edio.stores.base import ProjectStore, UserStore, UPDATABLE_FIELDS
from edio.stores.memory import InMemoryProjectStore, InMemoryUserStore
from edio.stores.sql import SqlProjectStore, SqlUserStore

__all__ = [
    "ProjectStore",
    "UserStore",
    "UPDATABLE_FIELDS",
    "InMemoryProjectStore",
    "InMemoryUserStore",
    "SqlProjectStore",
    "SqlUserStore",
]
