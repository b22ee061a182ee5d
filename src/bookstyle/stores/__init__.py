"""Host collaborator protocols and in-memory implementations."""

from bookstyle.stores.base import LastValueStore, ThemeSource
from bookstyle.stores.memory import InMemoryDocument, InMemoryLastValueStore

__all__ = ["InMemoryDocument", "InMemoryLastValueStore", "LastValueStore", "ThemeSource"]
