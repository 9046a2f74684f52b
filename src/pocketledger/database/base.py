"""Abstract key-value store interface."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional


class Store(ABC):
    """Abstract key-value store for pocketledger.

    Values are JSON-compatible structures (dicts, lists, strings, numbers).
    Implementations must round-trip them losslessly.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the underlying storage."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the underlying storage."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get the value stored under key, or None if missing."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value under key, replacing any previous value."""
        pass

    @abstractmethod
    def set_many(self, values: Mapping[str, Any], delete: Iterable[str] = ()) -> None:
        """Store several values and remove keys in a single transaction.

        Either every change is applied or none is.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass
