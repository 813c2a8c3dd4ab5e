"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for account storage.
This allows us to:
1. Keep the flows decoupled from the file format
2. Use in-memory fakes in tests
3. Swap the flat file for something sturdier later

Only accounts are stored. Meetings never leave the session.
"""

from abc import ABC, abstractmethod

from src.models.account import Account


class AccountStorageInterface(ABC):
    """
    Abstract interface for account storage operations.

    Implementations treat I/O failures as best-effort: they are logged and
    reported through return values, never raised. Corrupt data is the one
    exception and raises ``CorruptStoreError``.
    """

    @abstractmethod
    def load_all(self) -> list[Account]:
        """
        Load every stored account.

        Returns:
            Accounts in stored order, or an empty list if the store
            could not be read

        Raises:
            CorruptStoreError: If a record names an unknown plan tier
        """
        pass

    @abstractmethod
    def save_all(self, accounts: list[Account]) -> bool:
        """
        Replace the stored accounts with ``accounts``.

        Returns:
            True if written successfully
        """
        pass

    @abstractmethod
    def upsert(self, account: Account) -> bool:
        """
        Store one account, replacing any stored account with the same
        username (last write wins).

        Returns:
            True if written successfully
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStoreError(StorageError):
    """The store holds a record that cannot be understood. Fatal at startup."""
    pass
