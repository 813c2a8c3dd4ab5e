"""
Storage Services Package

Provides the abstract account storage interface, the flat-file
implementation and the in-memory store the flows work with.
"""

from src.services.storage.interface import (
    AccountStorageInterface,
    CorruptStoreError,
    StorageError,
)
from src.services.storage.csv_store import CsvAccountStorage
from src.services.storage.account_store import AccountStore

__all__ = [
    # Interfaces
    "AccountStorageInterface",
    # Exceptions
    "CorruptStoreError",
    "StorageError",
    # Implementations
    "AccountStore",
    "CsvAccountStorage",
]
