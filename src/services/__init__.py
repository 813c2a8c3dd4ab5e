"""Services package."""

from src.services.storage import (
    AccountStorageInterface,
    AccountStore,
    CorruptStoreError,
    CsvAccountStorage,
    StorageError,
)

__all__ = [
    "AccountStorageInterface",
    "AccountStore",
    "CorruptStoreError",
    "CsvAccountStorage",
    "StorageError",
]
