"""
Account Store

Owns the in-memory account collection for one console session and is the
only thing the flows talk to for persistence.

Lifecycle:
1. ``load()`` once at startup (a corrupt file raises here)
2. Flows mutate accounts in memory
3. ``flush()`` rewrites the whole file, ``persist()`` upserts one account
"""

from typing import Optional

import structlog

from src.models.account import Account
from src.services.storage.interface import AccountStorageInterface


logger = structlog.get_logger(__name__)


class AccountStore:
    """In-memory account collection backed by an ``AccountStorageInterface``."""

    def __init__(self, storage: AccountStorageInterface):
        self._storage = storage
        self._accounts: list[Account] = []

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def load(self) -> None:
        """
        Replace the collection with what the storage holds.

        Raises:
            CorruptStoreError: Propagated from the storage
        """
        self._accounts = self._storage.load_all()

    def flush(self) -> bool:
        """Write the whole collection back."""
        return self._storage.save_all(self._accounts)

    def persist(self, account: Account) -> bool:
        """Write a single account through the storage upsert path."""
        return self._storage.upsert(account)

    def find(self, username: str) -> Optional[Account]:
        for account in self._accounts:
            if account.username == username:
                return account
        return None

    def add(self, account: Account) -> tuple[bool, bool]:
        """
        Add an account, replacing any account with the same username.

        Returns:
            (saved, replaced_existing)
        """
        replaced = self.find(account.username) is not None
        if replaced:
            logger.warning("account_replaced", username=account.username)
            self._accounts = [
                a for a in self._accounts if a.username != account.username
            ]
        self._accounts.append(account)
        return self.flush(), replaced

    def matching_accounts(self, username: str, password: str) -> list[Account]:
        """Every account with this username whose digest matches the password."""
        return [
            account for account in self._accounts
            if account.username == username and account.check_password(password)
        ]
