"""
Flat-File Account Storage

DESIGN DECISION: Accounts are kept in a plain comma-separated file
(``usuarios.csv`` by default), one account per line:

    username,passwordDigestHex,PLAN_TIER_NAME

No header, no quoting, no escaping. Usernames therefore cannot contain
commas (the account model refuses them).

TRADEOFFS:
- Every save rewrites the whole file (fine for a single-user tool), staged
  in a temp file and swapped in so a failed write leaves the old one intact
- No locking: two processes writing at once will race
- Read/write failures are logged and swallowed; the in-memory state stays
  the source of truth for the rest of the session
"""

from pathlib import Path
from typing import Union

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.models.account import Account, PlanTier
from src.services.storage.interface import AccountStorageInterface, CorruptStoreError


FIELD_SEPARATOR = ","
RECORD_FIELDS = 3
STAGING_SUFFIX = ".tmp"

logger = structlog.get_logger(__name__)


def _split_record(line: str) -> list[str]:
    """
    Split one line into fields.

    Trailing empty fields are dropped, so ``alice,abc,`` has two fields
    and a blank line has none. Both are then skipped as malformed.
    """
    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


class CsvAccountStorage(AccountStorageInterface):
    """
    Comma-separated file implementation of account storage.

    Writes are retried on transient ``OSError`` before giving up. Text
    that cannot be encoded fails the save without retrying.
    """

    def __init__(self, path: Union[str, Path], retry_attempts: int = 3):
        self._path = Path(path)
        self._retry_attempts = retry_attempts

    @property
    def path(self) -> Path:
        return self._path

    def _row_to_account(self, fields: list[str], line_number: int) -> Account:
        username, digest, plan_name = fields
        try:
            plan_tier = PlanTier(plan_name)
        except ValueError:
            raise CorruptStoreError(
                f"Unknown plan tier '{plan_name}' on line {line_number} of {self._path}"
            )
        return Account(username=username, password_digest=digest, plan_tier=plan_tier)

    def _account_to_row(self, account: Account) -> str:
        return FIELD_SEPARATOR.join(account.to_record()) + "\n"

    def load_all(self) -> list[Account]:
        """Read every well-formed record. Malformed lines are skipped."""
        accounts = []
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                for line_number, line in enumerate(handle, start=1):
                    fields = _split_record(line)
                    if len(fields) != RECORD_FIELDS:
                        logger.debug(
                            "accounts_line_skipped",
                            path=str(self._path),
                            line_number=line_number,
                            field_count=len(fields),
                        )
                        continue
                    accounts.append(self._row_to_account(fields, line_number))
        except FileNotFoundError:
            logger.warning("accounts_file_missing", path=str(self._path))
        except (OSError, UnicodeDecodeError):
            logger.exception("accounts_load_failed", path=str(self._path))

        logger.debug("accounts_loaded", path=str(self._path), count=len(accounts))
        return accounts

    def _write(self, accounts: list[Account]) -> None:
        """Stage the rows in a sibling file, then swap it into place."""
        staging = self._path.with_name(self._path.name + STAGING_SUFFIX)
        for attempt in Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=0.1, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        ):
            with attempt:
                try:
                    with staging.open("w", encoding="utf-8", newline="\n") as handle:
                        handle.writelines(self._account_to_row(a) for a in accounts)
                    staging.replace(self._path)
                except (OSError, UnicodeError):
                    staging.unlink(missing_ok=True)
                    raise

    def save_all(self, accounts: list[Account]) -> bool:
        """Rewrite the file with exactly ``accounts``. The old file survives a failure."""
        try:
            self._write(accounts)
        except (OSError, UnicodeError):
            logger.exception(
                "accounts_save_failed",
                path=str(self._path),
                count=len(accounts),
            )
            return False

        logger.debug("accounts_saved", path=str(self._path), count=len(accounts))
        return True

    def upsert(self, account: Account) -> bool:
        """Reload the file, replace ``account`` by username and rewrite."""
        try:
            stored_accounts = self.load_all()
        except CorruptStoreError:
            # File went bad mid-session; leave it for a human to look at
            logger.exception(
                "accounts_upsert_skipped",
                path=str(self._path),
                username=account.username,
            )
            return False

        accounts = [
            stored for stored in stored_accounts
            if stored.username != account.username
        ]
        accounts.append(account)
        return self.save_all(accounts)
