"""Backend SQLite : délègue aux fonctions du repo et convertit les erreurs sqlite3."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from habitquest.db.repo import ledger_repo
from habitquest.exceptions.progress import StoreUnavailable
from habitquest.features.progress.models import ActivityLogEntry, UserRecord
from habitquest.utils.timestamp import now_ts

log = logging.getLogger(__name__)


class SqliteLedgerStore:
    """Stockage dans la base SQLite locale (tables progress_members / progress_counters / activity_logs)."""

    name = "sqlite"

    @contextmanager
    def _guard(self, operation: str, guild_id: int, user_id: int) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as e:
            log.warning("SQLite: échec de %s (guild_id=%s, user_id=%s): %s", operation, guild_id, user_id, e)
            raise StoreUnavailable(self.name, str(e)) from e

    def get_or_create(self, guild_id: int, user_id: int, username: str | None = None) -> UserRecord:
        with self._guard("get_or_create", guild_id, user_id):
            stored_name, counters = ledger_repo.ledger_get_or_create(
                guild_id, user_id, username=username, created_at=now_ts()
            )
        return UserRecord(guild_id=guild_id, user_id=user_id, counters=counters, username=stored_name)

    def accumulate(self, guild_id: int, user_id: int, counter: str, delta: int) -> int:
        with self._guard("accumulate", guild_id, user_id):
            return ledger_repo.ledger_accumulate(guild_id, user_id, counter, delta)

    def read_all(self, guild_id: int, user_id: int) -> dict[str, int]:
        with self._guard("read_all", guild_id, user_id):
            return ledger_repo.ledger_read_counters(guild_id, user_id)

    def append_log(self, entry: ActivityLogEntry) -> None:
        with self._guard("append_log", entry.guild_id, entry.user_id):
            ledger_repo.ledger_append_log(
                entry.guild_id,
                entry.user_id,
                entry.activity,
                entry.minutes,
                entry.xp_gained,
                entry.logged_at,
            )
