from __future__ import annotations

from habitquest.exceptions.progress import StoreUnavailable
from habitquest.features.progress.models import ActivityLogEntry, UserRecord


class MemoryLedgerStore:
    """LedgerStore en mémoire, avec enregistrement des appels et pannes injectables."""

    name = "memory"

    def __init__(self):
        self.members: dict[tuple[int, int], dict] = {}
        self.logs: list[ActivityLogEntry] = []
        self.calls: list[tuple] = []
        # nom d'opération -> nombre d'appels réussis avant la panne
        self.fail_after: dict[str, int] = {}

    def _maybe_fail(self, op: str) -> None:
        if op not in self.fail_after:
            return
        if self.fail_after[op] <= 0:
            raise StoreUnavailable(self.name, f"{op} en panne")
        self.fail_after[op] -= 1

    def get_or_create(self, guild_id, user_id, username=None):
        self.calls.append(("get_or_create", guild_id, user_id, username))
        self._maybe_fail("get_or_create")
        member = self.members.setdefault((guild_id, user_id), {"username": username, "counters": {}})
        return UserRecord(guild_id, user_id, dict(member["counters"]), member["username"])

    def accumulate(self, guild_id, user_id, counter, delta):
        self.calls.append(("accumulate", guild_id, user_id, counter, delta))
        self._maybe_fail("accumulate")
        member = self.members.setdefault((guild_id, user_id), {"username": None, "counters": {}})
        member["counters"][counter] = member["counters"].get(counter, 0) + delta
        return member["counters"][counter]

    def read_all(self, guild_id, user_id):
        self.calls.append(("read_all", guild_id, user_id))
        self._maybe_fail("read_all")
        member = self.members.get((guild_id, user_id))
        return dict(member["counters"]) if member else {}

    def append_log(self, entry):
        self.calls.append(("append_log", entry.activity, entry.minutes, entry.xp_gained))
        self._maybe_fail("append_log")
        self.logs.append(entry)

    def write_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("get_or_create", "accumulate", "append_log")]
