"""Backend fichier JSON : un seul document relu et réécrit à chaque opération.

Format :
    {
        "members": {"<guild_id>": {"<user_id>": {"username": ..., "counters": {...}}}},
        "activity_logs": [{"guild_id": ..., "user_id": ..., "activity": ..., ...}]
    }

Le verrou ne protège que ce processus : deux bots sur le même fichier se marcheraient dessus.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import asdict
from typing import Any

from habitquest.exceptions.progress import StoreUnavailable
from habitquest.features.progress.models import ActivityLogEntry, UserRecord, normalize_counters

log = logging.getLogger(__name__)


class JsonLedgerStore:
    """Stockage dans un fichier JSON local."""

    name = "json"

    def __init__(self, path: str) -> None:
        """Initialise le store sur le fichier `path` (créé au premier enregistrement)."""
        self.path = path
        self._lock = threading.Lock()

    # -------------------- fichier --------------------
    def _load(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except FileNotFoundError:
            return {"members": {}, "activity_logs": []}
        except (OSError, ValueError) as e:
            log.warning("JSON: lecture impossible de %s: %s", self.path, e)
            raise StoreUnavailable(self.name, str(e)) from e

        if not isinstance(data, dict):
            raise StoreUnavailable(self.name, "document racine invalide")
        data.setdefault("members", {})
        data.setdefault("activity_logs", [])
        self._check_shape(data)
        return data

    def _check_shape(self, data: dict[str, Any]) -> None:
        members = data["members"]
        if not isinstance(members, dict):
            raise StoreUnavailable(self.name, "'members' doit être un objet")
        if not isinstance(data["activity_logs"], list):
            raise StoreUnavailable(self.name, "'activity_logs' doit être une liste")
        for guild_key, guild in members.items():
            if not isinstance(guild, dict):
                raise StoreUnavailable(self.name, f"serveur {guild_key} invalide")
            for user_key, member in guild.items():
                if not isinstance(member, dict):
                    raise StoreUnavailable(self.name, f"membre {guild_key}/{user_key} invalide")
                counters = member.get("counters")
                if counters is not None and not isinstance(counters, dict):
                    raise StoreUnavailable(self.name, f"compteurs {guild_key}/{user_key} invalides")

    def _save(self, data: dict[str, Any]) -> None:
        directory = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".habitquest-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(data, file, indent=4)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            log.warning("JSON: écriture impossible de %s: %s", self.path, e)
            raise StoreUnavailable(self.name, str(e)) from e

    def _counters(self, member: dict[str, Any]) -> dict[str, int]:
        try:
            return normalize_counters(member.get("counters"))
        except (AttributeError, TypeError, ValueError) as e:
            raise StoreUnavailable(self.name, f"compteur invalide: {e}") from e

    @staticmethod
    def _member(data: dict[str, Any], guild_id: int, user_id: int) -> dict[str, Any] | None:
        return data["members"].get(str(guild_id), {}).get(str(user_id))

    @staticmethod
    def _ensure_member(data: dict[str, Any], guild_id: int, user_id: int, username: str | None) -> dict[str, Any]:
        guild = data["members"].setdefault(str(guild_id), {})
        return guild.setdefault(str(user_id), {"username": username, "counters": {}})

    # -------------------- LedgerStore --------------------
    def get_or_create(self, guild_id: int, user_id: int, username: str | None = None) -> UserRecord:
        with self._lock:
            data = self._load()
            member = self._member(data, guild_id, user_id)
            if member is None:
                member = self._ensure_member(data, guild_id, user_id, username)
                self._save(data)
        return UserRecord(
            guild_id=guild_id,
            user_id=user_id,
            counters=self._counters(member),
            username=member.get("username"),
        )

    def accumulate(self, guild_id: int, user_id: int, counter: str, delta: int) -> int:
        with self._lock:
            data = self._load()
            member = self._ensure_member(data, guild_id, user_id, None)
            new_value = self._counters(member).get(counter, 0) + int(delta)
            member["counters"] = member.get("counters") or {}
            member["counters"][counter] = new_value
            self._save(data)
        return new_value

    def read_all(self, guild_id: int, user_id: int) -> dict[str, int]:
        with self._lock:
            data = self._load()
        member = self._member(data, guild_id, user_id)
        return self._counters(member) if member else {}

    def append_log(self, entry: ActivityLogEntry) -> None:
        with self._lock:
            data = self._load()
            data["activity_logs"].append(asdict(entry))
            self._save(data)
