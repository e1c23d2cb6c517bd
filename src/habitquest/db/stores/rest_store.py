"""Backend REST : base Supabase interrogée via PostgREST avec httpx.

Tables et fonction RPC attendues côté serveur : voir `sql/supabase_schema.sql`.
L'incrément passe par la RPC `progress_accumulate`, qui fait l'upsert + incrément
en une seule requête SQL ; PostgREST seul ne sait pas faire `xp = xp + ?`.
"""

import logging
from typing import Any

import httpx

from habitquest.exceptions.progress import StoreUnavailable
from habitquest.features.progress.models import ActivityLogEntry, UserRecord
from habitquest.utils.timestamp import now_ts

log = logging.getLogger(__name__)

_DEFAULT_PREFER = "return=representation"


class RestLedgerStore:
    """Stockage distant (Supabase / PostgREST)."""

    name = "rest"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialise le client HTTP vers `<base_url>/rest/v1/` avec la clé d'API fournie."""
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/rest/v1/",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Ferme le client HTTP sous-jacent."""
        self._client.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str = _DEFAULT_PREFER,
    ) -> Any:
        """Exécute une requête et retourne le JSON décodé (None si corps vide).

        Toute erreur réseau, réponse non-2xx ou corps illisible lève StoreUnavailable.
        Aucune nouvelle tentative n'est faite.
        """
        try:
            response = self._client.request(method, endpoint, params=params, json=json, headers={"Prefer": prefer})
        except httpx.HTTPError as e:
            log.warning("REST: %s %s a échoué: %s", method, endpoint, e)
            raise StoreUnavailable(self.name, str(e)) from e

        if response.is_error:
            log.warning("REST: %s %s -> %s %s", method, endpoint, response.status_code, response.text[:200])
            raise StoreUnavailable(self.name, f"HTTP {response.status_code}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            log.warning("REST: réponse illisible pour %s %s", method, endpoint)
            raise StoreUnavailable(self.name, "réponse JSON invalide") from e

    @staticmethod
    def _member_filter(guild_id: int, user_id: int) -> dict[str, str]:
        return {"guild_id": f"eq.{guild_id}", "user_id": f"eq.{user_id}"}

    # -------------------- LedgerStore --------------------
    def get_or_create(self, guild_id: int, user_id: int, username: str | None = None) -> UserRecord:
        # La contrainte d'unicité (guild_id, user_id) rend l'insertion idempotente.
        self._request(
            "POST",
            "progress_members",
            params={"on_conflict": "guild_id,user_id"},
            json={"guild_id": guild_id, "user_id": user_id, "username": username, "created_at": now_ts()},
            prefer="resolution=ignore-duplicates,return=minimal",
        )
        rows = self._request(
            "GET",
            "progress_members",
            params={**self._member_filter(guild_id, user_id), "select": "username"},
        )
        stored_name = rows[0].get("username") if isinstance(rows, list) and rows else username
        return UserRecord(
            guild_id=guild_id,
            user_id=user_id,
            counters=self.read_all(guild_id, user_id),
            username=stored_name,
        )

    def accumulate(self, guild_id: int, user_id: int, counter: str, delta: int) -> int:
        data = self._request(
            "POST",
            "rpc/progress_accumulate",
            json={"p_guild_id": guild_id, "p_user_id": user_id, "p_counter": counter, "p_delta": int(delta)},
        )
        if isinstance(data, bool) or not isinstance(data, int):
            raise StoreUnavailable(self.name, f"réponse inattendue de progress_accumulate: {data!r}")
        return data

    def read_all(self, guild_id: int, user_id: int) -> dict[str, int]:
        rows = self._request(
            "GET",
            "progress_counters",
            params={**self._member_filter(guild_id, user_id), "select": "counter,xp"},
        )
        if rows is None:
            return {}
        if not isinstance(rows, list):
            raise StoreUnavailable(self.name, "liste de compteurs attendue")
        try:
            return {str(row["counter"]): int(row.get("xp") or 0) for row in rows}
        except (KeyError, TypeError, ValueError) as e:
            raise StoreUnavailable(self.name, "ligne de compteur invalide") from e

    def append_log(self, entry: ActivityLogEntry) -> None:
        self._request(
            "POST",
            "activity_logs",
            json={
                "guild_id": entry.guild_id,
                "user_id": entry.user_id,
                "activity": entry.activity,
                "minutes": entry.minutes,
                "xp_gained": entry.xp_gained,
                "logged_at": entry.logged_at,
            },
            prefer="return=minimal",
        )
