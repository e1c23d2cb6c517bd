"""Module du registre d'XP : seul point d'écriture des compteurs d'un membre.

Le registre applique les règles du catalogue (stat cible, multiplicateur, parents)
et délègue la persistance à un `LedgerStore` (SQLite, JSON ou REST).
Il ne garde aucun état en mémoire : tout est relu depuis le stockage.
"""

import logging
from collections.abc import Callable

from habitquest.db.stores.base import LedgerStore
from habitquest.defaults import VOICE_LOG_ACTIVITY, VOICE_STAT
from habitquest.exceptions.progress import UnknownStat
from habitquest.features.progress.aggregator import total_xp
from habitquest.features.progress.catalog import StatSchema, granted_xp
from habitquest.features.progress.models import ActivityGrant, ActivityLogEntry, UserRecord
from habitquest.utils.timestamp import now_ts

log = logging.getLogger(__name__)


class UserLedger:
    """Registre persistant des compteurs d'XP par (serveur, membre)."""

    def __init__(self, store: LedgerStore, schema: StatSchema, *, clock: Callable[[], int] = now_ts) -> None:
        """Initialise le registre sur un backend et un schéma de stats ; `clock` donne l'heure en secondes."""
        self.store = store
        self.schema = schema
        self._clock = clock

    # -------------------- écriture --------------------
    def get_or_create(self, guild_id: int, user_id: int, username: str | None = None) -> UserRecord:
        """Retourne l'enregistrement du membre, créé avec tous les compteurs à 0 au premier appel."""
        return self.store.get_or_create(guild_id, user_id, username)

    def accumulate(self, guild_id: int, user_id: int, counter: str, delta: int) -> int:
        """Ajoute `delta` (>= 0) au compteur et retourne sa nouvelle valeur."""
        if delta < 0:
            raise ValueError("Un compteur d'XP ne peut pas diminuer")
        if not self.schema.has_counter(counter):
            raise UnknownStat(counter)
        return self.store.accumulate(guild_id, user_id, counter, delta)

    def credit_activity(
        self,
        guild_id: int,
        user_id: int,
        activity: str,
        minutes: int,
        *,
        now: int | None = None,
    ) -> ActivityGrant:
        """Crédite une activité : XP tronquée ajoutée à sa stat et à chaque parent, puis une ligne de journal."""
        entry = self.schema.activity(activity)
        xp = granted_xp(entry, minutes)
        targets = self.schema.targets(entry)

        for counter in targets:
            self.accumulate(guild_id, user_id, counter, xp)

        self.store.append_log(
            ActivityLogEntry(
                guild_id=guild_id,
                user_id=user_id,
                activity=activity,
                minutes=minutes,
                xp_gained=xp,
                logged_at=self._clock() if now is None else now,
            )
        )
        log.debug(
            "Activité créditée (guild_id=%s, user_id=%s, activity=%s, minutes=%s, xp=%s)",
            guild_id,
            user_id,
            activity,
            minutes,
            xp,
        )
        return ActivityGrant(activity=activity, minutes=minutes, xp=xp, stats=targets)

    def credit_voice_minutes(self, guild_id: int, user_id: int, minutes: int, *, now: int | None = None) -> int:
        """Crédite des minutes de vocal (1 XP par minute) sur la stat work et retourne l'XP ajoutée."""
        if minutes < 0:
            raise ValueError("Minutes négatives interdites")
        if not self.schema.has_counter(VOICE_STAT):
            raise UnknownStat(VOICE_STAT)

        for counter in self.schema.ancestry(VOICE_STAT):
            self.accumulate(guild_id, user_id, counter, minutes)

        self.store.append_log(
            ActivityLogEntry(
                guild_id=guild_id,
                user_id=user_id,
                activity=VOICE_LOG_ACTIVITY,
                minutes=minutes,
                xp_gained=minutes,
                logged_at=self._clock() if now is None else now,
            )
        )
        return minutes

    # -------------------- lecture --------------------
    def read_counters(self, guild_id: int, user_id: int) -> dict[str, int]:
        """Retourne les compteurs du membre, complétés à 0 pour ceux du schéma (ne crée rien)."""
        stored = self.store.read_all(guild_id, user_id)
        return {counter: int(stored.get(counter, 0) or 0) for counter in self.schema.counters()}

    def read_total(self, guild_id: int, user_id: int) -> int:
        """Retourne l'XP totale du membre (somme des stats principales)."""
        return total_xp(self.read_counters(guild_id, user_id), self.schema)
