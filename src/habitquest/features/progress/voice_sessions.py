"""Module de suivi des sessions vocales : minutes passées dans un salon suivi -> XP Work.

Machine à deux états par (serveur, membre) :
- arrivée dans un salon suivi (depuis rien ou un salon non suivi) : ouverture de session ;
- départ vers rien ou un salon non suivi : fermeture et crédit des minutes entières.
Un déplacement entre deux salons suivis ne change rien.

Les sessions ouvertes ne vivent qu'en mémoire : un redémarrage les perd.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from habitquest.features.progress.ledger import UserLedger
from habitquest.features.progress.levels import LevelProgress, compute_level_progress
from habitquest.utils.timestamp import elapsed_minutes, now_ms

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VoiceCredit:
    """Résultat de la fermeture d'une session créditée."""

    minutes: int
    total_xp: int
    progress: LevelProgress


class VoiceSessionTracker:
    """Sessions vocales ouvertes, indexées par (guild_id, user_id)."""

    def __init__(
        self,
        ledger: UserLedger,
        tracked_channel_ids: Iterable[int],
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialise le suivi ; `clock` retourne l'heure courante en millisecondes."""
        self.ledger = ledger
        self.tracked_channel_ids = frozenset(int(cid) for cid in tracked_channel_ids)
        self._clock = clock
        self._sessions: dict[tuple[int, int], int] = {}
        self._lock = threading.Lock()

    def is_tracked(self, channel_id: int | None) -> bool:
        """Indique si `channel_id` fait partie des salons suivis."""
        return channel_id is not None and channel_id in self.tracked_channel_ids

    def discard_all(self) -> int:
        """Oublie toutes les sessions ouvertes (sans créditer) et retourne leur nombre."""
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        return count

    def on_membership_change(
        self,
        guild_id: int,
        user_id: int,
        before_channel_id: int | None,
        after_channel_id: int | None,
    ) -> VoiceCredit | None:
        """Applique un changement de salon vocal et retourne le crédit éventuel.

        Retourne None si rien n'a été crédité (arrivée, déplacement, session trop courte).
        Une erreur de stockage pendant le crédit est propagée ; la session est alors perdue.
        """
        was_tracked = self.is_tracked(before_channel_id)
        is_tracked = self.is_tracked(after_channel_id)
        key = (guild_id, user_id)

        if is_tracked and not was_tracked:
            with self._lock:
                self._sessions[key] = self._clock()
            log.debug("Session vocale ouverte (guild_id=%s, user_id=%s, channel_id=%s)", guild_id, user_id, after_channel_id)
            return None

        if not was_tracked or is_tracked:
            return None

        # Départ d'un salon suivi : la session est retirée avant toute écriture.
        with self._lock:
            joined_ms = self._sessions.pop(key, None)
        if joined_ms is None:
            return None

        minutes = elapsed_minutes(joined_ms, self._clock())
        if minutes < 1:
            log.debug("Session vocale trop courte ignorée (guild_id=%s, user_id=%s)", guild_id, user_id)
            return None

        self.ledger.credit_voice_minutes(guild_id, user_id, minutes)
        total = self.ledger.read_total(guild_id, user_id)
        progress = compute_level_progress(total)
        log.info("XP vocal: %s min créditées (guild_id=%s, user_id=%s)", minutes, guild_id, user_id)
        return VoiceCredit(minutes=minutes, total_xp=total, progress=progress)
