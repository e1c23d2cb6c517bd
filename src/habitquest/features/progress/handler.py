"""Module des deux commandes de progression : journaliser des minutes et consulter ses stats.

Indépendant de Discord : la couche cog convertit les options de commande en dictionnaire,
appelle ces fonctions dans un thread et traduit les exceptions en messages.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from habitquest.exceptions.progress import InvalidMinutes, NoActivitySpecified, UnknownActivity
from habitquest.features.progress.aggregator import stat_breakdown, total_xp
from habitquest.features.progress.ledger import UserLedger
from habitquest.features.progress.levels import LevelProgress, compute_level_progress
from habitquest.features.progress.models import ActivityGrant

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LogResult:
    """Réponse de /log : gains par activité puis niveau total recalculé."""

    grants: tuple[ActivityGrant, ...]
    total_xp: int
    progress: LevelProgress


@dataclass(frozen=True, slots=True)
class StatLine:
    """Ligne d'affichage des stats ; `depth` vaut 1 pour une sous-stat."""

    name: str
    xp: int
    progress: LevelProgress
    depth: int = 0


@dataclass(frozen=True, slots=True)
class StatsSnapshot:
    """Réponse de /stats : niveau total et détail par stat."""

    username: str
    total: StatLine
    lines: tuple[StatLine, ...]


class ProgressCommandHandler:
    """Logique des commandes /log et /stats au-dessus d'un UserLedger."""

    def __init__(self, ledger: UserLedger) -> None:
        """Initialise le handler sur le registre d'XP."""
        self.ledger = ledger

    def requested_minutes(self, minutes_by_activity: Mapping[str, int | None]) -> list[tuple[str, int]]:
        """Valide la requête et retourne [(activité, minutes)] dans l'ordre du catalogue."""
        schema = self.ledger.schema
        requested: dict[str, int] = {}
        for name, minutes in minutes_by_activity.items():
            if not minutes:
                continue
            if minutes < 0:
                raise InvalidMinutes(name, minutes)
            if name not in schema.activities:
                raise UnknownActivity(name)
            requested[name] = int(minutes)

        if not requested:
            raise NoActivitySpecified()
        return [(name, requested[name]) for name in schema.activities if name in requested]

    def log_activities(
        self,
        guild_id: int,
        user_id: int,
        username: str | None,
        minutes_by_activity: Mapping[str, int | None],
    ) -> LogResult:
        """Crédite chaque activité renseignée et retourne le détail et le nouveau niveau total.

        Les activités sont créditées une à une : une panne du stockage au milieu
        laisse les premières écritures en place.
        """
        requested = self.requested_minutes(minutes_by_activity)

        self.ledger.get_or_create(guild_id, user_id, username)
        grants = tuple(
            self.ledger.credit_activity(guild_id, user_id, activity, minutes)
            for activity, minutes in requested
        )

        total = self.ledger.read_total(guild_id, user_id)
        log.info(
            "/log: %s activité(s) créditée(s) (guild_id=%s, user_id=%s, total=%s)",
            len(grants),
            guild_id,
            user_id,
            total,
        )
        return LogResult(grants=grants, total_xp=total, progress=compute_level_progress(total))

    def stats(self, guild_id: int, user_id: int, username: str) -> StatsSnapshot:
        """Retourne le niveau total et le niveau de chaque stat du membre, sans rien écrire."""
        schema = self.ledger.schema
        counters = self.ledger.read_counters(guild_id, user_id)
        total = total_xp(counters, schema)

        lines: list[StatLine] = []
        for stat in stat_breakdown(counters, schema):
            lines.append(StatLine(name=stat.name, xp=stat.xp, progress=compute_level_progress(stat.xp)))
            for child in stat.children:
                lines.append(
                    StatLine(name=child.name, xp=child.xp, progress=compute_level_progress(child.xp), depth=1)
                )

        return StatsSnapshot(
            username=username,
            total=StatLine(name="total", xp=total, progress=compute_level_progress(total)),
            lines=tuple(lines),
        )
