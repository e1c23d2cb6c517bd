"""Module d'agrégation des compteurs d'un membre en XP par stat et en XP totale.

Le total ne somme que les stats principales : une sous-stat (agility, strength)
est déjà incluse dans sa stat parente (soma), l'ajouter une seconde fois
compterait deux fois les mêmes minutes.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from habitquest.features.progress.catalog import StatSchema


@dataclass(frozen=True, slots=True)
class StatTotal:
    """XP d'une stat principale et de ses sous-stats éventuelles."""

    name: str
    xp: int
    children: tuple["StatTotal", ...] = ()


def stat_xp(counters: Mapping[str, int], stat: str) -> int:
    """Retourne l'XP d'un compteur, 0 s'il est absent."""
    return int(counters.get(stat, 0) or 0)


def total_xp(counters: Mapping[str, int], schema: StatSchema) -> int:
    """Somme des stats principales du schéma (les sous-stats ne sont jamais rajoutées)."""
    return sum(stat_xp(counters, stat) for stat in schema.top_level)


def stat_breakdown(counters: Mapping[str, int], schema: StatSchema) -> list[StatTotal]:
    """Retourne l'XP de chaque stat principale, avec ses sous-stats imbriquées."""
    return [
        StatTotal(
            name=stat,
            xp=stat_xp(counters, stat),
            children=tuple(StatTotal(name=sub, xp=stat_xp(counters, sub)) for sub in schema.children(stat)),
        )
        for stat in schema.top_level
    ]
