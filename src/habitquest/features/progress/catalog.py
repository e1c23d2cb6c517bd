"""Module du catalogue d'activités : activité -> (stat cible, multiplicateur).

Trois schémas de stats existent selon le déploiement :
- classic : Soma / Knowledge / Perception / Work ;
- tiered  : comme classic, avec Agility et Strength qui alimentent aussi Soma ;
- flat    : cinq compteurs d'activité, sans regroupement en stats.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Final

from habitquest.exceptions.progress import UnknownActivity


@dataclass(frozen=True, slots=True)
class Activity:
    """Activité journalisable, rattachée à exactement une stat avec un multiplicateur."""

    name: str
    stat: str
    multiplier: Fraction
    label: str


def _activity(name: str, stat: str, multiplier: str, label: str) -> Activity:
    # Fraction("0.7") est exact, contrairement à 0.7 en float.
    return Activity(name=name, stat=stat, multiplier=Fraction(multiplier), label=label)


def granted_xp(activity: Activity, minutes: int) -> int:
    """XP accordée = floor(minutes x multiplicateur), troncature et jamais arrondi."""
    if minutes < 0:
        raise ValueError("Minutes négatives interdites")
    return math.floor(minutes * activity.multiplier)


@dataclass(frozen=True, slots=True)
class StatSchema:
    """Ensemble des compteurs d'un déploiement et de la hiérarchie entre eux."""

    name: str
    top_level: tuple[str, ...]
    activities: Mapping[str, Activity]
    # sous-stat -> stat parente
    sub_stats: Mapping[str, str] = field(default_factory=dict)

    def counters(self) -> tuple[str, ...]:
        """Retourne tous les accumulateurs du schéma (stats principales puis sous-stats)."""
        return self.top_level + tuple(self.sub_stats)

    def has_counter(self, name: str) -> bool:
        """Indique si `name` est un accumulateur de ce schéma."""
        return name in self.top_level or name in self.sub_stats

    def children(self, stat: str) -> tuple[str, ...]:
        """Retourne les sous-stats qui alimentent `stat`."""
        return tuple(sub for sub, parent in self.sub_stats.items() if parent == stat)

    def ancestry(self, stat: str) -> tuple[str, ...]:
        """Retourne `stat` suivie de ses parents successifs (agility -> soma)."""
        chain = [stat]
        while chain[-1] in self.sub_stats:
            chain.append(self.sub_stats[chain[-1]])
        return tuple(chain)

    def activity(self, name: str) -> Activity:
        """Retourne l'activité `name`, ou lève UnknownActivity."""
        try:
            return self.activities[name]
        except KeyError:
            raise UnknownActivity(name) from None

    def targets(self, activity: Activity) -> tuple[str, ...]:
        """Compteurs crédités par une activité : sa stat puis chacun de ses parents."""
        return self.ancestry(activity.stat)


def _by_name(*activities: Activity) -> dict[str, Activity]:
    return {a.name: a for a in activities}


_CLASSIC_ACTIVITIES: Final[tuple[Activity, ...]] = (
    _activity("workout", "soma", "1.0", "Workout"),
    _activity("video", "knowledge", "0.7", "Video"),
    _activity("reading", "knowledge", "1.0", "Reading"),
    _activity("writing", "knowledge", "1.2", "Writing"),
    _activity("meditation", "perception", "1.0", "Meditation"),
    _activity("background_med", "perception", "0.2", "Background Med"),
    _activity("work", "work", "1.0", "Work"),
)

CLASSIC: Final[StatSchema] = StatSchema(
    name="classic",
    top_level=("soma", "knowledge", "perception", "work"),
    activities=_by_name(*_CLASSIC_ACTIVITIES),
)

TIERED: Final[StatSchema] = StatSchema(
    name="tiered",
    top_level=("soma", "knowledge", "perception", "work"),
    activities=_by_name(
        *_CLASSIC_ACTIVITIES,
        _activity("agility", "agility", "1.0", "Agility"),
        _activity("strength", "strength", "1.0", "Strength"),
    ),
    sub_stats={"agility": "soma", "strength": "soma"},
)

# Chaque activité est son propre compteur.
FLAT: Final[StatSchema] = StatSchema(
    name="flat",
    top_level=("workout", "reading", "writing", "meditation", "work"),
    activities=_by_name(
        _activity("workout", "workout", "1.0", "Workout"),
        _activity("reading", "reading", "1.0", "Reading"),
        _activity("writing", "writing", "1.0", "Writing"),
        _activity("meditation", "meditation", "1.0", "Meditation"),
        _activity("work", "work", "1.0", "Work"),
    ),
)

SCHEMAS: Final[dict[str, StatSchema]] = {s.name: s for s in (CLASSIC, TIERED, FLAT)}

# Union des noms d'activité, dans un ordre stable (options de la commande /log).
ALL_ACTIVITY_NAMES: Final[tuple[str, ...]] = tuple(
    dict.fromkeys(name for schema in SCHEMAS.values() for name in schema.activities)
)


def get_schema(name: str) -> StatSchema:
    """Retourne le schéma `name` (classic, tiered, flat), ou lève KeyError."""
    return SCHEMAS[name]
