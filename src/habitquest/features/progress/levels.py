"""Module de logique métier pour le calcul du niveau à partir de l'XP cumulée.

Courbe triangulaire : passer le k-ième niveau coûte k * 100 XP
(100, puis 200, puis 300, ...), donc 0 -> Level 1, 100 -> Level 2, 300 -> Level 3.
"""

import math
from dataclasses import dataclass

from habitquest.defaults import LEVEL_BASE, LEVEL_STEP_XP


@dataclass(frozen=True, slots=True)
class LevelProgress:
    """Niveau atteint et progression dans ce niveau (jamais stocké, toujours recalculé)."""

    level: int
    current_xp: int
    next_level_xp: int


def compute_level_progress(total_xp: int | float, *, base_level: int = LEVEL_BASE) -> LevelProgress:
    """Renvoie (niveau, XP dans le niveau, XP requise pour le niveau suivant).

    Accepte une XP fractionnaire : la troncature vers l'entier n'a lieu que sur `current_xp`.
    """
    if total_xp < 0:
        raise ValueError("XP négative interdite")

    level = base_level
    required = LEVEL_STEP_XP
    remaining = total_xp
    while remaining >= required:
        remaining -= required
        level += 1
        required += LEVEL_STEP_XP

    return LevelProgress(level=level, current_xp=math.floor(remaining), next_level_xp=required)


def xp_for_level(level: int, *, base_level: int = LEVEL_BASE) -> int:
    """Retourne l'XP cumulée nécessaire pour atteindre `level` (0 pour le niveau de base)."""
    cleared = level - base_level
    if cleared < 0:
        raise ValueError(f"Niveau {level} inférieur au niveau de base {base_level}")
    return LEVEL_STEP_XP * cleared * (cleared + 1) // 2


def cumulative_xp(progress: LevelProgress, *, base_level: int = LEVEL_BASE) -> int:
    """Reconstruit l'XP totale à partir d'un LevelProgress (seuils franchis + XP courante)."""
    return xp_for_level(progress.level, base_level=base_level) + progress.current_xp
