"""Types de données de la progression (enregistrement membre, journal d'activité, gains)."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(slots=True)
class UserRecord:
    """Compteurs d'XP persistés d'un membre sur un serveur.

    Seuls les compteurs déjà écrits sont présents ; un compteur absent se lit comme 0.
    """

    guild_id: int
    user_id: int
    counters: dict[str, int] = field(default_factory=dict)
    username: str | None = None


@dataclass(frozen=True, slots=True)
class ActivityLogEntry:
    """Ligne du journal d'activité (écrite une fois, jamais relue par le calcul d'XP)."""

    guild_id: int
    user_id: int
    activity: str
    minutes: int
    xp_gained: int
    logged_at: int


@dataclass(frozen=True, slots=True)
class ActivityGrant:
    """Résultat d'un crédit : minutes déclarées, XP accordée et compteurs touchés."""

    activity: str
    minutes: int
    xp: int
    stats: tuple[str, ...]


def normalize_counters(raw: Mapping[str, object] | None) -> dict[str, int]:
    """Convertit une ligne brute (JSON, REST) en {compteur: int}, en ignorant les valeurs vides."""
    if not raw:
        return {}
    return {str(k): int(v or 0) for k, v in raw.items()}
