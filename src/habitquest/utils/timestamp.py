"""Utilitaires pour la gestion des timestamps (secondes et millisecondes depuis l'époque Unix)."""

from datetime import UTC, datetime


def now_ts() -> int:
    """Retourne le timestamp actuel en secondes depuis l'époque Unix."""
    return int(datetime.now(UTC).timestamp())

def now_ms() -> int:
    """Retourne le timestamp actuel en millisecondes depuis l'époque Unix."""
    return int(datetime.now(UTC).timestamp() * 1000)

def elapsed_minutes(start_ms: int, end_ms: int) -> int:
    """Retourne le nombre de minutes entières écoulées entre deux timestamps en millisecondes."""
    if end_ms < start_ms:
        return 0
    return (end_ms - start_ms) // 60_000
