"""Module de définition des exceptions liées à la progression (XP, stats, stockage)."""

from habitquest.exceptions.base import AppError


class ProgressError(AppError):
    """Base de toutes les erreurs liées à la progression."""

# ---------------- erreurs techniques ----------------
class StoreUnavailable(ProgressError):
    """Le stockage (SQLite, JSON, REST) n'a pas pu répondre correctement."""

    def __init__(self, backend: str, detail: str = "") -> None:
        """Initialise l'exception avec le nom du backend et un détail technique optionnel."""
        message = f"Stockage {backend} indisponible."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.backend = backend
        self.detail = detail


# ---------------- erreurs utilisateur ----------------
class NoActivitySpecified(ProgressError):
    """Aucune activité avec des minutes positives n'a été fournie."""

    def __init__(self) -> None:
        """Initialise l'exception sans attributs supplémentaires, le message est générique."""
        super().__init__("Aucune activité renseignée.")

class InvalidMinutes(ProgressError):
    """Un nombre de minutes négatif a été fourni pour une activité."""

    def __init__(self, activity: str, minutes: int) -> None:
        """Initialise l'exception avec l'activité et la valeur refusée."""
        super().__init__(f"Minutes invalides pour {activity}: {minutes}.")
        self.activity = activity
        self.minutes = minutes

class UnknownActivity(ProgressError):
    """L'activité demandée n'existe pas dans le schéma de stats configuré."""

    def __init__(self, activity: str) -> None:
        """Initialise l'exception avec le nom d'activité inconnu."""
        super().__init__(f"L'activité {activity} n'est pas suivie.")
        self.activity = activity

class UnknownStat(ProgressError):
    """Le compteur demandé n'existe pas dans le schéma de stats configuré."""

    def __init__(self, stat: str) -> None:
        """Initialise l'exception avec le nom du compteur inconnu."""
        super().__init__(f"La stat {stat} n'existe pas.")
        self.stat = stat
