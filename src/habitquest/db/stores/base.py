"""Interface commune des backends de stockage de la progression (SQLite, fichier JSON, API REST)."""

from typing import Protocol

from habitquest.features.progress.models import ActivityLogEntry, UserRecord


class LedgerStore(Protocol):
    """Capacités attendues d'un backend de stockage.

    Toute panne propre au backend (connexion, réponse invalide, fichier illisible)
    doit être convertie en `StoreUnavailable`.
    """

    name: str

    def get_or_create(self, guild_id: int, user_id: int, username: str | None = None) -> UserRecord:
        """Retourne l'enregistrement du membre, en le créant avec tous les compteurs à 0 si besoin."""
        ...

    def accumulate(self, guild_id: int, user_id: int, counter: str, delta: int) -> int:
        """Ajoute `delta` au compteur de façon atomique et retourne la nouvelle valeur."""
        ...

    def read_all(self, guild_id: int, user_id: int) -> dict[str, int]:
        """Retourne {compteur: xp} sans rien créer ({} si le membre est inconnu)."""
        ...

    def append_log(self, entry: ActivityLogEntry) -> None:
        """Ajoute une ligne au journal d'activité."""
        ...
