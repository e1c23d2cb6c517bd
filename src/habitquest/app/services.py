"""Module définissant les services utilisés par HabitQuest, regroupés en un seul endroit pour les cogs."""

from dataclasses import dataclass, fields

from habitquest.features.progress.progress_service import ProgressService


@dataclass(slots=True)
class Services:
    """Classe regroupant les services du bot, accessibles via `bot.services`."""

    progress: ProgressService

    def __len__(self) -> int:
        """Retourne le nombre de services définis dans cette classe."""
        return len(fields(self))
