"""Module définissant les extensions à charger pour le bot HabitQuest."""

from typing import Final

EXTENSIONS: Final[tuple[str, ...]] = (
    "habitquest.extensions.core",
    "habitquest.extensions.progress",
    "habitquest.extensions.progress_voice",
)
