"""Module pour la gestion de la version du bot HabitQuest.

Définit une constante VERSION utilisable dans tout le projet.
"""
from typing import Final

VERSION: Final[str] = "0.3.0"
