"""Module contenant la base pour les exceptions personnalisées de l'application HabitQuest."""

class AppError(Exception):
    """Classe de base pour les exceptions personnalisées de l'application HabitQuest.

    Toutes les exceptions spécifiques à l'application héritent de cette classe,
    ce qui permet de toutes les attraper d'un coup avec `AppError`.
    """
