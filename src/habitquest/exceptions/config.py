"""Erreurs levées au démarrage quand le .env ne permet pas de lancer HabitQuest."""

from habitquest.exceptions.base import AppError


class ConfigError(AppError):
    """Le bot ne peut pas démarrer avec la configuration fournie."""

class MissingEnvVar(ConfigError):
    """Une variable obligatoire (ex. DISCORD_TOKEN) est absente ou vide."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} doit être défini dans l'environnement ou le .env")
        self.name = name

class InvalidEnvVar(ConfigError):
    """Une variable est présente mais sa valeur ne peut pas être interprétée."""

    def __init__(self, name: str, expected: str) -> None:
        """`expected` décrit la forme acceptée, par ex. "sqlite | json | rest" pour STORAGE_BACKEND."""
        super().__init__(f"Valeur refusée pour {name}, valeurs possibles : {expected}")
        self.name = name
        self.expected = expected

class IncompleteFeatureConfig(ConfigError):
    """Un backend de stockage a été choisi sans les variables qui lui sont propres."""

    def __init__(self, feature: str, missing: list[str]) -> None:
        super().__init__(f"Impossible d'activer {feature}, il manque : {', '.join(missing)}")
        self.feature = feature
        self.missing = missing
