"""Module principal du bot HabitQuest, définissant la classe HabitBot et ses fonctionnalités de base."""

import time
from typing import Any

import discord
from discord.ext import commands

from habitquest.app.services import Services
from habitquest.exceptions.internal import ServicesNotInitialized


class HabitBot(commands.Bot):
    """Bot HabitQuest, héritant de commands.Bot et portant les services applicatifs."""

    def __init__(self, *, intents: discord.Intents, **options: Any) -> None:
        """Initialise le bot avec les intentions et options spécifiées ; les services sont branchés ensuite."""
        super().__init__(command_prefix=commands.when_mentioned, intents=intents, **options)

        self._booted: bool = False
        self._started_at: float = time.perf_counter()
        self._discord_started_at: float | None = None
        self.services: Services | None = None

    def set_started_at(self, timestamp: float) -> None:
        """Définit le timestamp de démarrage du bot, utilisé pour mesurer les temps de chargement."""
        self._started_at = timestamp

    def get_started_at(self) -> float:
        """Retourne le timestamp de démarrage du bot."""
        return self._started_at

    def set_booted(self, value: bool) -> None:
        """Définit l'état de démarrage du bot, indiquant s'il a déjà été prêt ou non."""
        self._booted = value

    def is_booted(self) -> bool:
        """Retourne True si le bot a déjà été prêt, False sinon."""
        return self._booted

    def set_discord_started_at(self, timestamp: float) -> None:
        """Définit le timestamp de connexion à Discord."""
        self._discord_started_at = timestamp

    def get_discord_started_at(self) -> float | None:
        """Retourne le timestamp de connexion à Discord, ou None s'il n'a pas encore été défini."""
        return self._discord_started_at

    def require_services(self) -> Services:
        """Retourne les services, ou lève ServicesNotInitialized s'ils n'ont pas été branchés."""
        if self.services is None:
            raise ServicesNotInitialized()
        return self.services
