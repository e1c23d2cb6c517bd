"""Module de service pour la progression, servant de façade applicative aux cogs (commandes, vocal, pseudo)."""

from collections.abc import Mapping
from dataclasses import dataclass

import discord

from habitquest.features.progress import nickname
from habitquest.features.progress.catalog import StatSchema
from habitquest.features.progress.handler import LogResult, ProgressCommandHandler, StatsSnapshot
from habitquest.features.progress.ledger import UserLedger
from habitquest.features.progress.voice_sessions import VoiceCredit, VoiceSessionTracker


@dataclass(slots=True)
class ProgressService:
    """Façade applicative de la progression (journal d'activités, stats, sessions vocales, pseudo)."""

    ledger: UserLedger
    handler: ProgressCommandHandler
    voice: VoiceSessionTracker
    announcement_channel_id: int | None = None

    @property
    def schema(self) -> StatSchema:
        """Schéma de stats du déploiement."""
        return self.ledger.schema

    @property
    def backend(self) -> str:
        """Nom du backend de stockage utilisé."""
        return self.ledger.store.name

    # -------------------------- fonctions synchrones (à lancer dans un thread) --------------------------

    def log_activities(
        self,
        guild_id: int,
        user_id: int,
        username: str | None,
        minutes_by_activity: Mapping[str, int | None],
    ) -> LogResult:
        """Crédite les minutes déclarées via /log et retourne le détail des gains."""
        return self.handler.log_activities(guild_id, user_id, username, minutes_by_activity)

    def stats(self, guild_id: int, user_id: int, username: str) -> StatsSnapshot:
        """Retourne le détail des niveaux d'un membre, sans rien écrire."""
        return self.handler.stats(guild_id, user_id, username)

    def voice_membership_change(
        self,
        guild_id: int,
        user_id: int,
        before_channel_id: int | None,
        after_channel_id: int | None,
    ) -> VoiceCredit | None:
        """Transmet un changement de salon vocal au suivi de sessions."""
        return self.voice.on_membership_change(guild_id, user_id, before_channel_id, after_channel_id)

    # -------------------------- fonctions asynchrones --------------------------

    async def update_nickname(self, member: discord.Member, level: int) -> nickname.NicknameOutcome:
        """Réécrit le pseudo du membre avec son niveau total."""
        return await nickname.apply_level_nickname(member, level)
