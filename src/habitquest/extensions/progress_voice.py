"""Cog de l'XP vocale : le temps passé dans un salon vocal suivi est crédité en XP Work à la sortie.

À la fermeture d'une session créditée, le pseudo du membre est mis à jour
et une annonce est postée dans le salon configuré.
"""

import asyncio
import logging

import discord
from discord.ext import commands

from habitquest.app.bot import HabitBot
from habitquest.exceptions.internal import ServicesNotInitialized
from habitquest.exceptions.progress import StoreUnavailable
from habitquest.features.progress.voice_sessions import VoiceCredit
from habitquest.ui.progress.messages import render_voice_announcement

log = logging.getLogger(__name__)


class ProgressVoice(commands.Cog):
    """Suivi des sessions vocales."""

    def __init__(self, bot: HabitBot) -> None:
        """Initialise le cog avec une référence au bot et au service de progression."""
        self.bot = bot
        if bot.services is None:
            raise ServicesNotInitialized()
        self.progress = bot.services.progress

    def cog_unload(self) -> None:
        """Oublie les sessions ouvertes lors du déchargement du cog (elles ne sont pas créditées)."""
        dropped = self.progress.voice.discard_all()
        if dropped:
            log.info("XP vocal: %s session(s) ouverte(s) abandonnée(s) au déchargement.", dropped)

    def _pick_announcement_channel(self, guild: discord.Guild) -> discord.abc.Messageable | None:
        """Retourne le salon d'annonce configuré s'il existe et si le bot peut y écrire."""
        channel_id = self.progress.announcement_channel_id
        if not channel_id:
            return None
        channel = guild.get_channel(channel_id)
        if channel is None:
            log.debug("XP vocal: salon d'annonce introuvable (guild_id=%s, channel_id=%s)", guild.id, channel_id)
            return None

        me = getattr(guild, "me", None)
        if me is not None and not channel.permissions_for(me).send_messages:
            return None
        return channel

    async def announce(self, member: discord.Member, source: discord.abc.GuildChannel | None, credit: VoiceCredit) -> None:
        """Poste l'annonce de gain dans le salon configuré ; les erreurs Discord sont journalisées."""
        channel = self._pick_announcement_channel(member.guild)
        if channel is None:
            return

        text = render_voice_announcement(
            member.name,
            credit.minutes,
            getattr(source, "name", "voice"),
            credit.progress,
        )
        try:
            await channel.send(text, allowed_mentions=discord.AllowedMentions.none())
        except discord.Forbidden:
            log.warning(
                "XP vocal: permissions insuffisantes pour envoyer le message (guild_id=%s, channel_id=%s)",
                member.guild.id,
                getattr(channel, "id", None),
            )
        except discord.HTTPException:
            log.warning(
                "XP vocal: échec d'envoi du message (HTTPException) (guild_id=%s, channel_id=%s)",
                member.guild.id,
                getattr(channel, "id", None),
            )

    @commands.Cog.listener()
    async def on_voice_state_update(self, member: discord.Member, before: discord.VoiceState, after: discord.VoiceState) -> None:
        """Ouvre ou ferme la session vocale du membre selon le salon quitté et le salon rejoint."""
        if member.bot or member.guild is None:
            return

        before_id = getattr(before.channel, "id", None)
        after_id = getattr(after.channel, "id", None)
        if before_id == after_id:
            return

        try:
            credit = await asyncio.to_thread(
                self.progress.voice_membership_change,
                member.guild.id,
                member.id,
                before_id,
                after_id,
            )
        except StoreUnavailable as e:
            log.warning(
                "XP vocal: crédit perdu, stockage indisponible (guild_id=%s, user_id=%s): %s",
                member.guild.id,
                member.id,
                e,
            )
            return
        except Exception:
            log.exception(
                "XP vocal: erreur inattendue sur voice_state_update (guild_id=%s, user_id=%s)",
                member.guild.id,
                member.id,
            )
            return

        if credit is None:
            return

        try:
            await self.progress.update_nickname(member, credit.progress.level)
            await self.announce(member, before.channel, credit)
        except Exception:
            log.exception("XP vocal: erreur après crédit (guild_id=%s, user_id=%s)", member.guild.id, member.id)


def setup(bot: HabitBot) -> None:
    """Fonction d'initialisation du cog ProgressVoice, appelée par le bot lors du chargement de l'extension."""
    bot.add_cog(ProgressVoice(bot))
