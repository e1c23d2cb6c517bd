"""Cog des commandes de progression : /log pour déclarer des minutes d'activité, /stats pour consulter ses niveaux.

Les appels au stockage sont faits dans un thread (asyncio.to_thread) pour ne pas bloquer la boucle Discord.
"""

import asyncio
import logging
from collections.abc import Mapping

import discord
from discord.ext import commands

from habitquest.app.bot import HabitBot
from habitquest.exceptions.internal import ServicesNotInitialized
from habitquest.exceptions.progress import ProgressError
from habitquest.ui.progress.messages import progress_error_message, render_log_result, render_stats

log = logging.getLogger(__name__)

_GUILD_ONLY = "This command only works on a server."


class Progress(commands.Cog):
    """Commandes /log et /stats."""

    def __init__(self, bot: HabitBot) -> None:
        """Initialise le cog avec une référence au bot et au service de progression."""
        self.bot = bot
        if bot.services is None:
            raise ServicesNotInitialized()
        self.progress = bot.services.progress

    # -------------------- /log --------------------
    @commands.slash_command(name="log", description="Log minutes spent on your habits.")
    @discord.option("workout", int, description="Workout minutes (Soma)", min_value=1, required=False)
    @discord.option("video", int, description="Educational video minutes (Knowledge, x0.7)", min_value=1, required=False)
    @discord.option("reading", int, description="Reading minutes", min_value=1, required=False)
    @discord.option("writing", int, description="Writing minutes", min_value=1, required=False)
    @discord.option("meditation", int, description="Meditation minutes (Perception)", min_value=1, required=False)
    @discord.option("background_med", int, description="Background meditation minutes (Perception, x0.2)", min_value=1, required=False)
    @discord.option("work", int, description="Work minutes", min_value=1, required=False)
    @discord.option("agility", int, description="Agility training minutes (Soma)", min_value=1, required=False)
    @discord.option("strength", int, description="Strength training minutes (Soma)", min_value=1, required=False)
    async def log_command(
        self,
        ctx: discord.ApplicationContext,
        workout: int | None = None,
        video: int | None = None,
        reading: int | None = None,
        writing: int | None = None,
        meditation: int | None = None,
        background_med: int | None = None,
        work: int | None = None,
        agility: int | None = None,
        strength: int | None = None,
    ) -> None:
        await self.handle_log(
            ctx,
            {
                "workout": workout,
                "video": video,
                "reading": reading,
                "writing": writing,
                "meditation": meditation,
                "background_med": background_med,
                "work": work,
                "agility": agility,
                "strength": strength,
            },
        )

    async def handle_log(self, ctx: discord.ApplicationContext, minutes_by_activity: Mapping[str, int | None]) -> None:
        """Valide la requête, crédite les activités puis met à jour le pseudo de l'auteur."""
        guild = ctx.guild
        if guild is None:
            await ctx.respond(_GUILD_ONLY, ephemeral=True)
            return

        # Les erreurs de saisie sont signalées avant tout accès au stockage.
        try:
            self.progress.handler.requested_minutes(minutes_by_activity)
        except ProgressError as e:
            await ctx.respond(progress_error_message(e), ephemeral=True)
            return

        await ctx.defer()
        author = ctx.author
        try:
            result = await asyncio.to_thread(
                self.progress.log_activities,
                guild.id,
                author.id,
                author.name,
                minutes_by_activity,
            )
        except ProgressError as e:
            log.warning("/log: échec (guild_id=%s, user_id=%s): %s", guild.id, author.id, e)
            await ctx.followup.send(progress_error_message(e), ephemeral=True)
            return

        if getattr(author, "guild", None) is not None:
            await self.progress.update_nickname(author, result.progress.level)

        await ctx.followup.send(render_log_result(result, self.progress.schema))

    # -------------------- /stats --------------------
    @commands.slash_command(name="stats", description="Show your levels (or another member's).")
    @discord.option("user", discord.Member, description="Member to inspect (defaults to you)", required=False)
    async def stats_command(self, ctx: discord.ApplicationContext, user: discord.Member | None = None) -> None:
        await self.handle_stats(ctx, user)

    async def handle_stats(self, ctx: discord.ApplicationContext, user: discord.Member | None = None) -> None:
        """Affiche le niveau total et le niveau de chaque stat, sans rien écrire."""
        guild = ctx.guild
        if guild is None:
            await ctx.respond(_GUILD_ONLY, ephemeral=True)
            return

        target = user or ctx.author
        await ctx.defer()
        try:
            snapshot = await asyncio.to_thread(self.progress.stats, guild.id, target.id, target.name)
        except ProgressError as e:
            log.warning("/stats: échec (guild_id=%s, user_id=%s): %s", guild.id, target.id, e)
            await ctx.followup.send(progress_error_message(e), ephemeral=True)
            return

        await ctx.followup.send(render_stats(snapshot))


def setup(bot: HabitBot) -> None:
    """Fonction d'initialisation du cog Progress, appelée par le bot lors du chargement de l'extension."""
    bot.add_cog(Progress(bot))
