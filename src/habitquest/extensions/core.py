"""Cog de base pour le bot HabitQuest : connexion, synchronisation des commandes et /ping."""

import logging
import math
import time

import discord
from discord.ext import commands

from habitquest.app.bot import HabitBot
from habitquest.exceptions.base import AppError
from habitquest.ui.progress.messages import progress_error_message
from habitquest.utils.interactions import reply_ephemeral
from habitquest.version import VERSION

log = logging.getLogger(__name__)


class Core(commands.Cog):
    """Événements de cycle de vie et commandes utilitaires."""

    def __init__(self, bot: HabitBot) -> None:
        """Initialise le cog Core avec une référence au bot."""
        self.bot = bot

    # -------------------- Lifecycle --------------------
    @commands.Cog.listener()
    async def on_ready(self) -> None:
        """Synchronise les commandes au premier on_ready et affiche les temps de chargement."""
        if self.bot.is_booted():
            return
        self.bot.set_booted(True)

        try:
            await self.bot.sync_commands()
        except Exception:
            log.exception("Erreur lors de la synchronisation des commandes")

        discord_started_at = self.bot.get_discord_started_at() or time.perf_counter()
        discord_time = (time.perf_counter() - discord_started_at) * 1000
        log.info("✅ %-53s %8.1f ms", "Préparation Discord", discord_time)

        total_time = time.perf_counter() - self.bot.get_started_at()
        log.info(
            "🤖 HabitQuest v%s opérationnel en %.2fs - Connecté en tant que %s (%d guilds)",
            VERSION,
            total_time,
            self.bot.user,
            len(self.bot.guilds),
        )

    # -------------------- Commandes --------------------
    @commands.slash_command(name="ping", description="Vérifie que le bot répond.")
    async def ping(self, ctx: discord.ApplicationContext) -> None:
        """Répond avec la latence de la passerelle Discord."""
        await self.handle_ping(ctx)

    async def handle_ping(self, ctx: discord.ApplicationContext) -> None:
        latency = self.bot.latency
        latency_ms = 0 if latency is None or math.isnan(latency) else round(latency * 1000)
        await ctx.respond(f"Pong! ({latency_ms} ms)", ephemeral=True)

    # -------------------- Errors --------------------
    @commands.Cog.listener()
    async def on_application_command_error(self, ctx: discord.ApplicationContext, error: Exception) -> None:
        """Répond toujours en ephemeral quand une commande slash échoue, même après un defer."""
        err = getattr(error, "original", error)

        if isinstance(err, AppError):
            await reply_ephemeral(ctx, progress_error_message(err))
            return

        if isinstance(err, (discord.CheckFailure, commands.CheckFailure)):
            await reply_ephemeral(ctx, "You can't use this command.")
            return

        log.error("Erreur de commande %s: %s: %s", getattr(ctx.command, "name", "?"), type(err).__name__, err, exc_info=err)
        await reply_ephemeral(ctx, "Something went wrong, try again later.")


def setup(bot: HabitBot) -> None:
    """Fonction d'initialisation du cog Core, appelée par le bot lors du chargement de l'extension."""
    bot.add_cog(Core(bot))
